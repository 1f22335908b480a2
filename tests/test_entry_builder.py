"""Tests for dse.framework.entry_builder (naming, format rendering, builder)."""

import pytest

from dse.framework.build_info import BuildInfo
from dse.framework.entry_builder import (
    ManifestBuilder,
    action_id,
    category_id,
    connector_id,
    dynamic_state_id,
    field_id,
    placeholder_token,
    render_format,
    state_id,
)
from dse.framework.entry_schema import TextField, copy_fields
from dse.framework.errors import ManifestError
from dse.framework.plugin_config import load_plugin_config

PID = "us.paperno.max.tpp.dse"


def _make_info():
    return BuildInfo("1.2.0.1", 0x01020001, PID, "DSE", "DSE", "linux")


def _make_builder(dev_mode=False):
    return ManifestBuilder(_make_info(), load_plugin_config(),
                           dev_mode=dev_mode)


class TestRenderFormat:
    def test_positional(self):
        assert render_format("{0} and {1}", ["a", "b"]) == "a and b"

    def test_order_follows_index(self):
        assert render_format("{1}{0}", ["a", "b"]) == "ba"

    def test_out_of_range_passes_through(self):
        assert render_format("{0} {1} {2}", ["a", "b"]) == "a b {2}"

    def test_no_tokens(self):
        assert render_format("State{0}", []) == "State{0}"

    def test_repeated_index(self):
        assert render_format("{0}-{0}", ["x"]) == "x-x"

    def test_multi_digit_index(self):
        tokens = [str(i) for i in range(11)]
        assert render_format("{10}", tokens) == "10"

    def test_single_string_token(self):
        assert render_format("<{0}>", "only") == "<only>"

    def test_non_numeric_braces_untouched(self):
        assert render_format("import {*} {0}", ["M"]) == "import {*} M"

    def test_leading_zero_index_passes_through(self):
        assert render_format("{00} {01} {0}", ["a", "b"]) == "{00} {01} a"


class TestNaming:
    def test_ids(self):
        assert category_id(PID, "actions") == PID + ".cat.actions"
        assert action_id(PID, "script.eval") == PID + ".act.script.eval"
        assert connector_id(PID, "script.eval") == PID + ".conn.script.eval"
        assert state_id(PID, "lastError") == PID + ".state.lastError"

    def test_field_ids_use_action_namespace(self):
        assert field_id(PID, "script.eval.expr") == PID + ".act.script.eval.expr"

    def test_dynamic_state_id(self):
        assert dynamic_state_id("MyValue") == "dsep.MyValue"

    def test_placeholder_token(self):
        assert placeholder_token(TextField("a.b", "B")) == "{$a.b$}"


class TestManifestBuilder:
    def test_release_start_commands(self):
        doc = _make_builder().document
        assert doc.plugin_start_cmd == "sh %TP_PLUGIN_FOLDER%DSE/start.sh"
        assert doc.plugin_start_cmd_windows == '"%TP_PLUGIN_FOLDER%DSE/bin/DSE"'

    def test_dev_mode_has_no_start_commands(self):
        doc = _make_builder(dev_mode=True).document
        assert doc.plugin_start_cmd == ""
        assert doc.plugin_start_cmd_windows == ""

    def test_document_header(self):
        doc = _make_builder().document
        assert doc.sdk == 6
        assert doc.version == 0x01020001
        assert doc.name == "DSE"
        assert doc.id == PID
        assert doc.configuration["parentCategory"] == "misc"
        assert [s.name for s in doc.settings] == ["Script Files Base Directory"]

    def test_add_category(self):
        b = _make_builder()
        cat = b.add_category("actions", "DSE")
        assert cat.id == PID + ".cat.actions"
        assert cat.imagepath == "%TP_PLUGIN_FOLDER%DSE/icon.png"
        with pytest.raises(ManifestError):
            b.add_category("actions", "Again")

    def test_add_action_renders_format(self):
        b = _make_builder()
        cat = b.add_category("actions", "DSE")
        data = [b.text("t.name", "Name"), b.text("t.expr", "Expr")]
        action = b.add_action("t", "Test", "desc", "Name{0} Expr{1}", data,
                              cat)
        assert action.id == PID + ".act.t"
        assert action.prefix == "DSE"
        assert action.format == (
            "Name{$%s.act.t.name$} Expr{$%s.act.t.expr$}" % (PID, PID))
        assert cat.actions == [action]

    def test_connector_fields_stay_under_act(self):
        b = _make_builder()
        cat = b.add_category("actions", "DSE")
        conn = b.add_connector("t", "Test", "desc", "X{0}",
                               [b.text("t.expr", "Expr")], cat)
        assert conn.id == PID + ".conn.t"
        assert conn.data[0].id == PID + ".act.t.expr"

    def test_copied_fields_do_not_leak_into_connector(self):
        b = _make_builder()
        cat = b.add_category("actions", "DSE")
        data = [b.text("t.name", "Name")]
        conn = b.add_connector("t", "T", "", "N{0}", data, cat)
        data = copy_fields(data)
        data.append(b.text("t.default", "Default"))
        data[0].label = "Renamed"
        b.add_action("t", "T", "", "N{0} D{1}", data, cat)
        assert len(conn.data) == 1
        assert conn.data[0].label == "Name"

    def test_number_field(self):
        f = _make_builder().number("t.n", "N", 1, 0, 100, allow_decimals=False)
        assert f.id == PID + ".act.t.n"
        assert f.to_dict()["maxValue"] == 100

    def test_add_state(self):
        b = _make_builder()
        cat = b.add_category("plugin", "Plugin")
        state = b.add_state(cat, "lastError", "DSE: Last error")
        assert state.id == PID + ".state.lastError"
        assert cat.states == [state]
