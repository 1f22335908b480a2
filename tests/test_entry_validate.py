"""Tests for dse.framework.entry_validate."""

from dse.entry import build_entry
from dse.framework.build_info import BuildInfo
from dse.framework.entry_schema import Category, TextField
from dse.framework.entry_validate import validate_manifest
from dse.framework.plugin_config import load_plugin_config

PID = "us.paperno.max.tpp.dse"


def _make_doc():
    info = BuildInfo("1.2.0.1", 0x01020001, PID, "DSE", "DSE", "linux")
    return build_entry(info, load_plugin_config())


class TestValidateManifest:
    def test_built_manifest_is_clean(self):
        assert validate_manifest(_make_doc()) == []

    def test_field_without_placeholder(self):
        doc = _make_doc()
        _, action = next(doc.iter_actions())
        action.data.append(TextField(PID + ".act.script.eval.extra", "Extra"))
        problems = validate_manifest(doc)
        assert len(problems) == 1
        assert action.id in problems[0]

    def test_unresolved_placeholder(self):
        doc = _make_doc()
        _, conn = next(doc.iter_connectors())
        conn.format += " More{9}"
        problems = validate_manifest(doc)
        assert any("{9}" in p for p in problems)

    def test_connector_field_outside_act_namespace(self):
        doc = _make_doc()
        _, conn = next(doc.iter_connectors())
        conn.data[0].id = PID + ".conn.script.eval.name"
        conn.format = conn.format.replace(".act.script.eval.name",
                                          ".conn.script.eval.name")
        problems = validate_manifest(doc)
        assert problems == [
            "Connector %s.conn.script.eval: data field "
            "%s.conn.script.eval.name is not under %s.act." % (PID, PID, PID)
        ]

    def test_duplicate_category(self):
        doc = _make_doc()
        doc.categories.append(Category(PID + ".cat.values", "Again"))
        assert any("Duplicate category" in p for p in validate_manifest(doc))

    def test_duplicate_action(self):
        doc = _make_doc()
        cat = doc.categories[0]
        cat.actions.append(cat.actions[0])
        assert any("Duplicate action" in p for p in validate_manifest(doc))
