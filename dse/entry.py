"""Actions, connectors and states of the Dynamic Script Engine plugin.

``build_entry()`` is the whole plugin UI in one pass: three categories,
the built-in plugin states, and the script actions in the order the host
should list them.

Most script actions come as an action/connector pair built from the same
field list.  The connector is registered first; the action then continues
on a deep copy and gains the "create state at startup" fields, which
connectors never have.
"""

import logging

from dse.framework.entry_builder import ManifestBuilder
from dse.framework.entry_schema import copy_fields

log = logging.getLogger("dse.entry")

# Spacing characters the host renders verbatim in action formats.
EN = "\u2000"  # en quad
EM = "\u2001"  # em quad

SCOPE_CHOICES = ["Shared", "Private"]
SAVE_CHOICES = ["No", "Fixed\nValue", "Custom\nExpression",
                "Use Action's\nExpression"]


# ── Shared fragments ─────────────────────────────────────────────────
# Each returns the format text for the fields it appends; placeholder
# numbers continue from the current length of ``data``.


def make_common_data(b, id):
    """Start an action with its State Name field."""
    fmt = "State\nName{0}"
    data = [b.text(id + ".name", "State Name")]
    return fmt, data


def append_scope_data(b, id, data, default_scope="Shared"):
    i = len(data)
    fmt = " Engine\nInstance{%d}" % i
    data.append(
        b.choice(id + ".scope", "Engine Instance", SCOPE_CHOICES,
                 default_scope))
    return fmt


def append_save_value_data(b, id, data):
    i = len(data)
    fmt = " | Create State\n| %sat Startup{%d} Default\nValue/Expr{%d}" % (
        EM, i, i + 1)
    data.append(b.choice(id + ".save", "Create at Startup", SAVE_CHOICES))
    data.append(b.text(id + ".default", "Default Value/Expression"))
    return fmt


# ── Script actions ───────────────────────────────────────────────────


def add_eval_action(b, category, name):
    id = "script.eval"
    short = b.build_info.short_name
    descript = (
        short + ": Evaluate an Expression. Evaluation result, if any, is "
        "stored in the named State value.\n"
        "Any JS is valid here, from simple math to string formatting to "
        "short scripts. TP State and Value macros can be embedded.")
    fmt, data = make_common_data(b, id)
    fmt += "Evaluate\nExpression{%d}" % len(data)
    data.append(b.text(id + ".expr", "Expression"))
    fmt += append_scope_data(b, id, data)
    b.add_connector(id, name, descript, fmt, data, category)

    data = copy_fields(data)
    fmt += append_save_value_data(b, id, data)
    b.add_action(id, name, descript, fmt, data, category)


def add_script_action(b, category, name):
    """Load a script file.  No connector: too much file I/O per slider move."""
    id = "script.load"
    short = b.build_info.short_name
    descript = (
        short + ": Load and Run a Script. Evaluation result, if any, is "
        "stored in the named State value.\n"
        "An optional expression can be appended to the file contents, for "
        "example to run a function with dynamic value arguments. The "
        "expression must follow JS syntax rules (quote all strings).")
    fmt, data = make_common_data(b, id)
    i = len(data)
    fmt += "Script\n%sFile{%d} Append\nExpression{%d}" % (EN, i, i + 1)
    data.append(b.file(id + ".file", "Script File"))
    data.append(b.text(id + ".expr", "Append Expression", "run([arguments])"))
    fmt += append_scope_data(b, id, data, "Private")
    fmt += append_save_value_data(b, id, data)
    b.add_action(id, name, descript, fmt, data, category)


def add_module_action(b, category, name):
    id = "script.import"
    short = b.build_info.short_name
    descript = (
        short + ": Import a JavaScript Module. Modules can load other "
        "modules and are cached for improved performance.\n"
        "Module properties are accessed via the alias (like in JS). An "
        "optional JavaScript expression can be evaluated after the import, "
        "eg. to run a function with dynamic value arguments.")
    fmt, data = make_common_data(b, id)
    i = len(data)
    fmt += ("import {*}\nfrom (file){%d} as\n(alias){%d} and evaluate\n"
            "expression{%d}" % (i, i + 1, i + 2))
    data.append(b.file(id + ".file", "Module File"))
    data.append(b.text(id + ".alias", "Module Alias", "M"))
    data.append(b.text(id + ".expr", "Expression", "M.run([arguments])"))
    fmt += append_scope_data(b, id, data, "Private")
    b.add_connector(id, name, descript, fmt, data, category)

    data = copy_fields(data)
    fmt += append_save_value_data(b, id, data)
    b.add_action(id, name, descript, fmt, data, category)


def add_update_action(b, category, name):
    id = "script.update"
    short = b.build_info.short_name
    descript = (
        short + ": Update an Existing Instance Expression.\n"
        "Use this action as a quick way to update an existing DSE instance "
        "with the same name. For example when using a script from several "
        "places it may be simpler to have the main definition only once.")
    fmt, data = make_common_data(b, id)
    fmt += "Evaluate\nExpression{%d}" % len(data)
    data.append(b.text(id + ".expr", "Expression"))
    b.add_action(id, name, descript, fmt, data, category)
    b.add_connector(id, name, descript, fmt, copy_fields(data), category)


def add_single_shot_action(b, category, name):
    """Anonymous expression/script/module run which creates no State."""
    id = "script.oneshot"
    short = b.build_info.short_name
    descript = (
        short + ": Run a One-Time/Anonymous Expression or Script/Module "
        "function.\n"
        "This action does not create a State. It is meant for running code "
        "which does not return any value. Otherwise can be used the same as "
        "\"Evaluate,\" \"Load\" and \"Module\" actions.")
    fmt = ("Action\nType{0} Evaluate\nExpression{1} File\n(if req'd){2} "
           "Module\nalias (if req'd){3}")
    data = [
        b.choice(id + ".type", "Script Type", ["Expression", "Module"]),
        b.text(id + ".expr", "Expression"),
        b.file(id + ".file", "Script File"),
        b.text(id + ".alias", "Module Alias", "M"),
    ]
    b.add_connector(id, name, descript, fmt, data, category)

    # The action can also run script files.
    data = copy_fields(data)
    data[0].choices = ["Expression", "Script", "Module"]
    fmt += append_scope_data(b, id, data)
    b.add_action(id, name, descript, fmt, data, category)


def add_system_actions(b, category):
    id = "plugin.instance"
    short = b.build_info.short_name
    descript = (
        short + ": Plugin Actions. Choose an action to perform and which "
        "script instance(s) it should affect. \n"
        "'Delete Instance' removes the corresponding State from TP and any "
        "associated Private Engine. `Set State Value` updates the TP State. "
        "'Reset Engine' means setting the global script environment back "
        "to default.")
    data = [
        b.choice(id + ".action", "Action to Perform",
                 ["Delete Instance", "Set State Value",
                  "Reset Engine Environment"], ""),
        b.choice(id + ".name", "Instance for Action",
                 ["[ no instances created ]"], ""),
        b.text(id + ".value", "Set to Value"),
    ]
    b.add_action(id, "Plugin Actions", descript,
                 "Action: {0} Instance(s): {1} Value: {2} (if required)",
                 data, category)


# ── Document ─────────────────────────────────────────────────────────


def add_plugin_states(b, category):
    short = b.build_info.short_name
    b.add_state(category, "createdStatesList",
                short + ": List of created named instances")
    b.add_state(category, "lastError", short + ": Last script instance error")
    b.add_state(category, "errorCount",
                short + ": Cumulative script error count")


def build_entry(build_info, config, dev_mode=False):
    """Build the complete manifest document.

    Returns:
        ManifestDocument ready for ``to_json()``.
    """
    b = ManifestBuilder(build_info, config, dev_mode=dev_mode)

    actions = b.add_category("actions", build_info.short_name)
    plugin = b.add_category("plugin", "Plugin")
    b.add_category("values", "Dynamic Values")

    add_plugin_states(b, plugin)

    add_eval_action(b, actions, "Evaluate Expression")
    add_script_action(b, actions, "Load Script File")
    add_module_action(b, actions, "Import Module File")
    add_update_action(b, actions, "Update Existing Instance")
    add_single_shot_action(b, actions, "Anonymous (One-Time) Script")
    add_system_actions(b, actions)

    log.info("Built entry for %s %s: %d actions, %d connectors",
             build_info.plugin_id, build_info.version_str,
             len(actions.actions), len(actions.connectors))
    return b.document
