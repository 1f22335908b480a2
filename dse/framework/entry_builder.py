"""Assemble the manifest tree: id naming, format strings, registration.

Id scheme (the host looks things up by these exact strings)::

    <pluginId>.cat.<slug>      categories
    <pluginId>.act.<name>      actions, and every data field
    <pluginId>.conn.<name>     connectors
    <pluginId>.state.<name>    built-in plugin states
    dsep.<name>                states created by scripts at runtime

Data fields live under ``.act.`` even when they belong to a connector;
the host resolves connector data through the action namespace.

Action formats are written with positional ``{N}`` placeholders and
rendered against the data list, ``{N}`` becoming ``{$<data[N].id>$}``.
"""

import logging
import re

from dse.framework.entry_schema import (
    Action,
    Category,
    ChoiceField,
    Connector,
    FileField,
    ManifestDocument,
    NumberField,
    State,
    TextField,
)

log = logging.getLogger("dse.entry_builder")

DYNAMIC_STATE_PREFIX = "dsep."

_PLACEHOLDER_RE = re.compile(r"{([0-9]+)}")


# ── Naming ───────────────────────────────────────────────────────────


def category_id(plugin_id, slug):
    return "%s.cat.%s" % (plugin_id, slug)


def action_id(plugin_id, name):
    return "%s.act.%s" % (plugin_id, name)


def connector_id(plugin_id, name):
    return "%s.conn.%s" % (plugin_id, name)


def field_id(plugin_id, name):
    return "%s.act.%s" % (plugin_id, name)


def state_id(plugin_id, name):
    return "%s.state.%s" % (plugin_id, name)


def dynamic_state_id(name):
    """Id of a state created by a script instance called ``name``."""
    return DYNAMIC_STATE_PREFIX + name


def placeholder_token(field):
    """Host macro that embeds a data field's value in a format string."""
    return "{$%s$}" % field.id


def render_format(template, tokens):
    """Replace ``{N}`` placeholders in ``template`` with ``tokens[N]``.

    Placeholders without a matching token, or written with leading zeros
    (``{00}``), are left as they are, so a template can be rendered before
    all of its fields exist.  A single string is treated as a one-item list.
    """
    if isinstance(tokens, str):
        tokens = [tokens]
    else:
        tokens = list(tokens)

    def _sub(m):
        index = int(m.group(1))
        if m.group(1) == str(index) and index < len(tokens):
            return tokens[index]
        return m.group(0)

    return _PLACEHOLDER_RE.sub(_sub, str(template))


# ── Builder ──────────────────────────────────────────────────────────


class ManifestBuilder:
    """Owns one ManifestDocument for the duration of a generation pass.

    Usage::

        builder = ManifestBuilder(build_info, config)
        cat = builder.add_category("actions", "DSE")
        data = [builder.text("thing.name", "Name")]
        builder.add_action("thing", "Do It", "Does it.", "Name{0}", data,
                           category=cat)
        doc = builder.document

    Registered actions and connectors keep the data list they were given.
    A caller that goes on extending a list after registering it must work
    on ``copy_fields(data)`` instead.
    """

    def __init__(self, build_info, config, dev_mode=False):
        self.build_info = build_info
        self.config = config
        self.dev_mode = dev_mode
        self.plugin_id = build_info.plugin_id

        if dev_mode:
            start_cmd = start_cmd_windows = ""
        else:
            start_cmd = config.expand(config.start_commands["posix"],
                                      build_info)
            start_cmd_windows = config.expand(
                config.start_commands["windows"], build_info)

        self.document = ManifestDocument(
            sdk=config.sdk,
            version=build_info.version_num,
            name=build_info.short_name,
            id=self.plugin_id,
            plugin_start_cmd=start_cmd,
            plugin_start_cmd_windows=start_cmd_windows,
            configuration=config.configuration,
        )
        self.document.settings.extend(config.settings)

    # ── ids ──

    def category_id(self, slug):
        return category_id(self.plugin_id, slug)

    def action_id(self, name):
        return action_id(self.plugin_id, name)

    def connector_id(self, name):
        return connector_id(self.plugin_id, name)

    def field_id(self, name):
        return field_id(self.plugin_id, name)

    def state_id(self, name):
        return state_id(self.plugin_id, name)

    # ── data fields ──

    def text(self, name, label, default=""):
        return TextField(self.field_id(name), label, default)

    def file(self, name, label, default=""):
        return FileField(self.field_id(name), label, default)

    def choice(self, name, label, choices, default=None):
        return ChoiceField(self.field_id(name), label, choices, default)

    def number(self, name, label, default, min_value, max_value,
               allow_decimals=True):
        return NumberField(self.field_id(name), label, default, min_value,
                           max_value, allow_decimals)

    # ── registration ──

    def add_category(self, slug, name):
        icon = self.config.expand(self.config.icon, self.build_info)
        return self.document.add_category(
            Category(self.category_id(slug), name, icon))

    def add_state(self, category, name, desc, default=""):
        state = State(self.state_id(name), desc, default)
        category.states.append(state)
        return state

    def render(self, template, data):
        return render_format(template, [placeholder_token(f) for f in data])

    def add_action(self, name, title, description, template, data,
                   category, hold=False):
        action = Action(
            id=self.action_id(name),
            name=title,
            description=description,
            format=self.render(template, data),
            data=data,
            prefix=self.build_info.short_name,
            hold=hold,
        )
        category.actions.append(action)
        log.debug("Added action %s (%d fields)", action.id, len(data))
        return action

    def add_connector(self, name, title, description, template, data,
                      category):
        connector = Connector(
            id=self.connector_id(name),
            name=title,
            description=description,
            format=self.render(template, data),
            data=data,
        )
        category.connectors.append(connector)
        log.debug("Added connector %s (%d fields)", connector.id, len(data))
        return connector
