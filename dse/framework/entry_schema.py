"""Object model of the ``entry.tp`` manifest.

Every node knows how to turn itself into the plain dict the host reads;
``ManifestDocument.to_json()`` dumps the whole tree.  Key order in those
dicts is part of the host contract and matches what the host's own tools
emit.

Data fields are a small family of classes sharing an ``id``/``label``
header, one per host field type::

    TextField    type "text"
    FileField    type "file"
    ChoiceField  type "choice"  + valueChoices
    NumberField  type "number"  + allowDecimals, minValue, maxValue
"""

import copy
import json

from dse.framework.errors import ManifestError


def _default_str(value):
    """Render a default value the way the host expects it: always a string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ── Data fields ──────────────────────────────────────────────────────


class DataField:
    """Base for action/connector data members."""

    type = None

    __slots__ = ("id", "label", "default")

    def __init__(self, id, label="", default=""):
        self.id = id
        self.label = label
        self.default = _default_str(default)

    def to_dict(self):
        d = {
            "id": self.id,
            "type": self.type,
            "label": self.label,
            "default": self.default,
        }
        d.update(self._extra())
        return d

    def _extra(self):
        return {}

    def __eq__(self, other):
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.id)


class TextField(DataField):
    type = "text"
    __slots__ = ()


class FileField(DataField):
    type = "file"
    __slots__ = ()


class ChoiceField(DataField):
    """Drop-down choice.  Defaults to the first choice when none is given."""

    type = "choice"
    __slots__ = ("choices",)

    def __init__(self, id, label, choices, default=None):
        choices = list(choices)
        if default is None:
            default = choices[0] if choices else ""
        super().__init__(id, label, default)
        self.choices = choices

    def _extra(self):
        return {"valueChoices": list(self.choices)}


class NumberField(DataField):
    type = "number"
    __slots__ = ("min_value", "max_value", "allow_decimals")

    def __init__(self, id, label, default, min_value, max_value,
                 allow_decimals=True):
        super().__init__(id, label, default)
        self.min_value = min_value
        self.max_value = max_value
        self.allow_decimals = allow_decimals

    def _extra(self):
        return {
            "allowDecimals": self.allow_decimals,
            "minValue": self.min_value,
            "maxValue": self.max_value,
        }


def copy_fields(fields):
    """Return an independent deep copy of a data field list.

    Needed whenever an action keeps growing from a field list that was
    already handed to a connector.
    """
    return copy.deepcopy(list(fields))


# ── Entities ─────────────────────────────────────────────────────────


class Action:
    """Host-invocable action with a rendered format string."""

    __slots__ = ("id", "prefix", "name", "description", "format", "data",
                 "hold")

    def __init__(self, id, name, description, format, data, prefix="",
                 hold=False):
        self.id = id
        self.prefix = prefix
        self.name = name
        self.description = description
        self.format = format
        self.data = data
        self.hold = hold

    def to_dict(self):
        return {
            "id": self.id,
            "prefix": self.prefix,
            "name": self.name,
            "type": "communicate",
            "tryInline": True,
            "description": self.description,
            "format": self.format,
            "hasHoldFunctionality": self.hold,
            "data": [f.to_dict() for f in self.data],
        }


class Connector:
    """Slider control bound to a subset of an action's parameters."""

    __slots__ = ("id", "name", "description", "format", "data")

    def __init__(self, id, name, description, format, data):
        self.id = id
        self.name = name
        self.description = description
        self.format = format
        self.data = data

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "format": self.format,
            "data": [f.to_dict() for f in self.data],
        }


class State:
    __slots__ = ("id", "desc", "default", "type", "parent_group")

    def __init__(self, id, desc, default="", type="text", parent_group=None):
        self.id = id
        self.desc = desc
        self.default = _default_str(default)
        self.type = type
        self.parent_group = parent_group

    def to_dict(self):
        d = {
            "id": self.id,
            "type": self.type,
            "desc": self.desc,
            "default": self.default,
        }
        if self.parent_group:
            d["parentGroup"] = self.parent_group
        return d


class Setting:
    __slots__ = ("name", "desc", "type", "default", "read_only")

    def __init__(self, name, desc="", type="text", default="",
                 read_only=False):
        self.name = name
        self.desc = desc
        self.type = type
        self.default = _default_str(default)
        self.read_only = read_only

    def to_dict(self):
        return {
            "name": self.name,
            "desc": self.desc,
            "type": self.type,
            "default": self.default,
            "readOnly": self.read_only,
        }


class Category:
    """A group of states, actions and connectors shown together by the host.

    All lists are append-only; registration order is display order.
    """

    def __init__(self, id, name, imagepath=""):
        self.id = id
        self.name = name
        self.imagepath = imagepath
        self.states = []
        self.actions = []
        self.connectors = []
        self.events = []

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "imagepath": self.imagepath,
            "states": [s.to_dict() for s in self.states],
            "actions": [a.to_dict() for a in self.actions],
            "connectors": [c.to_dict() for c in self.connectors],
            "events": list(self.events),
        }


class ManifestDocument:
    """Root of the manifest tree."""

    def __init__(self, sdk, version, name, id, plugin_start_cmd="",
                 plugin_start_cmd_windows="", configuration=None):
        self.sdk = sdk
        self.version = version
        self.name = name
        self.id = id
        self.plugin_start_cmd = plugin_start_cmd
        self.plugin_start_cmd_windows = plugin_start_cmd_windows
        self.configuration = dict(configuration or {})
        self.settings = []
        self.categories = []

    def add_category(self, category):
        if self.category(category.id) is not None:
            raise ManifestError("Duplicate category id: %s" % category.id)
        self.categories.append(category)
        return category

    def category(self, category_id):
        """Return the category with this id, or None."""
        for cat in self.categories:
            if cat.id == category_id:
                return cat
        return None

    def iter_actions(self):
        for cat in self.categories:
            for action in cat.actions:
                yield cat, action

    def iter_connectors(self):
        for cat in self.categories:
            for conn in cat.connectors:
                yield cat, conn

    def to_dict(self):
        return {
            "sdk": self.sdk,
            "version": self.version,
            "name": self.name,
            "id": self.id,
            "plugin_start_cmd": self.plugin_start_cmd,
            "plugin_start_cmd_windows": self.plugin_start_cmd_windows,
            "configuration": dict(self.configuration),
            "settings": [s.to_dict() for s in self.settings],
            "categories": [c.to_dict() for c in self.categories],
        }

    def to_json(self, indent=4):
        # Non-ASCII spacing characters in formats are kept verbatim.
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
