"""Static plugin presentation config (``plugin.yaml``).

Holds what does not change between builds: identity defaults, the host
theme colors, the start command templates and the plugin settings.  The
identity values are only fallbacks; the build-info file wins.
"""

import logging
import os

import yaml

from dse.framework.entry_schema import Setting
from dse.framework.errors import ConfigError

log = logging.getLogger("dse.config")

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "plugin.yaml")

_REQUIRED_KEYS = ("plugin", "sdk", "configuration", "start_commands", "icon")
_START_COMMAND_KEYS = ("posix", "windows")


class PluginConfig:
    """Parsed ``plugin.yaml``.

    Attributes:
        identity:       Dict with ``id``, ``short_name``, ``system_name``.
        sdk:            Host SDK/schema version.
        configuration:  Host ``configuration`` block (colors, parent category).
        start_commands: Dict with ``posix`` and ``windows`` templates.
        icon:           Category icon path template.
        settings:       List of Setting.
    """

    def __init__(self, data):
        self.identity = _mapping(data, "plugin")
        try:
            self.sdk = int(data["sdk"])
        except (TypeError, ValueError) as e:
            raise ConfigError("sdk must be an integer: %r" % (data["sdk"],)) from e
        self.configuration = _mapping(data, "configuration")
        self.start_commands = _mapping(data, "start_commands")
        missing = [k for k in _START_COMMAND_KEYS if k not in self.start_commands]
        if missing:
            raise ConfigError("start_commands is missing: %s" % ", ".join(missing))
        self.icon = data["icon"]
        self.settings = [_make_setting(s) for s in data.get("settings") or []]

    def expand(self, template, build_info):
        """Fill ``{system_name}``/``{short_name}``/``{plugin_id}`` in a template."""
        try:
            return str(template).format(
                system_name=build_info.system_name,
                short_name=build_info.short_name,
                plugin_id=build_info.plugin_id,
            )
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigError("Bad template %r: %s" % (template, e)) from e


def _mapping(data, key):
    value = data[key]
    if not isinstance(value, dict):
        raise ConfigError("%s must be a mapping" % key)
    return dict(value)


def _make_setting(entry):
    if not isinstance(entry, dict) or "name" not in entry:
        raise ConfigError("Each setting needs at least a name: %r" % (entry,))
    return Setting(
        name=entry["name"],
        desc=entry.get("desc", ""),
        type=entry.get("type", "text"),
        default=entry.get("default", ""),
        read_only=bool(entry.get("readOnly", False)),
    )


def load_plugin_config(path=None):
    """Load and check ``plugin.yaml``.  Defaults to the one shipped with dse."""
    path = path or DEFAULT_CONFIG_PATH
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError("Cannot read plugin config %s: %s" % (path, e)) from e
    except yaml.YAMLError as e:
        raise ConfigError("Invalid YAML in %s: %s" % (path, e)) from e

    if not isinstance(data, dict):
        raise ConfigError("Plugin config %s must be a mapping" % path)
    missing = [k for k in _REQUIRED_KEYS if k not in data]
    if missing:
        raise ConfigError("Plugin config %s is missing: %s"
                          % (path, ", ".join(missing)))

    log.debug("Loaded plugin config %s", path)
    return PluginConfig(data)
