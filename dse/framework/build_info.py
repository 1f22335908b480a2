"""Build information: version and plugin identity for one generator run.

The build system drops a ``version.json`` next to the generator with::

    {
        "VERSION_STR": "1.2.0.1-beta1",
        "VERSION_NUM": 16908289,
        "PLUGIN_ID": "us.paperno.max.tpp.dse",
        "SYSTEM_NAME": "DSE",
        "SHORT_NAME": "DSE",
        "PLATFORM_OS": "linux"
    }

A missing file is fine (all values then come from the command line and
``plugin.yaml``).  A missing version is not.
"""

import json
import logging
import os
from dataclasses import dataclass

from dse.framework.errors import BuildInfoError, VersionError
from dse.framework.version import pack_version

log = logging.getLogger("dse.build_info")

DEFAULT_BUILD_INFO_FILE = "version.json"


@dataclass(frozen=True)
class BuildInfo:
    version_str: str
    version_num: int
    plugin_id: str
    short_name: str
    system_name: str
    platform_os: str = ""


def load_build_info_file(path=DEFAULT_BUILD_INFO_FILE):
    """Read the build-info JSON object, or ``{}`` if the file does not exist."""
    if not os.path.isfile(path):
        log.debug("No build-info file at %s", path)
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise BuildInfoError("Cannot read build info %s: %s" % (path, e)) from e
    if not isinstance(data, dict):
        raise BuildInfoError("Build info %s must hold a JSON object" % path)
    log.debug("Loaded build info from %s", path)
    return data


def resolve_build_info(raw, version=None, identity=None, strict=False):
    """Merge build-info values, a command-line version and identity defaults.

    Args:
        raw:      Dict from load_build_info_file().
        version:  Version string given on the command line, overrides
                  ``VERSION_STR``.
        identity: Fallback ``id``/``short_name``/``system_name`` dict
                  (from plugin.yaml).
        strict:   Reject malformed version parts.

    Raises:
        VersionError: no version anywhere.
        BuildInfoError: ``VERSION_STR`` is not a string or ``VERSION_NUM``
                        is not an integer.
    """
    identity = identity or {}
    version_str = version or raw.get("VERSION_STR")
    if not version_str:
        raise VersionError(
            "No plugin version number, cannot continue. "
            "Use -v <version.number> argument.")
    if not isinstance(version_str, str):
        raise BuildInfoError(
            "VERSION_STR is not a string: %r" % (version_str,))

    # A pre-computed number only applies to the version string it came with.
    version_num = None if version else raw.get("VERSION_NUM")
    if strict:
        pack_version(version_str, strict=True)
    if version_num:
        try:
            version_num = int(version_num)
        except (TypeError, ValueError) as e:
            raise BuildInfoError(
                "VERSION_NUM is not an integer: %r" % (version_num,)) from e
    else:
        version_num = pack_version(version_str, strict=strict)

    return BuildInfo(
        version_str=version_str,
        version_num=version_num,
        plugin_id=raw.get("PLUGIN_ID") or identity.get("id", ""),
        short_name=raw.get("SHORT_NAME") or identity.get("short_name", ""),
        system_name=raw.get("SYSTEM_NAME") or identity.get("system_name", ""),
        platform_os=raw.get("PLATFORM_OS") or "",
    )
