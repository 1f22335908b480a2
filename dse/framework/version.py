"""Packed plugin version numbers.

The host compares plugin versions as a single integer built from the
dotted version string, one byte per part::

    "1.2.0.1"       -> 0x01020001
    "1.2.0.1-beta1" -> 0x01020001   (suffix after "-" is dropped)
    "1.2"           -> 0x0102       (absent parts are not padded)
"""

import logging
import re

from dse.framework.errors import VersionError

log = logging.getLogger("dse.version")

MAX_PARTS = 4

# Leading integer of a part, the way JavaScript's parseInt() reads it.
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_PLAIN_INT_RE = re.compile(r"\d+")


def _parse_part(part, strict=False):
    """Return the integer value of one dotted version part, or None."""
    if strict:
        return int(part) if _PLAIN_INT_RE.fullmatch(part) else None
    m = _LEADING_INT_RE.match(part)
    if m is None:
        return None
    return int(m.group(1))


def version_parts(version):
    """Split a version string into its (at most 4) dotted parts, sans suffix."""
    if not version:
        return []
    return version.split("-", 1)[0].split(".")[:MAX_PARTS]


def pack_version(version, strict=False):
    """Pack a dotted version string into an integer.

    Each part is masked to 0-255 and shifted in from the right, so the
    result is only 32 bits wide when exactly four parts are given.  Keeping
    each part in 0-99 is up to the caller.

    A part without leading digits counts as 0 and is logged as a warning.
    With ``strict=True`` any part that is not a plain integer raises
    VersionError instead.
    """
    packed = 0
    for part in version_parts(version):
        value = _parse_part(part, strict)
        if value is None:
            if strict:
                raise VersionError(
                    "Malformed part %r in version %r" % (part, version))
            log.warning("Version part %r of %r is not a number, using 0",
                        part, version)
            value = 0
        packed = (packed << 8) | (value & 0xFF)
    return packed


def unpack_version(packed, parts=MAX_PARTS):
    """Expand a packed version back into a dotted string of ``parts`` bytes."""
    values = []
    for i in range(parts):
        values.append(str((packed >> (8 * (parts - 1 - i))) & 0xFF))
    return ".".join(values)
