"""Logging for the entry generator.

``setup_logging()`` configures the ``dse`` logger hierarchy with a stderr
handler.  All modules that call ``logging.getLogger("dse.xxx")`` inherit
it.  Standard output stays reserved for the manifest itself when the
generator prints to ``-``.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s — %(message)s"

_setup_done = False


class _ConsoleHandler(logging.StreamHandler):
    """StreamHandler bound to whatever ``sys.stderr`` is at emit time."""

    def emit(self, record):
        self.stream = sys.stderr
        super().emit(record)


def setup_logging(level="WARNING"):
    """Configure the ``dse`` logger hierarchy.

    Attaches a console handler to the ``dse`` logger (not root), so output
    does not depend on whatever the root logger was set to.  Calling it
    again only changes the level.
    """
    global _setup_done
    if _setup_done:
        set_log_level(level)
        return
    _setup_done = True

    logger = logging.getLogger("dse")
    if not logger.handlers:
        logger.propagate = False
        handler = _ConsoleHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    set_log_level(level)


def set_log_level(level):
    """Change the ``dse`` logger level at runtime."""
    logger = logging.getLogger("dse")
    numeric = getattr(logging, str(level).upper(), logging.WARNING)
    logger.setLevel(numeric)
