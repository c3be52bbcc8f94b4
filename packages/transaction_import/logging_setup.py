"""Logging for ``transaction_import``.

Only the CLI configures output, through :func:`configure_logging`. Other
modules take a logger from :func:`get_logger` and never add handlers, so an
embedding application keeps control of where import diagnostics go.
"""

from __future__ import annotations

import logging
import os

ROOT_LOGGER = "transaction_import"
LEVEL_ENV_VAR = "TRANSACTION_IMPORT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def _resolve_level(name: str | None) -> int:
    name = (name or os.getenv(LEVEL_ENV_VAR) or "INFO").strip().upper()
    level = logging.getLevelName(name)
    # Unknown names come back as "Level <name>"
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None) -> None:
    """Write package log records to stderr.

    ``level`` is a level name such as ``"DEBUG"``. Without one the
    ``TRANSACTION_IMPORT_LOG_LEVEL`` variable is used, then ``INFO``. Only the
    first call has an effect.
    """

    global _handler
    if _handler is not None:
        return

    root = logging.getLogger(ROOT_LOGGER)
    for h in [h for h in root.handlers if isinstance(h, logging.NullHandler)]:
        root.removeHandler(h)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
    root.setLevel(_resolve_level(level))
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if _handler is None and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
