"""Centralized logging helpers.

Library modules only emit records; handlers are installed by
``configure_logging`` which the CLI calls once at startup.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict

from ..constants import Constants


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` payload for structured log records.

    ``None`` values are dropped so call sites can pass optional fields freely.
    """
    return {k: v for k, v in fields.items() if v is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def _resolve_level() -> int:
    raw = os.environ.get(Constants.ENV_LOG_LEVEL, Constants.DEFAULT_LOG_LEVEL)
    level = getattr(logging, str(raw).strip().upper(), None)
    if isinstance(level, int):
        return level
    return getattr(logging, Constants.DEFAULT_LOG_LEVEL)


def configure_logging() -> None:
    """Install a stream handler on the root logger.

    Level comes from DOTVERSION_LOG_LEVEL. Calling this more than once does
    not add duplicate handlers.
    """
    root = logging.getLogger()
    if not any(getattr(h, "_dotversion", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        handler._dotversion = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(_resolve_level())
