"""Runtime configuration for version resolution.

Precedence for the placeholder warning suppression flag:
1. Explicit override passed to ``Config`` (or set later on it)
2. DOTVERSION_SUPPRESS_VAR_FOUND_WARNING environment variable, read on every check
3. YAML config file (DOTVERSION_CONFIG or the default locations)
4. Built-in default (warnings enabled)
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from .constants import Constants

logger = logging.getLogger(__name__)


def parse_bool(value: Any) -> bool:
    """Interpret a config or environment value as a boolean.

    Accepts real booleans and the strings true/yes/y/on/1 in any case.
    Anything else, including None, is False.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in Constants.TRUTHY_VALUES


def _candidate_config_paths() -> List[str]:
    explicit = os.environ.get(Constants.ENV_CONFIG)
    if explicit and explicit.strip():
        return [os.path.expanduser(explicit.strip())]
    return [os.path.expanduser(p) for p in Constants.DEFAULT_CONFIG_LOCATIONS]


def load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the first readable YAML config file.

    Returns an empty dict when no file exists or the file is not a mapping.
    Unreadable or malformed files are logged and ignored.
    """
    paths = [path] if path else _candidate_config_paths()
    for candidate in paths:
        if not os.path.isfile(candidate):
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config file %s: %s", candidate, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: top level is not a mapping", candidate)
            return {}
        logger.debug("Loaded config from %s", candidate)
        return data
    return {}


class Config:
    """Configuration held by a ``VersionResolver``.

    The suppression flag is evaluated lazily by ``suppress_var_found_warning``
    so that toggling the environment variable affects warnings emitted after
    the change. There is no synchronization around these reads.
    """

    def __init__(
        self,
        suppress_var_found_warning: Optional[bool] = None,
        search_path: Optional[List[str]] = None,
        file_values: Optional[Dict[str, Any]] = None,
    ):
        self.suppress_override = suppress_var_found_warning
        self._file_values = dict(file_values or {})
        extra = search_path if search_path is not None else self._file_values.get("search_path")
        if extra is None:
            extra = []
        elif isinstance(extra, str):
            extra = [extra]
        self.search_path: List[str] = [os.path.expanduser(str(p)) for p in extra]

    @classmethod
    def from_file(cls, path: Optional[str] = None, **overrides: Any) -> "Config":
        """Build a Config from the YAML file at ``path`` or the default locations."""
        return cls(file_values=load_yaml_config(path), **overrides)

    def suppress_var_found_warning(self) -> bool:
        """Return True when unresolved placeholder warnings are suppressed."""
        if self.suppress_override is not None:
            return bool(self.suppress_override)
        raw = os.environ.get(Constants.ENV_SUPPRESS_VAR_FOUND_WARNING)
        if raw is not None:
            return parse_bool(raw)
        return parse_bool(self._file_values.get("suppress_var_found_warning"))
