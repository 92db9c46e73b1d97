"""Namespace validation and ancestor walking."""

from __future__ import annotations

import inspect
import re
from typing import Any, List

from .constants import Constants

_SEGMENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class InvalidNamespaceError(ValueError):
    """Raised when a dotted namespace is malformed."""

    def __init__(self, namespace: Any):
        self.namespace = namespace
        super().__init__(f"invalid namespace: {namespace!r}")


def is_valid_namespace(name: Any) -> bool:
    """Return True when every dot-separated segment is a plain identifier."""
    if not isinstance(name, str) or not name:
        return False
    return all(_SEGMENT.match(seg) for seg in name.split(Constants.NAMESPACE_SEPARATOR))


def validate_namespace(name: Any) -> str:
    """Return ``name`` unchanged, or raise InvalidNamespaceError."""
    if not is_valid_namespace(name):
        raise InvalidNamespaceError(name)
    return name


def ancestors(name: str) -> List[str]:
    """Return the search chain for ``name``, nearest first.

    ``"a.b.c"`` gives ``["a.b.c", "a.b", "a"]``. The top-level segment is
    always included.
    """
    validate_namespace(name)
    parts = name.split(Constants.NAMESPACE_SEPARATOR)
    return [Constants.NAMESPACE_SEPARATOR.join(parts[:i]) for i in range(len(parts), 0, -1)]


def namespace_of(target: Any) -> str:
    """Derive a namespace from a string, module, class, function or instance.

    Classes and functions map to the module that defines them; other objects
    map to the module of their type.
    """
    if isinstance(target, str):
        return target
    if inspect.ismodule(target):
        return target.__name__
    module = getattr(target, "__module__", None)
    if isinstance(module, str):
        return module
    return type(target).__module__
