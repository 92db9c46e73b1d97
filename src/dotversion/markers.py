"""Marker for the class or module that represents a library's version anchor.

Typically applied to a library's facade class, which then keeps its own
version around::

    from dotversion import Version, of, versioned

    @versioned
    class SwissKnife:
        VERSION: Version = of(__name__)

The marker has no runtime effect beyond setting ``__versioned__``.
"""

from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")

MARKER_ATTR = "__versioned__"


def versioned(target: T) -> T:
    """Tag ``target`` as the version anchor of its namespace and return it."""
    setattr(target, MARKER_ATTR, True)
    return target


def is_versioned(target: Any) -> bool:
    """True only when ``target`` itself was marked; subclasses do not inherit it."""
    try:
        return vars(target).get(MARKER_ATTR) is True
    except TypeError:
        return False
