"""Process-wide cache of resolved versions."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from .models import Version


class VersionCache:
    """Namespace to Version mapping with first-write-wins semantics.

    Two indexes are kept: results by queried namespace, and descriptor-derived
    results by the namespace that owns the descriptor, so that siblings share
    one instance. Entries never expire; ``clear`` wipes both indexes and must
    not race with resolutions whose cached results a caller intends to assert on.
    """

    def __init__(self):
        """Initialize an empty cache."""
        self._cache: Dict[str, Version] = {}
        self._owners: Dict[str, Version] = {}
        self._lock = threading.Lock()

    def lookup(self, namespace: str) -> Optional[Version]:
        """Get the cached version for ``namespace``.

        Args:
            namespace: Dotted namespace that was queried.

        Returns:
            Cached Version or None if the namespace was never resolved.
        """
        return self._cache.get(namespace)

    def store(self, namespace: str, record: Version) -> Version:
        """Cache a version unless one is already present.

        Args:
            namespace: Dotted namespace that was queried.
            record: Resolved version.

        Returns:
            The record held by the cache after the call, which is the earlier
            one when two resolutions raced.
        """
        with self._lock:
            return self._cache.setdefault(namespace, record)

    def lookup_owner(self, namespace: str) -> Optional[Version]:
        """Get the record built from the descriptor found at ``namespace``."""
        return self._owners.get(namespace)

    def store_owner(self, namespace: str, record: Version) -> Version:
        """Index a descriptor-derived record by its owning namespace.

        Returns:
            The record held for the owner after the call.
        """
        with self._lock:
            return self._owners.setdefault(namespace, record)

    def clear(self) -> None:
        """Clear all cached entries, including the owner index."""
        with self._lock:
            self._cache.clear()
            self._owners.clear()

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        entries = list(self._cache.values())
        unknown = sum(1 for v in entries if v.is_unknown())
        return {
            "total_entries": len(entries),
            "unknown_entries": unknown,
            "resolved_entries": len(entries) - unknown,
            "owner_entries": len(self._owners),
        }

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._cache

    def __len__(self) -> int:
        return len(self._cache)
