"""Resolve the Version of a namespace from the nearest ``.version`` file."""

from __future__ import annotations

import inspect
import logging
import re
import threading
from typing import Any, Dict, Optional

from .cache import VersionCache
from .common.logging_utils import extra_context, is_debug_enabled
from .config import Config
from .constants import Constants
from .host import DistributionMetadata, HostMetadata
from .loader import DescriptorLoader
from .models import UNKNOWN, Version
from .namespace import ancestors, namespace_of, validate_namespace

logger = logging.getLogger(__name__)

_VARIABLE = re.compile(r"\$\{[^}]*\}")


class VersionResolver:
    """Walks a namespace upward and caches what it finds.

    The nearest descriptor wins outright; fields are never merged across
    levels, so a child descriptor without ``version`` resolves to UNKNOWN
    even when a parent descriptor is complete.
    """

    def __init__(
        self,
        loader: Optional[DescriptorLoader] = None,
        host_metadata: Optional[HostMetadata] = None,
        cache: Optional[VersionCache] = None,
        config: Optional[Config] = None,
    ):
        self.config = config if config is not None else Config()
        self.loader = loader if loader is not None else DescriptorLoader(extra_roots=self.config.search_path)
        self.host_metadata = host_metadata if host_metadata is not None else DistributionMetadata()
        self.cache = cache if cache is not None else VersionCache()

    def resolve(self, namespace: str) -> Version:
        """Return the Version for ``namespace``; raises only on a malformed name."""
        validate_namespace(namespace)
        cached = self.cache.lookup(namespace)
        if cached is not None:
            return cached
        return self.cache.store(namespace, self._resolve_uncached(namespace))

    def of(self, target: Any) -> Version:
        """Resolve the namespace of a module, class, function or string."""
        return self.resolve(namespace_of(target))

    def of_package(self, name: str) -> Version:
        return self.resolve(name)

    def get(self) -> Version:
        """Return the Version of the module that called this method."""
        return self.resolve(_caller_namespace(inspect.currentframe()))

    def clear_cache(self) -> None:
        """Drop every cached result. Not safe to call during resolutions."""
        self.cache.clear()

    def should_warn_if_variable_found_in(self, value: Optional[str]) -> bool:
        """True when ``value`` holds an unexpanded ``${...}`` and warnings are on."""
        if not value or not _VARIABLE.search(value):
            return False
        return not self.config.suppress_var_found_warning()

    def _resolve_uncached(self, namespace: str) -> Version:
        for candidate in ancestors(namespace):
            owned = self.cache.lookup_owner(candidate)
            if owned is not None:
                return owned
            descriptor = self.loader.load(candidate)
            if descriptor is not None:
                record = self._from_descriptor(candidate, descriptor)
                if record.is_unknown():
                    return record
                return self.cache.store_owner(candidate, record)
        return self._from_host(namespace)

    def _from_descriptor(self, owner: str, descriptor: Dict[str, str]) -> Version:
        artifact_id = descriptor.get(Constants.KEY_ARTIFACT_ID)
        if artifact_id is None:
            logger.warning(
                "artifactId not defined in .version file for: %s",
                owner,
                extra=extra_context(event="artifact_missing", component="resolver", namespace=owner),
            )
            artifact_id = owner
        project_version = descriptor.get(Constants.KEY_VERSION)
        if project_version is None:
            logger.error(
                "version not defined in .version file for: %s",
                owner,
                extra=extra_context(event="version_missing", component="resolver", namespace=owner),
            )
            return UNKNOWN
        build_number = descriptor.get(Constants.KEY_BUILD_NUMBER, "")

        self._warn_if_variable_found(owner, Constants.KEY_ARTIFACT_ID, artifact_id)
        self._warn_if_variable_found(owner, Constants.KEY_VERSION, project_version)
        self._warn_if_variable_found(owner, Constants.KEY_BUILD_NUMBER, build_number)
        return Version(owner, artifact_id, project_version, build_number)

    def _from_host(self, namespace: str) -> Version:
        reported = self.host_metadata.lookup(namespace)
        if reported is None or not reported[0]:
            if is_debug_enabled(logger):
                logger.debug(
                    "No version information found",
                    extra=extra_context(event="version_unknown", component="resolver", namespace=namespace),
                )
            return UNKNOWN
        project_version, build_number = reported
        return Version(namespace, namespace, project_version, build_number or "")

    def _warn_if_variable_found(self, namespace: str, key: str, value: str) -> None:
        if self.should_warn_if_variable_found_in(value):
            logger.warning(
                "variable found in .version file for %s: %s=%s",
                namespace,
                key,
                value,
                extra=extra_context(event="variable_found", component="resolver", namespace=namespace, field=key),
            )


def _caller_namespace(frame) -> str:
    # frame is get() itself; step out of this module to find the real caller.
    try:
        caller = frame.f_back if frame is not None else None
        while caller is not None and caller.f_globals.get("__name__") == __name__:
            caller = caller.f_back
        if caller is None:
            return "__main__"
        return caller.f_globals.get("__name__", "__main__")
    finally:
        del frame


_default: Optional[VersionResolver] = None
_default_lock = threading.Lock()


def default_resolver() -> VersionResolver:
    """Return the process-wide resolver, built on first use."""
    global _default  # pylint: disable=global-statement
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = VersionResolver(config=Config.from_file())
    return _default


def resolve(namespace: str) -> Version:
    return default_resolver().resolve(namespace)


def of(target: Any) -> Version:
    return default_resolver().of(target)


def of_package(name: str) -> Version:
    return default_resolver().of_package(name)


def get() -> Version:
    """Return the Version of the calling module using the default resolver."""
    return default_resolver().resolve(_caller_namespace(inspect.currentframe()))


def clear_cache() -> None:
    default_resolver().clear_cache()


def should_warn_if_variable_found_in(value: Optional[str]) -> bool:
    return default_resolver().should_warn_if_variable_found_in(value)
