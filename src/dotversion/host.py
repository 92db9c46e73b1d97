"""Fallback version lookup from installed distribution metadata."""

from __future__ import annotations

import importlib.machinery
import importlib.metadata
import importlib.util
import logging
import os
import sys
from typing import Dict, List, Optional, Tuple

from packaging.version import InvalidVersion
from packaging.version import Version as PackagingVersion

from .common.logging_utils import extra_context
from .constants import Constants

logger = logging.getLogger(__name__)

# (version, build qualifier)
HostVersion = Tuple[str, str]


def split_build_qualifier(raw: str) -> HostVersion:
    """Split a reported version into its public part and local build label.

    ``"1.2.0+g3a77"`` gives ``("1.2.0", "g3a77")``. Strings that are not
    valid PEP 440 versions are returned whole with an empty qualifier.
    """
    raw = raw.strip()
    try:
        parsed = PackagingVersion(raw)
    except InvalidVersion:
        return raw, ""
    if parsed.local is None:
        return raw, ""
    public, _, local = raw.partition("+")
    return public, local


class HostMetadata:
    """Read-only metadata lookup keyed by namespace."""

    def lookup(self, namespace: str) -> Optional[HostVersion]:
        raise NotImplementedError


class NullHostMetadata(HostMetadata):
    """Reports nothing for every namespace."""

    def lookup(self, namespace: str) -> Optional[HostVersion]:
        return None


class DistributionMetadata(HostMetadata):
    """Look up the installed distribution that ships a module.

    The queried module must exist (already imported, or findable by
    ``importlib.util.find_spec``). Candidate distributions come from its
    top-level package; when several distributions share that package, only
    the ones whose file lists contain the module are considered. When no
    distribution claims it, an imported module's ``__version__`` is used.
    """

    def __init__(self, distributions: Optional[Dict[str, List[str]]] = None):
        self._distributions = distributions

    def _packages_distributions(self) -> Dict[str, List[str]]:
        if self._distributions is None:
            self._distributions = dict(importlib.metadata.packages_distributions())
        return self._distributions

    @staticmethod
    def _find_spec(namespace: str):
        module = sys.modules.get(namespace)
        if module is not None:
            # Modules built at runtime may carry no spec but still exist.
            return getattr(module, "__spec__", None) or importlib.machinery.ModuleSpec(namespace, None)
        try:
            return importlib.util.find_spec(namespace)
        except (ImportError, ValueError):
            return None

    @staticmethod
    def _module_locations(spec) -> Tuple[List[str], List[str]]:
        """Return (files, directories) on disk that make up the module."""
        files = []
        if spec.origin and os.path.isfile(spec.origin):
            files.append(os.path.realpath(spec.origin))
        dirs = [os.path.realpath(d) for d in (spec.submodule_search_locations or [])]
        return files, dirs

    @staticmethod
    def _ships(dist_name: str, files: List[str], dirs: List[str]) -> bool:
        try:
            dist = importlib.metadata.distribution(dist_name)
        except importlib.metadata.PackageNotFoundError:
            return False
        for entry in dist.files or []:
            located = os.path.realpath(str(dist.locate_file(entry)))
            if located in files:
                return True
            if any(located.startswith(d + os.sep) for d in dirs):
                return True
        return False

    def _distribution_version(self, namespace: str, spec) -> Optional[str]:
        top_level = namespace.split(Constants.NAMESPACE_SEPARATOR, 1)[0]
        candidates = self._packages_distributions().get(top_level, [])
        if len(candidates) > 1:
            files, dirs = self._module_locations(spec)
            candidates = [name for name in candidates if self._ships(name, files, dirs)]
            if len(candidates) > 1 and not files:
                # A bare namespace directory is shared; no single owner.
                return None
        for dist_name in candidates:
            try:
                return importlib.metadata.version(dist_name)
            except importlib.metadata.PackageNotFoundError:
                continue
        return None

    @staticmethod
    def _module_version(namespace: str) -> Optional[str]:
        module = sys.modules.get(namespace)
        value = getattr(module, "__version__", None) if module is not None else None
        return value if isinstance(value, str) and value.strip() else None

    def lookup(self, namespace: str) -> Optional[HostVersion]:
        try:
            spec = self._find_spec(namespace)
            if spec is None:
                return None
            raw = self._distribution_version(namespace, spec) or self._module_version(namespace)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            # Broken metadata on disk must not break resolution.
            logger.debug(
                "Host metadata lookup failed",
                extra=extra_context(
                    event="host_metadata_error",
                    component="host",
                    namespace=namespace,
                    error=str(exc),
                ),
            )
            return None
        if raw is None:
            return None
        return split_build_qualifier(raw)
