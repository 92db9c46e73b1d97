"""Locate and parse ``.version`` descriptor files.

For namespace ``a.b.c`` the descriptor lives at ``a/b/c/.version`` under one
of the loader's search roots, the same way a package lives under ``sys.path``.
A root may also be a zip archive, as zipimport allows.
"""
from __future__ import annotations

import logging
import os
import re
import sys
import zipfile
from typing import Dict, Iterable, List, Optional, Tuple

from .common.logging_utils import extra_context, is_debug_enabled
from .constants import Constants

logger = logging.getLogger(__name__)

_COMMENT_PREFIXES = ("#", "!")

# key, then optional whitespace, at most one '=' or ':', optional whitespace
_PAIR = re.compile(r"^([^=:\s]+)\s*[=:]?\s*(.*)$")


def descriptor_path(namespace: str) -> str:
    """Return the relative resource path of the descriptor for ``namespace``."""
    return "/".join(namespace.split(Constants.NAMESPACE_SEPARATOR) + [Constants.VERSION_FILE])


def parse_descriptor(text: str) -> Dict[str, str]:
    """Parse flat ``key=value`` text into a dict.

    As in a Java properties file the key ends at the first ``=``, ``:`` or
    whitespace, so ``version: 1.0`` and ``version 1.0`` both work. Blank
    lines and lines starting with ``#`` or ``!`` are skipped; a bare key
    yields an empty value. Later duplicates win.
    """
    result: Dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue
        match = _PAIR.match(line)
        if match:
            result[match.group(1)] = match.group(2).strip()
    return result


def _is_archive(root: str) -> bool:
    return os.path.isfile(root) and zipfile.is_zipfile(root)


def _archive_has(root: str, rel: str) -> bool:
    try:
        with zipfile.ZipFile(root) as archive:
            return rel in archive.namelist()
    except (OSError, zipfile.BadZipFile):
        return False


class DescriptorLoader:
    """Read descriptors from a list of root directories or zip archives.

    When ``search_path`` is None the live ``sys.path`` is consulted on every
    lookup. ``extra_roots`` are searched first.
    """

    def __init__(self, search_path: Optional[Iterable[str]] = None, extra_roots: Optional[Iterable[str]] = None):
        self._search_path = list(search_path) if search_path is not None else None
        self._extra_roots = list(extra_roots or [])

    @property
    def roots(self) -> List[str]:
        base = self._search_path if self._search_path is not None else sys.path
        # An empty sys.path entry means the current directory.
        return [r or os.curdir for r in self._extra_roots + list(base)]

    def _locate(self, namespace: str) -> Optional[Tuple[str, str]]:
        rel = descriptor_path(namespace)
        for root in self.roots:
            if _is_archive(root):
                if _archive_has(root, rel):
                    return root, rel
            elif os.path.isfile(os.path.join(root, *rel.split("/"))):
                return root, rel
        return None

    def find(self, namespace: str) -> Optional[str]:
        """Return the path of the first descriptor for ``namespace``.

        Descriptors inside an archive are reported as ``archive.zip/a/b/.version``.
        """
        located = self._locate(namespace)
        if located is None:
            return None
        root, rel = located
        return os.path.join(root, *rel.split("/"))

    @staticmethod
    def _read(root: str, rel: str) -> str:
        if _is_archive(root):
            with zipfile.ZipFile(root) as archive:
                return archive.read(rel).decode("utf-8")
        with open(os.path.join(root, *rel.split("/")), "r", encoding="utf-8") as fh:
            return fh.read()

    def load(self, namespace: str) -> Optional[Dict[str, str]]:
        """Return the parsed descriptor for ``namespace`` or None.

        Missing, unreadable and undecodable files all give None.
        """
        located = self._locate(namespace)
        if located is None:
            return None
        root, rel = located
        path = os.path.join(root, *rel.split("/"))
        try:
            text = self._read(root, rel)
        except (OSError, UnicodeDecodeError, KeyError, zipfile.BadZipFile) as exc:
            logger.debug(
                "Unreadable descriptor treated as absent",
                extra=extra_context(
                    event="descriptor_unreadable",
                    component="loader",
                    namespace=namespace,
                    target=path,
                    error=str(exc),
                ),
            )
            return None
        if is_debug_enabled(logger):
            logger.debug(
                "Descriptor loaded",
                extra=extra_context(
                    event="descriptor_loaded",
                    component="loader",
                    namespace=namespace,
                    target=path,
                ),
            )
        return parse_descriptor(text)
