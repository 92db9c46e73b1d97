"""Resolve the artifact id, version and build number of a Python namespace.

Each library ships a ``.version`` file in its package directory::

    artifactId=swissknife
    version=1.0
    buildNumber=3a77

and asks for its own version with ``dotversion.of(__name__)``. Sub-packages
without a ``.version`` file inherit the nearest ancestor's.
"""

from .cache import VersionCache
from .config import Config
from .host import DistributionMetadata, HostMetadata, NullHostMetadata
from .loader import DescriptorLoader
from .markers import is_versioned, versioned
from .models import UNKNOWN, UNKNOWN_STR, Version
from .namespace import InvalidNamespaceError
from .resolver import (
    VersionResolver,
    clear_cache,
    default_resolver,
    get,
    of,
    of_package,
    resolve,
    should_warn_if_variable_found_in,
)

__all__ = [
    "Config",
    "DescriptorLoader",
    "DistributionMetadata",
    "HostMetadata",
    "InvalidNamespaceError",
    "NullHostMetadata",
    "UNKNOWN",
    "UNKNOWN_STR",
    "Version",
    "VersionCache",
    "VersionResolver",
    "clear_cache",
    "default_resolver",
    "get",
    "is_versioned",
    "of",
    "of_package",
    "resolve",
    "should_warn_if_variable_found_in",
    "versioned",
]
