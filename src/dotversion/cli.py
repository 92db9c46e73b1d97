"""Command line entry point: print resolved versions for namespaces."""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import List, Optional

from .args import parse_args
from .common.logging_utils import configure_logging, extra_context, is_debug_enabled
from .config import Config
from .constants import Constants, ExitCodes
from .namespace import InvalidNamespaceError
from .resolver import VersionResolver

logger = logging.getLogger(__name__)


def build_resolver(args) -> VersionResolver:
    """Create a resolver from parsed CLI arguments.

    CLI flags take precedence over the environment and the YAML config.
    """
    config = Config.from_file(getattr(args, "CONFIG", None))
    if getattr(args, "SUPPRESS_VAR_WARNING", False):
        config.suppress_override = True
    config.search_path = list(getattr(args, "SEARCH_PATH", []) or []) + config.search_path
    return VersionResolver(config=config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    config_path = getattr(args, "CONFIG", None)
    if config_path and not os.path.isfile(config_path):
        logger.error("Config file not found: %s", config_path)
        return ExitCodes.FILE_ERROR.value

    resolver = build_resolver(args)
    results = []
    for namespace in args.namespaces:
        try:
            results.append((namespace, resolver.resolve(namespace)))
        except InvalidNamespaceError as exc:
            logger.error("%s", exc)
            return ExitCodes.INVALID_NAMESPACE.value

    if is_debug_enabled(logger):
        logger.debug(
            "Resolved namespaces",
            extra=extra_context(event="function_exit", component="cli", action="main", count=len(results)),
        )

    if args.OUTPUT_FORMAT == "json":
        payload = [dict(record.to_dict(), namespace=ns) for ns, record in results]
        sys.stdout.write(json.dumps(payload, indent=2) + "\n")
    else:
        for ns, record in results:
            sys.stdout.write(f"{ns}: {record}\n")

    if args.ERROR_ON_UNKNOWN and any(record.is_unknown() for _, record in results):
        return ExitCodes.UNKNOWN_VERSION.value
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
