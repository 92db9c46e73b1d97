"""Argument parsing for the dotversion command line tool."""

import argparse

from .constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="dotversion",
        description="Show the artifact id and version tag resolved for Python namespaces",
        add_help=True,
    )

    parser.add_argument("namespaces",
                        metavar="NAMESPACE",
                        help="Dotted namespace to resolve, e.g. org.mrcool.swissknife.db",
                        nargs="+",
                        type=str)
    parser.add_argument("-p", "--path",
                        dest="SEARCH_PATH",
                        help="Extra root directory to search for .version files (repeatable)",
                        action="append", type=str,
                        default=[])
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json, default: text)",
                        action="store",
                        type=str.lower,
                        default="text",
                        choices=Constants.OUTPUT_FORMATS)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to a YAML config file",
                        action="store",
                        type=str)
    parser.add_argument("--suppress-var-warning",
                        dest="SUPPRESS_VAR_WARNING",
                        help="Do not warn about unexpanded ${...} placeholders in .version files.",
                        action="store_true")
    parser.add_argument("--error-on-unknown",
                        dest="ERROR_ON_UNKNOWN",
                        help="Exit with a non-zero status code if any namespace resolves to unknown.",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])

    return parser.parse_args(argv)
