"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the command line tool.

    Args:
        Enum (int): Exit codes for the command line tool.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INVALID_NAMESPACE = 2
    UNKNOWN_VERSION = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    VERSION_FILE = ".version"
    NAMESPACE_SEPARATOR = "."

    KEY_ARTIFACT_ID = "artifactId"
    KEY_VERSION = "version"
    KEY_BUILD_NUMBER = "buildNumber"

    UNKNOWN_STR = "unknown"
    SNAPSHOT_SUFFIX = "-SNAPSHOT"
    SNAPSHOT_PREFIX = "v"
    RELEASE_PREFIX = "r"

    ENV_SUPPRESS_VAR_FOUND_WARNING = "DOTVERSION_SUPPRESS_VAR_FOUND_WARNING"
    ENV_CONFIG = "DOTVERSION_CONFIG"
    ENV_LOG_LEVEL = "DOTVERSION_LOG_LEVEL"

    DEFAULT_CONFIG_LOCATIONS = [
        "dotversion.yml",
        "dotversion.yaml",
        "~/.config/dotversion/dotversion.yml",
    ]
    TRUTHY_VALUES = ("true", "yes", "y", "on", "1")

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    DEFAULT_LOG_LEVEL = "WARNING"
    OUTPUT_FORMATS = ["text", "json"]
