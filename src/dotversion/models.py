"""Version record returned by the resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .constants import Constants

UNKNOWN_STR = Constants.UNKNOWN_STR


@dataclass(frozen=True)
class Version:
    """Resolved identity of a module.

    ``group_id`` is the namespace whose ``.version`` file supplied the data,
    which may be an ancestor of the namespace that was queried.
    """

    group_id: str
    artifact_id: str
    project_version: str
    build_number: str = ""

    @staticmethod
    def decorated_project_version(project_version: str) -> str:
        """Prefix snapshots with ``v`` and everything else with ``r``."""
        if project_version.endswith(Constants.SNAPSHOT_SUFFIX):
            return Constants.SNAPSHOT_PREFIX + project_version
        return Constants.RELEASE_PREFIX + project_version

    def is_unknown(self) -> bool:
        return self is UNKNOWN or self == UNKNOWN

    def tag(self) -> str:
        """Return the decorated version, suffixed with the build number if any."""
        if self.is_unknown():
            return UNKNOWN_STR
        decorated = self.decorated_project_version(self.project_version)
        if not self.build_number:
            return decorated
        return f"{decorated}-{self.build_number}"

    @property
    def version(self) -> str:
        """Alias of ``tag()``."""
        return self.tag()

    def to_dict(self) -> Dict[str, str]:
        return {
            "groupId": self.group_id,
            "artifactId": self.artifact_id,
            "projectVersion": self.project_version,
            "buildNumber": self.build_number,
            "tag": self.tag(),
        }

    def __str__(self) -> str:
        if self.is_unknown():
            return UNKNOWN_STR
        return f"{self.artifact_id}-{self.tag()}"

    def __reduce__(self):
        # Keep the sentinel a singleton across pickling.
        if self is UNKNOWN:
            return "UNKNOWN"
        return (Version, (self.group_id, self.artifact_id, self.project_version, self.build_number))


UNKNOWN = Version(UNKNOWN_STR, UNKNOWN_STR, UNKNOWN_STR, UNKNOWN_STR)
