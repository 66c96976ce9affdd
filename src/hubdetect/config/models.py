"""Typed configuration for a hubdetect run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_CACHE_RELATIVE_PATH = Path("blackduck") / "hub-detect.jar"
DEFAULT_ARTIFACTORY_BASE = "https://test-repo.blackducksoftware.com/artifactory"
DEFAULT_LATEST_VERSION_URL = "%s/api/search/latestVersion?g=%s&a=%s&repos=%s"
DEFAULT_EXECUTABLE_GAV = "com.blackducksoftware.integration:hub-detect:latest"
DEFAULT_ARTIFACT_REPOSITORY_NAME = "bds-integrations-release"
DEFAULT_SERVER_ID = "blackduck"
DEFAULT_LOG_LEVEL = "ALL"


@dataclass(frozen=True)
class HubDetectConfig:
    """Resolved, read-only configuration of one hubdetect invocation.

    Attributes:
        cache: Where the hub-detect jar is cached and launched from.
        artifactory_base: Base URL of the artifactory hosting hub-detect.
        latest_version_url: Template formatted with base, group, artifact
            and repository name to query the latest version.
        executable_gav: group:artifact:version of the jar, version may be
            ``latest``.
        artifact_repository_name: Artifactory repository holding the jar.
        server_id: Id of the settings.xml server holding the credentials.
        blackduck_url: Black Duck server URL. Required to run.
        log_level: Log level handed to hub-detect.
        blackduck_name: Project name in Black Duck. Required to run.
        validate_exit_code: Raw exit code expectation (int, bool or other).
        system_variables: Extra ``-D`` system properties for the JVM.
        environment: Extra environment variables for the process.
        offline: Whether the run happens offline (no network allowed).
    """

    cache: Path
    artifactory_base: str = DEFAULT_ARTIFACTORY_BASE
    latest_version_url: str = DEFAULT_LATEST_VERSION_URL
    executable_gav: str = DEFAULT_EXECUTABLE_GAV
    artifact_repository_name: str = DEFAULT_ARTIFACT_REPOSITORY_NAME
    server_id: str = DEFAULT_SERVER_ID
    blackduck_url: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    blackduck_name: Optional[str] = None
    validate_exit_code: Optional[str] = None
    system_variables: Dict[str, str] = field(default_factory=dict)
    environment: Dict[str, str] = field(default_factory=dict)
    offline: bool = False

    # Where each layer of the config came from, for the status command
    sources: List[str] = field(default_factory=list, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for display, without sources."""
        return {
            "cache": str(self.cache),
            "artifactory_base": self.artifactory_base,
            "latest_version_url": self.latest_version_url,
            "executable_gav": self.executable_gav,
            "artifact_repository_name": self.artifact_repository_name,
            "server_id": self.server_id,
            "blackduck_url": self.blackduck_url,
            "log_level": self.log_level,
            "blackduck_name": self.blackduck_name,
            "validate_exit_code": self.validate_exit_code,
            "system_variables": dict(self.system_variables),
            "environment": dict(self.environment),
            "offline": self.offline,
        }
