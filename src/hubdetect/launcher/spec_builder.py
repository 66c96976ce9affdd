"""Command line and environment of the hub-detect process."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional

from hubdetect.config.models import HubDetectConfig
from hubdetect.core.models import CachedArtifact, Credential, LaunchSpec

# Environment variable Spring Boot reads its JSON configuration from
SPRING_APPLICATION_JSON = "SPRING_APPLICATION_JSON"


def build_command(
    java_executable: Path,
    system_variables: Mapping[str, str],
    cached: CachedArtifact,
) -> List[str]:
    """``java [-Dkey=value ...] -jar <cache>``, properties in mapping order."""
    command = [str(java_executable)]
    command.extend(f"-D{key}={value}" for key, value in system_variables.items())
    command.append("-jar")
    command.append(str(cached.path.absolute()))
    return command


def build_payload(
    config: HubDetectConfig,
    credential: Credential,
    source_path: Path,
) -> str:
    """Render the Spring JSON configuration handed to hub-detect.

    Values are interpolated as is, without JSON escaping, so hub-detect
    receives exactly what is configured. A quote or newline in a value
    (typically a password) produces invalid JSON.
    """
    return (
        "{\n"
        f"\"blackduck.hub.url\": \"{_raw(config.blackduck_url)}\",\n"
        f"\"blackduck.hub.username\": \"{_raw(credential.username)}\",\n"
        f"\"blackduck.hub.password\": \"{_raw(credential.password)}\",\n"
        f"\"logging.level.com.blackducksoftware.integration\": \"{_raw(config.log_level)}\",\n"
        f"\"detect.project.name\": \"{_raw(config.blackduck_name)}\",\n"
        f"\"detect.source.path\": \"{source_path.absolute()}\"\n"
        "}"
    )


def build_launch_spec(
    config: HubDetectConfig,
    credential: Credential,
    cached: CachedArtifact,
    source_path: Path,
    java_executable: Path,
    base_environment: Mapping[str, str],
) -> LaunchSpec:
    """Assemble the command line and environment of one run.

    The environment starts from ``base_environment``, then user entries
    are applied, then the Spring payload, so a user entry can never
    replace the payload.
    """
    environment: Dict[str, str] = dict(base_environment)
    environment.update(config.environment)
    environment[SPRING_APPLICATION_JSON] = build_payload(config, credential, source_path)
    return LaunchSpec(
        command=build_command(java_executable, config.system_variables, cached),
        environment=environment,
    )


def _raw(value: Optional[str]) -> str:
    # Unset values render like the JVM prints null references
    return "null" if value is None else value
