"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (hubdetect.yml next to pom.xml)
- Global config (~/.hubdetect/config/config.yml)
- Command line ``-D hub-detect.<property>=<value>`` overrides
- Environment variable expansion (${VAR})
- Defaults derived from the Maven project (build directory, name)
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import yaml

from hubdetect.bootstrap.paths import HubDetectPaths
from hubdetect.config.models import DEFAULT_CACHE_RELATIVE_PATH, HubDetectConfig
from hubdetect.config.validation import (
    ConfigValidationIssue,
    ValidationSeverity,
    format_issue,
    has_errors,
    validate_config,
)
from hubdetect.core.errors import ConfigurationError
from hubdetect.core.logging import get_logger

if TYPE_CHECKING:
    from hubdetect.host.project import Project

LOGGER = get_logger(__name__)

# Config file names
PROJECT_CONFIG_NAMES = ["hubdetect.yml", "hubdetect.yaml", ".hubdetect.yml", ".hubdetect.yaml"]

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

# Prefix of command line properties
PROPERTY_PREFIX = "hub-detect."

# Command line property name -> config key
PROPERTY_KEYS: Dict[str, str] = {
    "hubDetectCache": "cache",
    "artifactoryBase": "artifactory_base",
    "latestVersionUrl": "latest_version_url",
    "executableGav": "executable_gav",
    "artifactRepositoryName": "artifact_repository_name",
    "serverId": "server_id",
    "blackduckUrl": "blackduck_url",
    "logLevel": "log_level",
    "blackduckName": "blackduck_name",
    "validateExitCode": "validate_exit_code",
}


class ConfigError(ConfigurationError):
    """Configuration loading or parsing error."""

    pass


def load_config(
    project: "Project",
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
    paths: Optional[HubDetectPaths] = None,
) -> HubDetectConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI overrides (``-D`` properties, ``--offline``)
    2. Custom config file (cli_config_path) OR project config (hubdetect.yml)
    3. Global config (~/.hubdetect/config/config.yml)
    4. Built-in defaults

    Args:
        project: Maven project the run applies to.
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI overrides, keyed like the config file.
        paths: Well-known locations, defaults to the user's.

    Returns:
        Resolved HubDetectConfig instance.

    Raises:
        ConfigError: If a config file is missing, unparsable or invalid.
    """
    paths = paths or HubDetectPaths.default()
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    # Layer 1: Global config
    global_path = paths.global_config
    if global_path.exists():
        merged = merge_configs(merged, _load_layer(global_path))
        sources.append(f"global:{global_path}")
        LOGGER.debug(f"Loaded global config from {global_path}")

    # Layer 2: Project or custom config
    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        merged = merge_configs(merged, _load_layer(cli_config_path))
        sources.append(f"custom:{cli_config_path}")
        LOGGER.debug(f"Loaded custom config from {cli_config_path}")
    else:
        project_path = find_project_config(project.basedir)
        if project_path is not None:
            merged = merge_configs(merged, _load_layer(project_path))
            sources.append(f"project:{project_path}")
            LOGGER.debug(f"Loaded project config from {project_path}")

    # Layer 3: CLI overrides
    if cli_overrides:
        _raise_on_errors(validate_config(cli_overrides, source="cli"))
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged, project, sources)
    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find config file in project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def _load_layer(path: Path) -> Dict[str, Any]:
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    _raise_on_errors(validate_config(data, source=str(path)))
    return data


def _raise_on_errors(issues: List[ConfigValidationIssue]) -> None:
    if has_errors(issues):
        errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
        raise ConfigError("; ".join(format_issue(i) for i in errors))


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Args:
        path: Path to YAML file.

    Returns:
        Parsed dictionary.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    data = yaml.safe_load(content)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    """Replace environment variable reference with its value."""
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Rules:
    - Scalar values: overlay replaces base
    - Dicts: recursive merge (system_variables and environment accumulate)
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def parse_property_overrides(defines: Iterable[str]) -> Dict[str, Any]:
    """Turn ``hub-detect.<property>=<value>`` definitions into config overrides.

    Properties without the ``hub-detect.`` prefix are ignored, unknown
    ``hub-detect.`` properties are reported and ignored.

    Raises:
        ConfigError: If a definition has no ``=``.
    """
    overrides: Dict[str, Any] = {}
    for define in defines:
        name, sep, value = define.partition("=")
        if not sep:
            raise ConfigError(f"Invalid property definition '{define}', expected name=value")
        if not name.startswith(PROPERTY_PREFIX):
            LOGGER.debug(f"Ignoring property '{name}'")
            continue
        key = PROPERTY_KEYS.get(name[len(PROPERTY_PREFIX):])
        if key is None:
            LOGGER.warning(f"Unknown property '{name}', ignoring it")
            continue
        overrides[key] = value
    return overrides


def dict_to_config(
    data: Dict[str, Any],
    project: "Project",
    sources: Optional[List[str]] = None,
) -> HubDetectConfig:
    """Convert a merged config dictionary into a typed config.

    Relative cache paths resolve against the project base directory, the
    cache defaults to ``<build dir>/blackduck/hub-detect.jar`` and the
    Black Duck name to the project name.
    """
    values: Dict[str, Any] = {}
    for key in (
        "artifactory_base",
        "latest_version_url",
        "executable_gav",
        "artifact_repository_name",
        "server_id",
        "log_level",
    ):
        if data.get(key) is not None:
            values[key] = _to_str(data[key])

    cache = data.get("cache")
    if cache is not None:
        cache_path = Path(_to_str(cache)).expanduser()
        if not cache_path.is_absolute():
            cache_path = project.basedir / cache_path
    else:
        cache_path = project.build_directory / DEFAULT_CACHE_RELATIVE_PATH

    blackduck_name = data.get("blackduck_name")
    if blackduck_name is None:
        blackduck_name = project.display_name

    return HubDetectConfig(
        cache=cache_path,
        blackduck_url=_optional_str(data.get("blackduck_url")),
        blackduck_name=_optional_str(blackduck_name),
        validate_exit_code=_optional_str(data.get("validate_exit_code")),
        system_variables=_to_str_mapping(data.get("system_variables")),
        environment=_to_str_mapping(data.get("environment")),
        offline=bool(data.get("offline", False)),
        sources=list(sources or []),
        **values,
    )


def _to_str(value: Any) -> str:
    # YAML turns true/false into booleans, hub-detect expects Java spelling
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else _to_str(value)


def _to_str_mapping(value: Optional[Dict[str, Any]]) -> Dict[str, str]:
    if not value:
        return {}
    return {str(k): "" if v is None else _to_str(v) for k, v in value.items()}
