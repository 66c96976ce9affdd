"""Configuration validation for hubdetect.

Warns on unknown keys (with close-match suggestions) and reports type
errors. Errors make the configuration unusable, warnings do not.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from hubdetect.core.logging import get_logger

LOGGER = get_logger(__name__)


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Config will fail at runtime
    WARNING = "warning"  # Likely mistake but config usable


@dataclass
class ConfigValidationIssue:
    """A validation issue for configuration with severity."""

    message: str
    source: str
    severity: ValidationSeverity
    key: Optional[str] = None
    suggestion: Optional[str] = None


# Keys holding a single scalar value
SCALAR_KEYS: Set[str] = {
    "cache",
    "artifactory_base",
    "latest_version_url",
    "executable_gav",
    "artifact_repository_name",
    "server_id",
    "blackduck_url",
    "log_level",
    "blackduck_name",
    "validate_exit_code",
}

# Keys holding a string-to-string mapping
MAPPING_KEYS: Set[str] = {
    "system_variables",
    "environment",
}

VALID_TOP_LEVEL_KEYS: Set[str] = SCALAR_KEYS | MAPPING_KEYS | {"offline"}

# Number of %s slots the latest version URL template is formatted with
LATEST_VERSION_URL_SLOTS = 4


def validate_config(data: Dict[str, Any], source: str) -> List[ConfigValidationIssue]:
    """Validate a configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source (file path or "cli") for messages.

    Returns:
        List of validation issues, errors and warnings alike.
    """
    issues: List[ConfigValidationIssue] = []

    if not isinstance(data, dict):  # type: ignore[unreachable]
        issues.append(ConfigValidationIssue(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return issues  # type: ignore[unreachable]

    for key, value in data.items():
        if key not in VALID_TOP_LEVEL_KEYS:
            suggestion = _suggest_key(key, VALID_TOP_LEVEL_KEYS)
            issue = ConfigValidationIssue(
                message=f"Unknown key '{key}'",
                source=source,
                severity=ValidationSeverity.WARNING,
                key=key,
                suggestion=suggestion,
            )
            issues.append(issue)
            _log_issue(issue)
            continue

        if value is None:
            continue

        if key in MAPPING_KEYS:
            if not isinstance(value, dict):
                issues.append(ConfigValidationIssue(
                    message=f"'{key}' must be a mapping, got {type(value).__name__}",
                    source=source,
                    severity=ValidationSeverity.ERROR,
                    key=key,
                ))
            else:
                for sub_key, sub_value in value.items():
                    if isinstance(sub_value, (dict, list)):
                        issues.append(ConfigValidationIssue(
                            message=f"'{key}.{sub_key}' must be a scalar value",
                            source=source,
                            severity=ValidationSeverity.ERROR,
                            key=f"{key}.{sub_key}",
                        ))
        elif key == "offline":
            if not isinstance(value, bool):
                issues.append(ConfigValidationIssue(
                    message="'offline' must be a boolean",
                    source=source,
                    severity=ValidationSeverity.ERROR,
                    key=key,
                ))
        elif isinstance(value, (dict, list)):
            issues.append(ConfigValidationIssue(
                message=f"'{key}' must be a scalar value, got {type(value).__name__}",
                source=source,
                severity=ValidationSeverity.ERROR,
                key=key,
            ))

    gav = data.get("executable_gav")
    if isinstance(gav, str) and len(gav.split(":")) < 3:
        issues.append(ConfigValidationIssue(
            message=f"'executable_gav' must be group:artifact:version, got '{gav}'",
            source=source,
            severity=ValidationSeverity.ERROR,
            key="executable_gav",
        ))

    template = data.get("latest_version_url")
    if isinstance(template, str) and template.count("%s") != LATEST_VERSION_URL_SLOTS:
        issue = ConfigValidationIssue(
            message=(
                f"'latest_version_url' should contain {LATEST_VERSION_URL_SLOTS} '%s' "
                "slots (base, group, artifact, repository)"
            ),
            source=source,
            severity=ValidationSeverity.WARNING,
            key="latest_version_url",
        )
        issues.append(issue)
        _log_issue(issue)

    return issues


def has_errors(issues: List[ConfigValidationIssue]) -> bool:
    return any(issue.severity == ValidationSeverity.ERROR for issue in issues)


def format_issue(issue: ConfigValidationIssue) -> str:
    msg = f"{issue.message} in {issue.source}"
    if issue.suggestion:
        msg += f" (did you mean '{issue.suggestion}'?)"
    return msg


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Args:
        invalid_key: The invalid key entered.
        valid_keys: Set of valid keys.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, list(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_issue(issue: ConfigValidationIssue) -> None:
    """Log a validation warning."""
    LOGGER.warning(format_issue(issue))
