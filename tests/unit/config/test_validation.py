"""Tests for hubdetect.config.validation."""

from __future__ import annotations

from hubdetect.config.validation import (
    ConfigValidationIssue,
    ValidationSeverity,
    _suggest_key,
    format_issue,
    has_errors,
    validate_config,
)


class TestSuggestKey:
    """Tests for _suggest_key function."""

    def test_suggests_typo_fix(self) -> None:
        result = _suggest_key("blackduk_url", {"blackduck_url", "server_id", "cache"})
        assert result == "blackduck_url"

    def test_returns_none_for_no_match(self) -> None:
        result = _suggest_key("xyz", {"blackduck_url", "server_id", "cache"})
        assert result is None

    def test_handles_empty_valid_keys(self) -> None:
        result = _suggest_key("test", set())
        assert result is None


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config_returns_no_issues(self) -> None:
        data = {
            "blackduck_url": "https://blackduck.example.com",
            "blackduck_name": "demo",
            "executable_gav": "org:tool:2.0",
            "validate_exit_code": 0,
            "offline": False,
            "system_variables": {"detect.tools": "DETECTOR"},
            "environment": {"DETECT_TIMEOUT": 300},
        }
        assert validate_config(data, source="hubdetect.yml") == []

    def test_warns_on_unknown_top_level_key(self) -> None:
        issues = validate_config({"blackduk_url": "x"}, source="hubdetect.yml")

        assert len(issues) == 1
        assert issues[0].severity == ValidationSeverity.WARNING
        assert issues[0].key == "blackduk_url"
        assert issues[0].suggestion == "blackduck_url"

    def test_mapping_key_with_scalar_is_error(self) -> None:
        issues = validate_config({"environment": "FOO=bar"}, source="cli")

        assert has_errors(issues)
        assert issues[0].key == "environment"

    def test_nested_mapping_value_is_error(self) -> None:
        issues = validate_config({"system_variables": {"a": {"b": "c"}}}, source="cli")

        assert has_errors(issues)
        assert issues[0].key == "system_variables.a"

    def test_scalar_key_with_list_is_error(self) -> None:
        issues = validate_config({"server_id": ["a", "b"]}, source="cli")
        assert has_errors(issues)

    def test_offline_must_be_boolean(self) -> None:
        issues = validate_config({"offline": "yes"}, source="cli")

        assert has_errors(issues)
        assert issues[0].key == "offline"

    def test_short_gav_is_error(self) -> None:
        issues = validate_config({"executable_gav": "org:tool"}, source="cli")

        assert has_errors(issues)
        assert "group:artifact:version" in issues[0].message

    def test_latest_url_without_four_slots_warns(self) -> None:
        issues = validate_config({"latest_version_url": "%s/latest?g=%s"}, source="cli")

        assert not has_errors(issues)
        assert issues[0].severity == ValidationSeverity.WARNING
        assert issues[0].key == "latest_version_url"

    def test_none_values_are_accepted(self) -> None:
        assert validate_config({"environment": None, "blackduck_url": None}, source="cli") == []


class TestFormatIssue:
    """Tests for format_issue function."""

    def test_includes_source(self) -> None:
        issue = ConfigValidationIssue(
            message="Unknown key 'x'",
            source="hubdetect.yml",
            severity=ValidationSeverity.WARNING,
        )
        assert format_issue(issue) == "Unknown key 'x' in hubdetect.yml"

    def test_includes_suggestion(self) -> None:
        issue = ConfigValidationIssue(
            message="Unknown key 'sever_id'",
            source="cli",
            severity=ValidationSeverity.WARNING,
            suggestion="server_id",
        )
        assert format_issue(issue).endswith("(did you mean 'server_id'?)")
