"""Tests for the detect command."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from unittest.mock import patch

import pytest

from hubdetect.bootstrap.paths import HubDetectPaths
from hubdetect.cli.commands.detect import DetectCommand
from hubdetect.cli.exit_codes import (
    EXIT_BOOTSTRAP_FAILURE,
    EXIT_EXIT_CODE_MISMATCH,
    EXIT_INVALID_USAGE,
    EXIT_LAUNCH_ERROR,
    EXIT_SUCCESS,
)
from hubdetect.core.errors import (
    ArtifactResolutionError,
    ConfigurationError,
    ExitCodeMismatchError,
    LaunchError,
)
from hubdetect.launcher import LaunchOutcome, LaunchReport

SETTINGS_XML = """<settings>
  <localRepository>{local_repository}</localRepository>
  <servers>
    <server><id>blackduck</id><username>u</username><password>${{env.BD_PASSWORD}}</password></server>
  </servers>
</settings>
"""


@pytest.fixture
def paths(tmp_path: Path) -> HubDetectPaths:
    return HubDetectPaths(tmp_path / "home", tmp_path / "m2")


def _args(**kwargs) -> Namespace:
    values = {"settings": None, "offline": False}
    values.update(kwargs)
    return Namespace(**values)


class TestDetectCommand:
    """Tests for DetectCommand."""

    def test_name(self, paths) -> None:
        assert DetectCommand(version="1.0", paths=paths).name == "detect"

    def test_no_settings_skips(self, paths, make_config, project) -> None:
        command = DetectCommand(version="1.0", paths=paths, environ={})
        assert command.execute(_args(), make_config(), project) == EXIT_SUCCESS

    def test_malformed_settings_is_invalid_usage(self, paths, make_config, project, tmp_path) -> None:
        settings = tmp_path / "settings.xml"
        settings.write_text("<settings>")
        command = DetectCommand(version="1.0", paths=paths, environ={})

        assert command.execute(_args(settings=settings), make_config(), project) == EXIT_INVALID_USAGE

    def test_wires_launcher(self, paths, make_config, project, tmp_path) -> None:
        local_repository = tmp_path / "local-repo"
        paths.settings_file.parent.mkdir(parents=True)
        paths.settings_file.write_text(SETTINGS_XML.format(local_repository=local_repository))
        environ = {"BD_PASSWORD": "from-env", "JAVA_HOME": str(tmp_path / "jdk")}
        command = DetectCommand(version="1.0", paths=paths, environ=environ)

        with patch("hubdetect.cli.commands.detect.ScanLauncher") as launcher_cls:
            launcher_cls.return_value.execute.return_value = LaunchReport(LaunchOutcome.COMPLETED)
            exit_code = command.execute(_args(offline=True), make_config(), project)

        assert exit_code == EXIT_SUCCESS
        _, kwargs = launcher_cls.call_args
        session = launcher_cls.call_args[0][1]
        assert session.offline is True
        assert session.settings.find_server("blackduck") is not None
        assert kwargs["resolver"].local_repository == local_repository
        assert kwargs["java_executable"].parent == tmp_path / "jdk" / "bin"
        assert kwargs["base_environment"] == environ

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ConfigurationError("bad gav"), EXIT_INVALID_USAGE),
            (ArtifactResolutionError("Didn't find"), EXIT_BOOTSTRAP_FAILURE),
            (LaunchError("Failed to start"), EXIT_LAUNCH_ERROR),
            (ExitCodeMismatchError(actual=1, expected=0), EXIT_EXIT_CODE_MISMATCH),
        ],
    )
    def test_error_exit_codes(self, paths, make_config, project, error, expected) -> None:
        command = DetectCommand(version="1.0", paths=paths, environ={})

        with patch("hubdetect.cli.commands.detect.ScanLauncher") as launcher_cls:
            launcher_cls.return_value.execute.side_effect = error
            assert command.execute(_args(), make_config(), project) == expected

    def test_mismatch_logs_expected_code(self, paths, make_config, project, caplog) -> None:
        command = DetectCommand(version="1.0", paths=paths, environ={})

        with patch("hubdetect.cli.commands.detect.ScanLauncher") as launcher_cls:
            launcher_cls.return_value.execute.side_effect = ExitCodeMismatchError(actual=2, expected=0)
            command.execute(_args(), make_config(), project)

        assert "Invalid exit status: 2 (expected 0)" in caplog.text
