"""Tests for path management functionality."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from hubdetect.bootstrap.paths import (
    DEFAULT_HOME_DIR_NAME,
    HubDetectPaths,
    get_hubdetect_home,
    get_maven_user_dir,
)


class TestGetHubDetectHome:
    """Tests for get_hubdetect_home function."""

    def test_returns_default_in_user_home(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"HOME": str(tmp_path)}, clear=False):
            os.environ.pop("HUBDETECT_HOME", None)
            with patch("hubdetect.bootstrap.paths.Path.home", return_value=tmp_path):
                home = get_hubdetect_home()
                assert home == tmp_path / DEFAULT_HOME_DIR_NAME

    def test_respects_hubdetect_home_env_var(self, tmp_path: Path) -> None:
        custom_home = tmp_path / "custom-hubdetect"
        with patch.dict(os.environ, {"HUBDETECT_HOME": str(custom_home)}):
            home = get_hubdetect_home()
            assert home == custom_home

    def test_returns_path_object(self) -> None:
        home = get_hubdetect_home()
        assert isinstance(home, Path)


class TestGetMavenUserDir:
    """Tests for get_maven_user_dir function."""

    def test_is_dot_m2_in_home(self, tmp_path: Path) -> None:
        with patch("hubdetect.bootstrap.paths.Path.home", return_value=tmp_path):
            assert get_maven_user_dir() == tmp_path / ".m2"


class TestHubDetectPaths:
    """Tests for HubDetectPaths class."""

    def test_paths_from_home(self, tmp_path: Path) -> None:
        home = tmp_path / ".hubdetect"
        m2 = tmp_path / ".m2"
        paths = HubDetectPaths(home, m2)

        assert paths.config_dir == home / "config"
        assert paths.global_config == home / "config" / "config.yml"
        assert paths.settings_file == m2 / "settings.xml"
        assert paths.default_local_repository == m2 / "repository"

    def test_default_factory(self) -> None:
        """Test that default() combines hubdetect home and maven user dir."""
        with patch("hubdetect.bootstrap.paths.get_hubdetect_home") as mock_home, \
                patch("hubdetect.bootstrap.paths.get_maven_user_dir") as mock_m2:
            mock_home.return_value = Path("/mock/home/.hubdetect")
            mock_m2.return_value = Path("/mock/home/.m2")
            paths = HubDetectPaths.default()

            assert paths.home == Path("/mock/home/.hubdetect")
            assert paths.maven_user_dir == Path("/mock/home/.m2")
            mock_home.assert_called_once()
