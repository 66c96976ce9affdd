"""Tests for HTTP artifact resolution."""

from __future__ import annotations

import base64
from pathlib import Path
from typing import List
from unittest.mock import patch
from urllib.error import HTTPError, URLError

import pytest

from hubdetect.core.errors import ArtifactResolutionError
from hubdetect.core.models import RemoteRepository
from hubdetect.host.resolver import (
    Artifact,
    ArtifactRequest,
    HttpArtifactResolver,
)
from hubdetect.host.session import BuildSession
from hubdetect.host.settings import Server, Settings

ARTIFACT = Artifact(group="com.example.tools", artifact="tool", extension="jar", version="2.0")
FIRST = RemoteRepository(id="first", url="https://first.example.com/repo/")
SECOND = RemoteRepository(id="second", url="https://second.example.com/repo")


def _http_error(url: str, code: int) -> HTTPError:
    return HTTPError(url, code, "error", {}, None)  # type: ignore[arg-type]


def _request(repositories: List[RemoteRepository]) -> ArtifactRequest:
    return ArtifactRequest(artifact=ARTIFACT, repositories=repositories)


class TestArtifact:
    """Tests for Artifact paths."""

    def test_repository_path(self) -> None:
        assert ARTIFACT.repository_path() == "com/example/tools/tool/2.0/tool-2.0.jar"

    def test_str(self) -> None:
        assert str(ARTIFACT) == "com.example.tools:tool:jar:2.0"


class TestHttpArtifactResolver:
    """Tests for HttpArtifactResolver."""

    def test_uses_local_repository_first(self, tmp_path: Path) -> None:
        local = tmp_path / "repository" / ARTIFACT.repository_path()
        local.parent.mkdir(parents=True)
        local.write_bytes(b"jar")
        resolver = HttpArtifactResolver(tmp_path / "repository")

        with patch("hubdetect.host.resolver.download_file") as mock_download:
            result = resolver.resolve(_request([FIRST]))

        assert result.file == local
        assert not result.is_missing
        mock_download.assert_not_called()

    def test_downloads_from_first_repository(self, tmp_path: Path) -> None:
        resolver = HttpArtifactResolver(tmp_path)

        with patch("hubdetect.host.resolver.download_file") as mock_download:
            result = resolver.resolve(_request([FIRST, SECOND]))

        assert result.repository == FIRST
        assert result.file == tmp_path / ARTIFACT.repository_path()
        url = mock_download.call_args[0][0]
        assert url == "https://first.example.com/repo/com/example/tools/tool/2.0/tool-2.0.jar"
        assert mock_download.call_count == 1

    def test_falls_through_not_found(self, tmp_path: Path) -> None:
        resolver = HttpArtifactResolver(tmp_path)

        def fake_download(url, dest, timeout=None, headers=None):
            if url.startswith("https://first"):
                raise _http_error(url, 404)

        with patch("hubdetect.host.resolver.download_file", side_effect=fake_download):
            result = resolver.resolve(_request([FIRST, SECOND]))

        assert result.repository == SECOND
        assert result.errors == ["first: not found"]

    def test_missing_everywhere(self, tmp_path: Path) -> None:
        resolver = HttpArtifactResolver(tmp_path)
        failures = [
            _http_error("https://first", 500),
            URLError("connection refused"),
        ]

        with patch("hubdetect.host.resolver.download_file", side_effect=failures):
            result = resolver.resolve(_request([FIRST, SECOND]))

        assert result.is_missing
        assert result.errors[0] == "first: HTTP 500"
        assert result.errors[1].startswith("second:")

    def test_no_repositories_is_missing(self, tmp_path: Path) -> None:
        result = HttpArtifactResolver(tmp_path).resolve(_request([]))
        assert result.is_missing
        assert result.errors == []

    def test_write_failure_raises(self, tmp_path: Path) -> None:
        resolver = HttpArtifactResolver(tmp_path)

        with patch("hubdetect.host.resolver.download_file", side_effect=PermissionError("denied")):
            with pytest.raises(ArtifactResolutionError, match="Could not write"):
                resolver.resolve(_request([FIRST]))

    def test_sends_basic_auth_for_matching_server(self, tmp_path: Path) -> None:
        resolver = HttpArtifactResolver(
            tmp_path,
            servers=[Server(id="first", username="deploy", password="pw")],
        )

        with patch("hubdetect.host.resolver.download_file") as mock_download:
            resolver.resolve(_request([FIRST]))

        headers = mock_download.call_args[1]["headers"]
        expected = base64.b64encode(b"deploy:pw").decode("ascii")
        assert headers == {"Authorization": f"Basic {expected}"}

    def test_no_auth_without_server(self, tmp_path: Path) -> None:
        resolver = HttpArtifactResolver(tmp_path, servers=[Server(id="other", username="u")])

        with patch("hubdetect.host.resolver.download_file") as mock_download:
            resolver.resolve(_request([FIRST]))

        assert mock_download.call_args[1]["headers"] == {}


class TestBuildSession:
    """Tests for BuildSession."""

    def test_offline_from_flag_or_settings(self, project) -> None:
        assert not BuildSession(project, Settings()).is_offline
        assert BuildSession(project, Settings(), offline=True).is_offline
        assert BuildSession(project, Settings(offline=True)).is_offline

    def test_local_repository(self, project, tmp_path: Path) -> None:
        default = tmp_path / "default"
        configured = tmp_path / "configured"

        assert BuildSession(project, Settings()).local_repository(default) == default
        assert BuildSession(
            project, Settings(local_repository=configured)
        ).local_repository(default) == configured
