"""Shared fixtures for hubdetect tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from hubdetect.config.models import HubDetectConfig
from hubdetect.host.project import Project
from hubdetect.host.session import BuildSession
from hubdetect.host.settings import Server, Settings
from tests.doubles import FakeExecutor, FakeResolver


@pytest.fixture
def project(tmp_path: Path) -> Project:
    """A single-module project with a name."""
    basedir = tmp_path / "project"
    basedir.mkdir()
    return Project(basedir=basedir, name="demo", group_id="org.demo", artifact_id="demo")


@pytest.fixture
def settings() -> Settings:
    """Settings holding the default blackduck server."""
    return Settings(servers=[Server(id="blackduck", username="bd-user", password="bd-secret")])


@pytest.fixture
def session(project: Project, settings: Settings) -> BuildSession:
    return BuildSession(current_project=project, settings=settings)


@pytest.fixture
def make_config(project: Project) -> Callable[..., HubDetectConfig]:
    """Factory for configs runnable by default (url and name set)."""

    def _make(**overrides) -> HubDetectConfig:
        values = {
            "cache": project.build_directory / "blackduck" / "hub-detect.jar",
            "blackduck_url": "https://blackduck.example.com",
            "blackduck_name": "demo",
        }
        values.update(overrides)
        return HubDetectConfig(**values)

    return _make


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor()
