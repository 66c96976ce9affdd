"""The build session a hubdetect run executes in."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hubdetect.host.project import Project
from hubdetect.host.settings import Settings


@dataclass
class BuildSession:
    """Current project plus user settings.

    Attributes:
        current_project: Project hubdetect was invoked on.
        settings: User settings (servers, offline flag, local repository).
        offline: Offline flag from the command line, on top of settings.
    """

    current_project: Project
    settings: Settings
    offline: bool = False

    @property
    def is_offline(self) -> bool:
        return self.offline or self.settings.offline

    def local_repository(self, default: Path) -> Path:
        return self.settings.local_repository or default
