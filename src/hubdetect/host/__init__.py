"""
Host build model for hubdetect.

Provides what a build tool would hand to a plugin:
- the Maven project tree (pom.xml) and its remote repositories
- user settings (settings.xml): offline flag, servers, local repository
- credential decryption and artifact resolution behind interfaces
"""

from hubdetect.host.project import Project, load_project
from hubdetect.host.resolver import (
    Artifact,
    ArtifactRequest,
    ArtifactResolver,
    ArtifactResult,
    HttpArtifactResolver,
)
from hubdetect.host.session import BuildSession
from hubdetect.host.settings import (
    EnvironmentDecrypter,
    Server,
    Settings,
    SettingsDecrypter,
    load_settings,
)

__all__ = [
    "Artifact",
    "ArtifactRequest",
    "ArtifactResolver",
    "ArtifactResult",
    "BuildSession",
    "EnvironmentDecrypter",
    "HttpArtifactResolver",
    "Project",
    "Server",
    "Settings",
    "SettingsDecrypter",
    "load_project",
    "load_settings",
]
