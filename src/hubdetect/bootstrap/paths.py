"""Path management for hubdetect.

Handles the ~/.hubdetect directory (global configuration) and the Maven
user directory (~/.m2) holding settings.xml and the local repository.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".hubdetect"

# Environment variable to override home directory
HUBDETECT_HOME_ENV = "HUBDETECT_HOME"

# Maven user directory
MAVEN_USER_DIR_NAME = ".m2"


def get_hubdetect_home() -> Path:
    """Get the hubdetect home directory path.

    Resolution order:
    1. HUBDETECT_HOME environment variable (if set)
    2. ~/.hubdetect (default)

    Returns:
        Path to the hubdetect home directory.
    """
    env_home = os.environ.get(HUBDETECT_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


def get_maven_user_dir() -> Path:
    """Return the Maven user directory (~/.m2)."""
    return Path.home() / MAVEN_USER_DIR_NAME


@dataclass
class HubDetectPaths:
    """Manages well-known locations used by hubdetect.

    Directory structure:
        ~/.hubdetect/
            config/config.yml   - Global configuration
        ~/.m2/
            settings.xml        - Servers, offline flag, local repository
            repository/         - Default local Maven repository
    """

    home: Path
    maven_user_dir: Path

    _CONFIG_DIR: ClassVar[str] = "config"
    _GLOBAL_CONFIG: ClassVar[str] = "config.yml"
    _SETTINGS: ClassVar[str] = "settings.xml"
    _REPOSITORY: ClassVar[str] = "repository"

    @classmethod
    def default(cls) -> "HubDetectPaths":
        """Create paths from the default hubdetect home and Maven user dir."""
        return cls(get_hubdetect_home(), get_maven_user_dir())

    @property
    def config_dir(self) -> Path:
        """Directory for configuration files."""
        return self.home / self._CONFIG_DIR

    @property
    def global_config(self) -> Path:
        return self.config_dir / self._GLOBAL_CONFIG

    @property
    def settings_file(self) -> Path:
        """Maven user settings.xml."""
        return self.maven_user_dir / self._SETTINGS

    @property
    def default_local_repository(self) -> Path:
        """Local repository used when settings.xml does not set one."""
        return self.maven_user_dir / self._REPOSITORY
