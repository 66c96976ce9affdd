"""Detect command implementation."""

from __future__ import annotations

import os
from argparse import Namespace
from typing import Mapping, Optional

from hubdetect.bootstrap.java import find_java_executable
from hubdetect.bootstrap.paths import HubDetectPaths
from hubdetect.cli.commands import Command
from hubdetect.cli.exit_codes import (
    EXIT_BOOTSTRAP_FAILURE,
    EXIT_EXIT_CODE_MISMATCH,
    EXIT_INVALID_USAGE,
    EXIT_LAUNCH_ERROR,
    EXIT_SUCCESS,
)
from hubdetect.config.models import HubDetectConfig
from hubdetect.core.errors import (
    ArtifactResolutionError,
    ConfigurationError,
    ExitCodeMismatchError,
    LaunchError,
)
from hubdetect.core.logging import get_logger
from hubdetect.host.project import Project
from hubdetect.host.resolver import HttpArtifactResolver
from hubdetect.host.session import BuildSession
from hubdetect.host.settings import EnvironmentDecrypter, load_settings
from hubdetect.launcher import LaunchOutcome, ScanLauncher

LOGGER = get_logger(__name__)


class DetectCommand(Command):
    """Runs hub-detect on a project."""

    def __init__(
        self,
        version: str,
        paths: Optional[HubDetectPaths] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize DetectCommand.

        Args:
            version: Current hubdetect version string.
            paths: Well-known locations, defaults to the user's.
            environ: Environment handed to hub-detect and used to find
                java, defaults to this process's environment.
        """
        self._version = version
        self._paths = paths
        self._environ = environ

    @property
    def name(self) -> str:
        """Command identifier."""
        return "detect"

    def execute(self, args: Namespace, config: HubDetectConfig, project: Project) -> int:
        """Execute the detect command.

        Args:
            args: Parsed command-line arguments.
            config: Resolved hubdetect configuration.
            project: Project hub-detect analyzes.

        Returns:
            Exit code.
        """
        paths = self._paths or HubDetectPaths.default()
        environ = dict(os.environ if self._environ is None else self._environ)

        try:
            settings = load_settings(getattr(args, "settings", None) or paths.settings_file)
        except ConfigurationError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        session = BuildSession(
            current_project=project,
            settings=settings,
            offline=getattr(args, "offline", False),
        )
        launcher = ScanLauncher(
            config,
            session,
            decrypter=EnvironmentDecrypter(environ),
            resolver=HttpArtifactResolver(
                session.local_repository(paths.default_local_repository),
                servers=settings.servers,
            ),
            java_executable=find_java_executable(environ),
            base_environment=environ,
        )

        try:
            report = launcher.execute()
        except ConfigurationError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE
        except ArtifactResolutionError as e:
            LOGGER.error(str(e))
            return EXIT_BOOTSTRAP_FAILURE
        except LaunchError as e:
            LOGGER.error(str(e))
            return EXIT_LAUNCH_ERROR
        except ExitCodeMismatchError as e:
            LOGGER.error(f"{e} (expected {e.expected})")
            return EXIT_EXIT_CODE_MISMATCH

        if report.outcome == LaunchOutcome.SKIPPED:
            LOGGER.debug(f"hub-detect skipped: {report.reason}")
        return EXIT_SUCCESS
