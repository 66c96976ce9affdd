"""Status command implementation."""

from __future__ import annotations

import os
from argparse import Namespace
from typing import Mapping, Optional

from hubdetect.bootstrap.java import find_java_executable
from hubdetect.cli.commands import Command
from hubdetect.cli.exit_codes import EXIT_SUCCESS
from hubdetect.config.models import HubDetectConfig
from hubdetect.core.models import CachedArtifact
from hubdetect.host.project import Project


class StatusCommand(Command):
    """Shows effective configuration and hub-detect cache status."""

    def __init__(self, version: str, environ: Optional[Mapping[str, str]] = None):
        """Initialize StatusCommand.

        Args:
            version: Current hubdetect version string.
            environ: Environment used to find java, defaults to os.environ.
        """
        self._version = version
        self._environ = environ

    @property
    def name(self) -> str:
        """Command identifier."""
        return "status"

    def execute(self, args: Namespace, config: HubDetectConfig, project: Project) -> int:
        """Execute the status command.

        Args:
            args: Parsed command-line arguments.
            config: Resolved hubdetect configuration.
            project: Project the status is reported for.

        Returns:
            Exit code (always 0 for status).
        """
        environ = os.environ if self._environ is None else self._environ
        root = project.root()
        cached = CachedArtifact(config.cache)

        print(f"hubdetect version: {self._version}")
        print(f"Project: {project.display_name or '(unnamed)'} ({project.basedir})")
        if root is not project:
            print(f"Root project: {root.display_name or '(unnamed)'} ({root.basedir})")
        print(f"Java: {find_java_executable(environ)}")
        print(f"hub-detect cache: {cached.path} ({'cached' if cached.exists else 'not downloaded'})")
        print()

        print("Configuration:")
        for key, value in config.to_dict().items():
            if key == "environment":
                # values may hold secrets
                value = sorted(value)
            print(f"  {key}: {value}")
        print()

        if config.sources:
            print(f"Config sources: {', '.join(config.sources)}")
        else:
            print("Config sources: defaults only")

        missing = [k for k in ("blackduck_url", "blackduck_name") if getattr(config, k) is None]
        if missing:
            print(f"\nhub-detect will be skipped until {' and '.join(missing)} is set.")

        return EXIT_SUCCESS
