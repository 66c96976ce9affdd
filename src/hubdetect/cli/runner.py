"""CLI runner orchestration.

This module handles command dispatch and execution for the hubdetect CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from importlib.metadata import version, PackageNotFoundError

from hubdetect.cli.arguments import build_parser
from hubdetect.cli.commands.detect import DetectCommand
from hubdetect.cli.commands.status import StatusCommand
from hubdetect.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from hubdetect.config import HubDetectConfig, load_config, parse_property_overrides
from hubdetect.core.errors import ConfigurationError
from hubdetect.core.logging import configure_logging, get_logger
from hubdetect.host.project import Project, load_project

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get hubdetect version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("hubdetect")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from hubdetect import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self) -> None:
        """Initialize CLIRunner with parser and commands."""
        self.parser = build_parser()
        self._version = get_version()
        self.detect_cmd = DetectCommand(version=self._version)
        self.status_cmd = StatusCommand(version=self._version)

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        # Handle --help specially to return 0
        if argv is not None:
            argv_list = list(argv)
            if "--help" in argv_list or "-h" in argv_list:
                self.parser.print_help()
                return EXIT_SUCCESS
        else:
            argv_list = None

        args = self.parser.parse_args(argv_list)
        command = getattr(args, "command", None)

        # detect reports skips and progress at info level by default
        configure_logging(
            debug=args.debug,
            verbose=args.verbose,
            quiet=args.quiet,
            default_level=logging.INFO if command == "detect" else logging.WARNING,
        )

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        if command == "detect":
            return self._handle_detect(args)
        elif command == "status":
            return self._handle_status(args)
        else:
            # No command specified - show help
            self.parser.print_help()
            return EXIT_SUCCESS

    def _load(self, args) -> Tuple[Project, HubDetectConfig]:
        """Load the project and its configuration.

        Raises:
            ConfigurationError: If the project or configuration is invalid.
        """
        project = load_project(Path(args.path))
        cli_overrides = parse_property_overrides(args.defines)
        config = load_config(
            project=project,
            cli_config_path=getattr(args, "config", None),
            cli_overrides=cli_overrides,
        )
        return project, config

    def _handle_detect(self, args) -> int:
        """Handle the detect command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code.
        """
        try:
            project, config = self._load(args)
        except ConfigurationError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        return self.detect_cmd.execute(args, config, project)

    def _handle_status(self, args) -> int:
        """Handle the status command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code.
        """
        try:
            project, config = self._load(args)
        except ConfigurationError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        return self.status_cmd.execute(args, config, project)
