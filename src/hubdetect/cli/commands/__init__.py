"""CLI commands package.

This module provides the base Command class shared by all commands.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hubdetect.config.models import HubDetectConfig
    from hubdetect.host.project import Project


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier.

        Returns:
            String name of the command.
        """

    @abstractmethod
    def execute(self, args: Namespace, config: "HubDetectConfig", project: "Project") -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            config: Resolved hubdetect configuration.
            project: Project the command was invoked on.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
