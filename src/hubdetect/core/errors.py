"""Exception hierarchy for hubdetect.

Soft skips (offline, missing configuration, skipped credentials) are not
errors and never raise. Everything below aborts the run.
"""

from __future__ import annotations

from typing import Optional


class HubDetectError(Exception):
    """Base class for all fatal hubdetect errors."""


class ConfigurationError(HubDetectError):
    """Invalid configuration, including a failed latest-version lookup."""


class ArtifactResolutionError(HubDetectError):
    """The hub-detect artifact could not be resolved or copied to the cache."""


class LaunchError(HubDetectError):
    """The hub-detect process could not be started or was interrupted."""


class ExitCodeMismatchError(HubDetectError):
    """The hub-detect process exited with an unexpected status."""

    def __init__(self, actual: int, expected: Optional[int]) -> None:
        super().__init__(f"Invalid exit status: {actual}")
        self.actual = actual
        self.expected = expected
