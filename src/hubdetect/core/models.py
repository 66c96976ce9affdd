from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from hubdetect.core.errors import ConfigurationError

LATEST_VERSION = "latest"

# Plain decimal integer with an optional sign, no padding or separators
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Credential:
    """Username/password pair handed to hub-detect."""

    username: Optional[str]
    password: Optional[str]


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Maven coordinate of the hub-detect jar (group:artifact:version)."""

    group: str
    artifact: str
    version: str

    @classmethod
    def parse(cls, gav: str) -> "ArtifactCoordinate":
        """Parse a ``group:artifact:version`` string.

        Raises:
            ConfigurationError: If fewer than three segments are present.
        """
        parts = gav.split(":")
        if len(parts) < 3:
            raise ConfigurationError(
                f"Invalid executable coordinate '{gav}', expected group:artifact:version"
            )
        return cls(group=parts[0], artifact=parts[1], version=parts[2])

    @property
    def is_latest(self) -> bool:
        return self.version.lower() == LATEST_VERSION

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True)
class RemoteRepository:
    """A remote Maven repository using the default layout."""

    id: str
    url: str
    layout: str = "default"


@dataclass(frozen=True)
class CachedArtifact:
    """Local location of the hub-detect jar.

    A present file is reused as is, without checksum or staleness checks.
    """

    path: Path

    @property
    def exists(self) -> bool:
        return self.path.exists()


@dataclass
class LaunchSpec:
    """Command line and environment for one hub-detect run."""

    command: List[str]
    environment: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of the hub-detect process."""

    exit_code: int


class ExpectationKind(str, Enum):
    """How the hub-detect exit status is checked."""

    EXACT_CODE = "exact_code"
    ZERO_ON_TRUE = "zero_on_true"
    UNCHECKED = "unchecked"


@dataclass(frozen=True)
class ExitExpectation:
    """Expected exit status, parsed once from the raw configuration value.

    - an integer string expects that exact code
    - ``true`` (any case) expects 0
    - anything else, including no value, disables the check
    """

    kind: ExpectationKind
    code: Optional[int] = None

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ExitExpectation":
        if raw is None:
            return cls(ExpectationKind.UNCHECKED)
        if INTEGER_PATTERN.fullmatch(raw):
            return cls(ExpectationKind.EXACT_CODE, int(raw))
        if raw.lower() == "true":
            return cls(ExpectationKind.ZERO_ON_TRUE, 0)
        return cls(ExpectationKind.UNCHECKED)

    @property
    def expected_code(self) -> Optional[int]:
        """Exit code to compare against, None when unchecked."""
        if self.kind == ExpectationKind.UNCHECKED:
            return None
        return self.code

    def accepts(self, exit_code: int) -> bool:
        expected = self.expected_code
        return expected is None or exit_code == expected
