"""ScanLauncher: the whole hub-detect run, from preconditions to exit check."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping, Optional

from hubdetect.bootstrap.download import read_url_text
from hubdetect.config.models import HubDetectConfig
from hubdetect.core.logging import get_logger
from hubdetect.core.models import ExecutionResult, ExitExpectation, LaunchSpec
from hubdetect.host.resolver import ArtifactResolver
from hubdetect.host.session import BuildSession
from hubdetect.host.settings import SettingsDecrypter
from hubdetect.launcher.artifact import ArtifactCache
from hubdetect.launcher.executor import ProcessExecutor, validate_exit_code
from hubdetect.launcher.gate import check_preconditions
from hubdetect.launcher.spec_builder import build_launch_spec

LOGGER = get_logger(__name__)


class LaunchOutcome(str, Enum):
    """How a run ended, when it did not raise."""

    SKIPPED = "skipped"
    COMPLETED = "completed"


@dataclass
class LaunchReport:
    """Result of ScanLauncher.execute."""

    outcome: LaunchOutcome
    reason: Optional[str] = None
    spec: Optional[LaunchSpec] = None
    result: Optional[ExecutionResult] = None


class ScanLauncher:
    """Ensures hub-detect is cached, runs it and validates its exit code.

    Every host service is injected: settings decryption, artifact
    resolution, the latest-version reader and the process executor. The
    java executable and the base environment are explicit inputs too, so
    nothing here reads process-wide state.
    """

    def __init__(
        self,
        config: HubDetectConfig,
        session: BuildSession,
        *,
        decrypter: SettingsDecrypter,
        resolver: ArtifactResolver,
        java_executable: Path,
        base_environment: Mapping[str, str],
        executor: Optional[ProcessExecutor] = None,
        version_reader: Callable[[str], str] = read_url_text,
    ) -> None:
        self._config = config
        self._session = session
        self._decrypter = decrypter
        self._java_executable = java_executable
        self._base_environment = base_environment
        self._executor = executor or ProcessExecutor()
        self._cache = ArtifactCache(config, resolver, version_reader)

    def execute(self) -> LaunchReport:
        """Run hub-detect once.

        Returns:
            A SKIPPED report when a precondition is not met, otherwise a
            COMPLETED report carrying the exit code.

        Raises:
            ConfigurationError: Invalid coordinate or latest version query failure.
            ArtifactResolutionError: The jar could not be obtained.
            LaunchError: The process could not be run to completion.
            ExitCodeMismatchError: The exit code is not the expected one.
        """
        gate = check_preconditions(self._config, self._session, self._decrypter)
        if not gate.proceed or gate.credential is None:
            return LaunchReport(outcome=LaunchOutcome.SKIPPED, reason=gate.reason)

        root_project = self._session.current_project.root()
        cached = self._cache.ensure(root_project)

        spec = build_launch_spec(
            self._config,
            gate.credential,
            cached,
            source_path=root_project.basedir,
            java_executable=self._java_executable,
            base_environment=self._base_environment,
        )
        LOGGER.info(f"Launching: {spec.command}")

        result = self._executor.run(spec)
        LOGGER.info(f"Output: {result.exit_code}")

        validate_exit_code(result, ExitExpectation.parse(self._config.validate_exit_code))
        return LaunchReport(outcome=LaunchOutcome.COMPLETED, spec=spec, result=result)
