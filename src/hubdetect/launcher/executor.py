"""Running hub-detect and checking how it exited."""

from __future__ import annotations

import subprocess

from hubdetect.core.errors import ExitCodeMismatchError, LaunchError
from hubdetect.core.logging import get_logger
from hubdetect.core.models import ExecutionResult, ExitExpectation, LaunchSpec

LOGGER = get_logger(__name__)


class ProcessExecutor:
    """Runs a launch spec to completion.

    The child inherits this process's stdin, stdout and stderr, its output
    is neither captured nor parsed. There is no timeout, waiting blocks
    until the child exits.
    """

    def run(self, spec: LaunchSpec) -> ExecutionResult:
        """Start the process and wait for it.

        Raises:
            LaunchError: If the process cannot be started or the wait is
                interrupted (Ctrl+C).
        """
        try:
            process = subprocess.Popen(spec.command, env=spec.environment)
        except OSError as e:
            LOGGER.error(f"Failed to start {spec.command[0]}: {e}")
            raise LaunchError(f"Failed to start hub-detect: {e}") from e

        try:
            exit_code = process.wait()
        except KeyboardInterrupt as e:
            LOGGER.error("Interrupted while waiting for hub-detect")
            process.kill()
            process.wait()
            raise LaunchError("Interrupted while waiting for hub-detect") from e

        return ExecutionResult(exit_code=exit_code)


def validate_exit_code(result: ExecutionResult, expectation: ExitExpectation) -> None:
    """Fail when an expected exit code is set and the actual one differs.

    Raises:
        ExitCodeMismatchError: On mismatch.
    """
    if expectation.accepts(result.exit_code):
        return
    raise ExitCodeMismatchError(actual=result.exit_code, expected=expectation.expected_code)
