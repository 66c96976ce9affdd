"""
Launcher for Black Duck hub-detect.

Runs the whole sequence for one invocation:
- precondition gate (offline, required settings, credentials)
- hub-detect jar cache (version lookup, resolution, copy)
- launch spec (java command line, environment with the Spring payload)
- process execution and exit code validation
"""

from hubdetect.launcher.artifact import ArtifactCache
from hubdetect.launcher.executor import ProcessExecutor, validate_exit_code
from hubdetect.launcher.gate import GateResult, check_preconditions
from hubdetect.launcher.launcher import LaunchOutcome, LaunchReport, ScanLauncher
from hubdetect.launcher.spec_builder import SPRING_APPLICATION_JSON, build_launch_spec

__all__ = [
    "ArtifactCache",
    "GateResult",
    "LaunchOutcome",
    "LaunchReport",
    "ProcessExecutor",
    "SPRING_APPLICATION_JSON",
    "ScanLauncher",
    "build_launch_spec",
    "check_preconditions",
    "validate_exit_code",
]
