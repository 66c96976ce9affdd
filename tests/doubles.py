"""Test doubles for the host services hubdetect depends on."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from hubdetect.core.models import ExecutionResult, LaunchSpec
from hubdetect.host.resolver import ArtifactRequest, ArtifactResolver, ArtifactResult
from hubdetect.host.settings import Server, SettingsDecrypter
from hubdetect.launcher.executor import ProcessExecutor


class FakeResolver(ArtifactResolver):
    """Resolver returning a fixed file (or nothing) and recording requests."""

    def __init__(self, file: Optional[Path] = None) -> None:
        self.file = file
        self.requests: List[ArtifactRequest] = []

    def resolve(self, request: ArtifactRequest) -> ArtifactResult:
        self.requests.append(request)
        return ArtifactResult(request=request, file=self.file)


class FakeExecutor(ProcessExecutor):
    """Executor returning a fixed exit code and recording launch specs."""

    def __init__(self, exit_code: int = 0) -> None:
        self.exit_code = exit_code
        self.specs: List[LaunchSpec] = []

    def run(self, spec: LaunchSpec) -> ExecutionResult:
        self.specs.append(spec)
        return ExecutionResult(exit_code=self.exit_code)


class NoopDecrypter(SettingsDecrypter):
    """Decrypter with nothing to decrypt."""

    def __init__(self) -> None:
        self.calls: List[Server] = []

    def decrypt(self, server: Server) -> Optional[Server]:
        self.calls.append(server)
        return None
