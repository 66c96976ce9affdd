"""Artifact resolution against Maven repositories.

The launcher only depends on the ``ArtifactResolver`` interface. The
default ``HttpArtifactResolver`` mirrors what Maven does for a single
artifact: use the local repository when the file is already there,
otherwise download it from the first remote repository that has it.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
from urllib.error import HTTPError, URLError

from hubdetect.bootstrap.download import download_file
from hubdetect.core.errors import ArtifactResolutionError
from hubdetect.core.logging import get_logger
from hubdetect.core.models import RemoteRepository
from hubdetect.host.settings import Server

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Artifact:
    """A concrete artifact: coordinates with a resolved version and extension."""

    group: str
    artifact: str
    extension: str
    version: str

    @property
    def file_name(self) -> str:
        return f"{self.artifact}-{self.version}.{self.extension}"

    def repository_path(self) -> str:
        """Path of the artifact in a default-layout repository."""
        group_path = self.group.replace(".", "/")
        return f"{group_path}/{self.artifact}/{self.version}/{self.file_name}"

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.extension}:{self.version}"


@dataclass(frozen=True)
class ArtifactRequest:
    """An artifact to resolve and the repositories to try, in order."""

    artifact: Artifact
    repositories: List[RemoteRepository]


@dataclass
class ArtifactResult:
    """Outcome of a resolution: a local file, or missing with the reasons."""

    request: ArtifactRequest
    file: Optional[Path] = None
    repository: Optional[RemoteRepository] = None
    errors: List[str] = field(default_factory=list)

    @property
    def is_missing(self) -> bool:
        return self.file is None


class ArtifactResolver(ABC):
    """Resolves an artifact to a local file."""

    @abstractmethod
    def resolve(self, request: ArtifactRequest) -> ArtifactResult:
        """Resolve the requested artifact.

        Returns:
            The result, missing when no repository has the artifact.

        Raises:
            ArtifactResolutionError: If resolution cannot be attempted.
        """


class HttpArtifactResolver(ArtifactResolver):
    """Resolves artifacts into a local repository over HTTP(S).

    Repositories are tried in request order. A 404 moves on to the next
    repository, as does any other transfer failure, which is recorded in
    the result. Basic auth is sent to repositories whose id matches a
    settings server.
    """

    def __init__(
        self,
        local_repository: Path,
        servers: Optional[List[Server]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._local_repository = local_repository
        self._servers: Dict[str, Server] = {s.id: s for s in servers or []}
        self._timeout = timeout

    @property
    def local_repository(self) -> Path:
        return self._local_repository

    def resolve(self, request: ArtifactRequest) -> ArtifactResult:
        artifact = request.artifact
        relative_path = artifact.repository_path()
        local_file = self._local_repository / relative_path
        result = ArtifactResult(request=request)

        if local_file.exists():
            LOGGER.debug(f"{artifact} found in local repository at {local_file}")
            result.file = local_file
            return result

        for repository in request.repositories:
            url = f"{repository.url.rstrip('/')}/{relative_path}"
            LOGGER.info(f"Downloading {url}")
            try:
                download_file(
                    url,
                    local_file,
                    timeout=self._timeout,
                    headers=self._auth_headers(repository),
                )
            except HTTPError as e:
                if e.code == 404:
                    LOGGER.debug(f"{artifact} not found in {repository.id}")
                    result.errors.append(f"{repository.id}: not found")
                else:
                    LOGGER.warning(f"Failed to download {artifact} from {repository.id}: {e}")
                    result.errors.append(f"{repository.id}: HTTP {e.code}")
                continue
            except (URLError, ValueError) as e:
                LOGGER.warning(f"Failed to download {artifact} from {repository.id}: {e}")
                result.errors.append(f"{repository.id}: {e}")
                continue
            except OSError as e:
                raise ArtifactResolutionError(
                    f"Could not write {artifact} to {local_file}: {e}"
                ) from e

            LOGGER.info(f"Downloaded {artifact} from {repository.id}")
            result.file = local_file
            result.repository = repository
            return result

        return result

    def _auth_headers(self, repository: RemoteRepository) -> Dict[str, str]:
        server = self._servers.get(repository.id)
        if server is None or server.username is None:
            return {}
        token = f"{server.username}:{server.password or ''}".encode("utf-8")
        return {"Authorization": "Basic " + base64.b64encode(token).decode("ascii")}
