"""Locating, and downloading when needed, the hub-detect jar."""

from __future__ import annotations

import shutil
from typing import Callable, List

from hubdetect.bootstrap.download import read_url_text
from hubdetect.config.models import HubDetectConfig
from hubdetect.core.errors import ArtifactResolutionError, ConfigurationError
from hubdetect.core.logging import get_logger
from hubdetect.core.models import ArtifactCoordinate, CachedArtifact, RemoteRepository
from hubdetect.host.project import Project
from hubdetect.host.resolver import Artifact, ArtifactRequest, ArtifactResolver

LOGGER = get_logger(__name__)

# Id of the repository built from the artifactory settings
ARTIFACTORY_REPOSITORY_ID = "blackduck_hubdetect"

# hub-detect ships as an executable jar
PACKAGING = "jar"


class ArtifactCache:
    """Keeps the hub-detect jar at the configured cache path.

    A jar already in the cache is used as is. Otherwise the version is
    determined (querying artifactory for ``latest``), the jar is resolved
    through the artifactory repository then the project's repositories,
    and copied into the cache.
    """

    def __init__(
        self,
        config: HubDetectConfig,
        resolver: ArtifactResolver,
        version_reader: Callable[[str], str] = read_url_text,
    ) -> None:
        self._config = config
        self._resolver = resolver
        self._version_reader = version_reader

    def ensure(self, root_project: Project) -> CachedArtifact:
        """Return the cached jar, downloading it first when absent.

        Raises:
            ConfigurationError: Bad coordinate or failed version query.
            ArtifactResolutionError: Jar not found or not copyable.
        """
        coordinate = ArtifactCoordinate.parse(self._config.executable_gav)
        cached = CachedArtifact(self._config.cache)
        if cached.exists:
            LOGGER.debug(f"Using cached hub-detect at {cached.path}")
            return cached

        version = self.resolve_version(coordinate)
        cached.path.parent.mkdir(parents=True, exist_ok=True)

        artifact = Artifact(coordinate.group, coordinate.artifact, PACKAGING, version)
        request = ArtifactRequest(artifact, self.repositories(root_project))
        try:
            result = self._resolver.resolve(request)
        except ArtifactResolutionError as e:
            raise ArtifactResolutionError(f"Didn't find '{self._config.executable_gav}'") from e
        if result.is_missing:
            details = f" ({'; '.join(result.errors)})" if result.errors else ""
            raise ArtifactResolutionError(
                f"Didn't find '{self._config.executable_gav}' as {artifact}{details}"
            )

        try:
            shutil.copyfile(result.file, cached.path)
        except OSError as e:
            raise ArtifactResolutionError(
                f"Could not copy {result.file} to {cached.path}: {e}"
            ) from e
        LOGGER.info(f"Cached hub-detect {version} at {cached.path}")
        return cached

    def resolve_version(self, coordinate: ArtifactCoordinate) -> str:
        """Return the literal version, or ask artifactory for the latest one.

        Raises:
            ConfigurationError: If the latest version query fails.
        """
        if not coordinate.is_latest:
            return coordinate.version

        try:
            url = self._config.latest_version_url % (
                self._config.artifactory_base,
                coordinate.group,
                coordinate.artifact,
                self._config.artifact_repository_name,
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid latest version url '{self._config.latest_version_url}': {e}"
            ) from e

        LOGGER.debug(f"Querying latest hub-detect version from {url}")
        try:
            version = self._version_reader(url).strip()
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Could not query latest version from {url}: {e}") from e
        LOGGER.info(f"Latest hub-detect version is {version}")
        return version

    def repositories(self, root_project: Project) -> List[RemoteRepository]:
        """Artifactory repository first, then the root project's repositories."""
        artifactory = RemoteRepository(
            id=ARTIFACTORY_REPOSITORY_ID,
            url=f"{self._config.artifactory_base}/{self._config.artifact_repository_name}",
        )
        return [artifactory] + root_project.remote_repositories
