"""Maven user settings: offline flag, servers and local repository.

Reads the subset of ``settings.xml`` hubdetect needs. Credentials live in
``<servers>`` entries, looked up by id.
"""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Mapping, Optional

from hubdetect.core.logging import get_logger
from hubdetect.core.models import Credential
from hubdetect.host.xml_utils import child_text, namespace, parse_xml

LOGGER = get_logger(__name__)

# Value of a server password that disables the run for that server
SKIP_PASSWORD = "skip"

# ${env.NAME} references, as supported by Maven settings interpolation
ENV_REFERENCE_PATTERN = re.compile(r"\$\{env\.([^}]+)\}")


@dataclass(frozen=True)
class Server:
    """A ``<server>`` entry of settings.xml."""

    id: str
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def is_skipped(self) -> bool:
        return self.password == SKIP_PASSWORD

    def to_credential(self) -> Credential:
        return Credential(username=self.username, password=self.password)


@dataclass
class Settings:
    """Maven user settings relevant to hubdetect."""

    offline: bool = False
    servers: List[Server] = field(default_factory=list)
    local_repository: Optional[Path] = None

    def find_server(self, server_id: str) -> Optional[Server]:
        """Return the first server with the given id."""
        for server in self.servers:
            if server.id == server_id:
                return server
        return None


def load_settings(path: Path) -> Settings:
    """Load settings.xml.

    A missing file yields empty settings, as Maven does.

    Raises:
        ConfigurationError: If the file is not well-formed XML.
    """
    if not path.exists():
        LOGGER.debug(f"No settings file at {path}")
        return Settings()

    root = parse_xml(path, "settings")
    ns = namespace(root)
    servers = []
    for element in root.findall(f"{ns}servers/{ns}server"):
        server_id = child_text(element, f"{ns}id")
        if not server_id:
            LOGGER.warning(f"Ignoring server without id in {path}")
            continue
        servers.append(Server(
            id=server_id,
            username=child_text(element, f"{ns}username"),
            password=child_text(element, f"{ns}password"),
        ))

    local_repository = child_text(root, f"{ns}localRepository")
    return Settings(
        offline=(child_text(root, f"{ns}offline") or "").lower() == "true",
        servers=servers,
        local_repository=Path(local_repository).expanduser() if local_repository else None,
    )


class SettingsDecrypter(ABC):
    """Turns a stored server entry into usable credentials."""

    @abstractmethod
    def decrypt(self, server: Server) -> Optional[Server]:
        """Return the decrypted server, or None when there is nothing to decrypt."""


class EnvironmentDecrypter(SettingsDecrypter):
    """Resolves ``${env.NAME}`` references in server usernames and passwords.

    Keeps secrets out of settings.xml on CI machines, where they are
    usually provided as environment variables.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def decrypt(self, server: Server) -> Optional[Server]:
        fields = (server.username, server.password)
        if not any(value and ENV_REFERENCE_PATTERN.search(value) for value in fields):
            return None
        return replace(
            server,
            username=self._resolve(server.username),
            password=self._resolve(server.password),
        )

    def _resolve(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return ENV_REFERENCE_PATTERN.sub(self._replace, value)

    def _replace(self, match: re.Match[str]) -> str:
        name = match.group(1)
        resolved = self._environ.get(name)
        if resolved is None:
            LOGGER.warning(f"Environment variable {name} referenced in settings is not set")
            return ""
        return resolved

