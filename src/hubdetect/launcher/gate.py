"""Preconditions deciding whether hub-detect runs at all.

Every failed precondition here is a soft skip: it is logged and the run
ends successfully without touching the network or spawning a process.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hubdetect.config.models import HubDetectConfig
from hubdetect.core.logging import get_logger
from hubdetect.core.models import Credential
from hubdetect.host.session import BuildSession
from hubdetect.host.settings import SettingsDecrypter

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class GateResult:
    """Whether to proceed, with the credential to use when proceeding."""

    proceed: bool
    credential: Optional[Credential] = None
    reason: Optional[str] = None

    @classmethod
    def skip(cls, reason: str) -> "GateResult":
        return cls(proceed=False, reason=reason)


def check_preconditions(
    config: HubDetectConfig,
    session: BuildSession,
    decrypter: SettingsDecrypter,
) -> GateResult:
    """Check offline mode, required settings and the credential entry."""
    if session.is_offline or config.offline:
        LOGGER.info("Execution is offline, blackduck hub-detect is skipped")
        return GateResult.skip("offline")

    if config.blackduck_url is None:
        LOGGER.error("No url specified, please set blackduck_url")
        return GateResult.skip("no blackduck url")
    if config.blackduck_name is None:
        LOGGER.error("No name specified, please set blackduck_name")
        return GateResult.skip("no blackduck name")

    server = session.settings.find_server(config.server_id)
    if server is None:
        LOGGER.warning(f"No server '{config.server_id}', skipping blackduck execution")
        return GateResult.skip("no server")
    if server.is_skipped:
        LOGGER.warning(f"server '{config.server_id}' was configured to be skipped")
        return GateResult.skip("server skipped")

    decrypted = decrypter.decrypt(server)
    if decrypted is None:
        decrypted = server
    return GateResult(proceed=True, credential=decrypted.to_credential())
