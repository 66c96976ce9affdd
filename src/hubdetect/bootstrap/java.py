"""Locate the java executable used to launch hub-detect."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import Mapping

from hubdetect.core.logging import get_logger

LOGGER = get_logger(__name__)

JAVA_HOME_ENV = "JAVA_HOME"


def _java_binary_name() -> str:
    return "java.exe" if sys.platform == "win32" else "java"


def find_java_executable(environ: Mapping[str, str]) -> Path:
    """Find java from an explicit environment mapping.

    Resolution order:
    1. $JAVA_HOME/bin/java
    2. java found on $PATH
    3. bare ``java``, left to the OS to resolve at launch time

    Args:
        environ: Environment to read JAVA_HOME and PATH from.

    Returns:
        Path to the java executable.
    """
    java_home = environ.get(JAVA_HOME_ENV)
    if java_home:
        candidate = Path(java_home) / "bin" / _java_binary_name()
        LOGGER.debug(f"Using java from {JAVA_HOME_ENV}: {candidate}")
        return candidate

    on_path = shutil.which(_java_binary_name(), path=environ.get("PATH"))
    if on_path:
        LOGGER.debug(f"Using java from PATH: {on_path}")
        return Path(on_path)

    LOGGER.debug("java not found in JAVA_HOME or PATH, falling back to 'java'")
    return Path(_java_binary_name())
