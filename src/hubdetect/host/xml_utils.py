"""Helpers for reading Maven XML files (pom.xml, settings.xml)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as ET  # type: ignore[import-untyped]

from hubdetect.core.errors import ConfigurationError


def parse_xml(path: Path, kind: str) -> Element:
    """Parse an XML file and return its root element.

    Raises:
        ConfigurationError: If the file is not well-formed.
    """
    try:
        return ET.parse(path).getroot()
    except ET.ParseError as e:
        raise ConfigurationError(f"Invalid {kind} file {path}: {e}") from e


def namespace(root: Element) -> str:
    """Return the ``{uri}`` prefix of the root tag, empty when unqualified."""
    if root.tag.startswith("{"):
        return root.tag[: root.tag.index("}") + 1]
    return ""


def child_text(element: Element, path: str) -> Optional[str]:
    """Trimmed text of the child at ``path``, None when absent or empty."""
    child = element.find(path)
    if child is None or child.text is None:
        return None
    return child.text.strip() or None
