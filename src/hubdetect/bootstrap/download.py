"""Download utilities with SSL certificate handling.

All network access of hubdetect goes through here: the latest-version
query against the artifact index and artifact downloads. Certificates are
verified against certifi's CA bundle so standalone interpreters without a
system store still work.
"""

from __future__ import annotations

import shutil
import ssl
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urlparse
from urllib.request import Request, urlopen

import certifi

SUPPORTED_SCHEMES = ("http", "https")


def get_ssl_context() -> ssl.SSLContext:
    """Get an SSL context that uses certifi's CA bundle.

    Returns:
        An SSL context configured with certifi's CA certificates.
    """
    return ssl.create_default_context(cafile=certifi.where())


def secure_urlopen(
    url: str,
    timeout: Optional[float] = None,
    headers: Optional[Dict[str, str]] = None,
):
    """Open a URL with proper SSL certificate verification.

    Args:
        url: The URL to open.
        timeout: Connection timeout in seconds, None blocks indefinitely.
        headers: Extra request headers (e.g. Authorization).

    Returns:
        A file-like object for reading the response.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL is not HTTP(S).
    """
    scheme = urlparse(url).scheme
    if scheme not in SUPPORTED_SCHEMES:
        raise ValueError(f"Only HTTP(S) URLs are supported: {url}")

    request = Request(url, headers=headers or {})
    ssl_context = get_ssl_context() if scheme == "https" else None
    return urlopen(request, timeout=timeout, context=ssl_context)  # nosec B310


def read_url_text(url: str, timeout: Optional[float] = None) -> str:
    """Read a whole response body as UTF-8 text.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL is not HTTP(S).
    """
    with secure_urlopen(url, timeout=timeout) as response:
        return response.read().decode("utf-8")


def download_file(
    url: str,
    dest_path: Path,
    timeout: Optional[float] = None,
    headers: Optional[Dict[str, str]] = None,
) -> None:
    """Download a file from a URL with proper SSL certificate verification.

    The body is streamed to a sibling ``.part`` file that is renamed into
    place once complete, so an interrupted download never leaves a
    truncated artifact behind.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL is not HTTP(S).
        OSError: If the file cannot be written.
    """
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    part_path = dest_path.with_name(dest_path.name + ".part")
    try:
        with secure_urlopen(url, timeout=timeout, headers=headers) as response:
            with open(part_path, "wb") as f:
                shutil.copyfileobj(response, f)
        part_path.replace(dest_path)
    finally:
        part_path.unlink(missing_ok=True)
