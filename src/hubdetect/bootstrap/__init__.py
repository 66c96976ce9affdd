"""
Bootstrap module for hubdetect.

This module handles:
- Home and settings locations (~/.hubdetect, ~/.m2)
- HTTP access with certifi-backed certificate verification
- Locating the java executable used to launch hub-detect
"""

from hubdetect.bootstrap.paths import get_hubdetect_home, HubDetectPaths
from hubdetect.bootstrap.download import download_file, read_url_text, secure_urlopen
from hubdetect.bootstrap.java import find_java_executable

__all__ = [
    "get_hubdetect_home",
    "HubDetectPaths",
    "download_file",
    "read_url_text",
    "secure_urlopen",
    "find_java_executable",
]
