"""Argument parser construction for the hubdetect CLI.

This module builds the argument parser with subcommands:
- hubdetect detect - Download (if needed) and run hub-detect
- hubdetect status - Show configuration and cache status
"""

from __future__ import annotations

import argparse
from pathlib import Path


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show hubdetect version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    """Options locating the project and its configuration."""
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Maven project directory or pom.xml (default: current directory).",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: hubdetect.yml in project root).",
    )
    parser.add_argument(
        "-D", "--define",
        action="append",
        dest="defines",
        default=[],
        metavar="PROPERTY=VALUE",
        help="Set a hub-detect property, e.g. -D hub-detect.blackduckUrl=https://... "
             "(can be specified multiple times).",
    )


def _build_detect_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'detect' subcommand parser."""
    detect_parser = subparsers.add_parser(
        "detect",
        help="Run Black Duck hub-detect on the project.",
        description=(
            "Download hub-detect if it is not cached yet, run it with the "
            "Black Duck credentials of settings.xml and check its exit code."
        ),
    )
    _add_project_options(detect_parser)
    detect_parser.add_argument(
        "--settings", "-s",
        metavar="PATH",
        type=Path,
        help="Path to Maven settings.xml (default: ~/.m2/settings.xml).",
    )
    detect_parser.add_argument(
        "--offline", "-o",
        action="store_true",
        help="Work offline: hub-detect is skipped.",
    )


def _build_status_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'status' subcommand parser."""
    status_parser = subparsers.add_parser(
        "status",
        help="Show configuration and hub-detect cache status.",
        description=(
            "Display hubdetect version, effective configuration, "
            "whether hub-detect is cached and which java runs it."
        ),
    )
    _add_project_options(status_parser)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="hubdetect",
        description="hubdetect - run Black Duck hub-detect on Maven projects.",
    )
    _add_global_options(parser)

    subparsers = parser.add_subparsers(dest="command")
    _build_detect_parser(subparsers)
    _build_status_parser(subparsers)

    return parser
