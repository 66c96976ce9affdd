"""Command line interface for hubdetect."""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from hubdetect.cli.runner import CLIRunner


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point of the ``hubdetect`` console script."""
    return CLIRunner().run(argv)


if __name__ == "__main__":
    sys.exit(main())
