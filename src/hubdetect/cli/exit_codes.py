"""Exit codes for the hubdetect CLI.

- 0: Success, including skipped runs (offline, not configured)
- 1: hub-detect exited with an unexpected status
- 2: hub-detect could not be launched or was interrupted
- 3: Invalid usage (bad arguments, invalid configuration)
- 4: Bootstrap failure (hub-detect jar could not be obtained)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_EXIT_CODE_MISMATCH = 1
EXIT_LAUNCH_ERROR = 2
EXIT_INVALID_USAGE = 3
EXIT_BOOTSTRAP_FAILURE = 4
