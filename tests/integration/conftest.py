"""Pytest configuration and fixtures for integration tests."""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

FAKE_JAVA = '''#!{python}
import json
import os
import sys

record = os.environ.get("FAKE_JAVA_RECORD")
if record:
    with open(record, "w", encoding="utf-8") as f:
        json.dump(
            {{
                "argv": sys.argv[1:],
                "payload": os.environ.get("SPRING_APPLICATION_JSON"),
                "user": os.environ.get("FROM_CONFIG"),
            }},
            f,
        )
sys.exit(int(os.environ.get("FAKE_JAVA_EXIT", "0")))
'''


@pytest.fixture
def fake_java(tmp_path: Path) -> Path:
    """An executable standing in for java, recording how it was called.

    It exits with ``$FAKE_JAVA_EXIT`` and writes its arguments and the
    Spring payload to ``$FAKE_JAVA_RECORD`` as JSON.
    """
    script = tmp_path / "jdk" / "bin" / "java"
    script.parent.mkdir(parents=True)
    script.write_text(FAKE_JAVA.format(python=sys.executable))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script
