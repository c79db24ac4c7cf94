"""Smoke: the package compiles and imports."""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))


def test_elv_core_compiles() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "compileall", "-q", str(ROOT / "elv_core")],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0, result.stdout + result.stderr


def test_public_api_imports() -> None:
    import elv_core

    for name in elv_core.__all__:
        assert hasattr(elv_core, name), name
