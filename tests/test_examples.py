"""Smoke tests for all example scripts.

These tests verify that examples run without errors.
They don't verify correctness of results, just that the code executes.
"""

import subprocess
import sys
from pathlib import Path

EXAMPLES_DIR = Path(__file__).parent.parent / "attsim" / "examples"


def run_example(example_name: str, timeout: int = 120) -> subprocess.CompletedProcess:
    """Run an example script and return the result."""
    script_path = EXAMPLES_DIR / f"{example_name}.py"

    return subprocess.run(
        [sys.executable, str(script_path)],
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=Path(__file__).parent.parent,
    )


class TestExamplesSmoke:
    """Smoke tests that verify examples run without crashing."""

    def test_torque_free_spin_runs(self) -> None:
        result = run_example("torque_free_spin")
        assert result.returncode == 0, f"torque_free_spin failed:\n{result.stderr}"
        assert "torque-free" in result.stdout

    def test_lvlh_pointing_runs(self) -> None:
        result = run_example("lvlh_pointing")
        assert result.returncode == 0, f"lvlh_pointing failed:\n{result.stderr}"
        assert "Period" in result.stdout
