"""Test runner commands."""

import subprocess
import sys


def _pytest(*args: str) -> None:
    sys.exit(
        subprocess.run(
            [sys.executable, "-m", "pytest", *args, "-v", "--tb=short"],
            check=False,
        ).returncode
    )


def main() -> None:
    """Run unit tests."""
    _pytest("tests/unit")


def test_smoke() -> None:
    """Run smoke tests."""
    _pytest("tests/smoke")


def test_integration() -> None:
    """Run integration tests (requires DATABASE_URL_APP)."""
    _pytest("tests/integration")


def test_all() -> None:
    """Run all tests."""
    _pytest("tests/")
