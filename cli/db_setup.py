"""Database setup commands.

Usage:
    uv run db-init          # Create tables in the configured database
"""

import subprocess
import sys
from pathlib import Path

_SETUP_DB_SCRIPT = Path(__file__).parent.parent / "scripts" / "setup_database.py"


def db_init() -> None:
    """Create the Jobly tables if they do not exist."""
    sys.exit(subprocess.run([sys.executable, str(_SETUP_DB_SCRIPT)], check=False).returncode)
