"""Create the Jobly tables.

Applies every `db/migrations/*.sql` file in name order. Statements use
`IF NOT EXISTS`, so re-running against an initialized database is harmless.
"""

import asyncio
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent.parent / "db" / "migrations"


def _extract_statements(sql: str) -> list[str]:
    """Split SQL on ';' and drop comment-only chunks."""
    statements = []
    for chunk in sql.split(";"):
        sql_lines = [line for line in chunk.splitlines() if not line.strip().startswith("--")]
        stmt = "\n".join(sql_lines).strip()
        if stmt:
            statements.append(stmt)
    return statements


async def setup() -> None:
    from sqlalchemy import text
    from sqlalchemy.ext.asyncio import create_async_engine

    from jobly.core.config import get_settings

    database_url = get_settings().database.admin_async_url
    engine = create_async_engine(database_url)

    migration_files = sorted(MIGRATIONS_DIR.glob("*.sql"))
    if not migration_files:
        logger.error(f"No migration files found in {MIGRATIONS_DIR}")
        sys.exit(1)

    try:
        for migration_file in migration_files:
            logger.info(f"Running migration: {migration_file.name}")
            async with engine.begin() as conn:
                for statement in _extract_statements(migration_file.read_text()):
                    await conn.execute(text(statement))
    finally:
        await engine.dispose()

    logger.info("Database setup complete")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(setup())
