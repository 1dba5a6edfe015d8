"""Shared persistence helpers."""

import time
from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy import Result
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.metrics import jobly_db_query_failures_total, jobly_db_query_latency_seconds
from jobly.persistence.query_builder import bind_positional

logger = structlog.get_logger(__name__)


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert a SQLAlchemy row to a plain dict keyed by column label."""
    return dict(row._mapping)


async def execute_positional(
    session: AsyncSession,
    sql: str,
    params: Sequence[Any],
    *,
    query_name: str,
) -> Result[Any]:
    """Execute `$n`-style SQL on `session`, recording latency and failures."""
    query, bind_params = bind_positional(sql, params)
    logger.debug("Executing query", query_name=query_name, param_count=len(bind_params))

    started = time.perf_counter()
    try:
        result = await session.execute(query, bind_params)
    except Exception:
        jobly_db_query_failures_total.labels(query_name=query_name).inc()
        raise
    jobly_db_query_latency_seconds.labels(query_name=query_name).observe(
        time.perf_counter() - started
    )
    return result
