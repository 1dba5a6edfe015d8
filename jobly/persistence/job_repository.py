"""Job repository - CRUD and search over jobs."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from jobly.persistence.base import execute_positional, row_to_dict
from jobly.persistence.query_builder import (
    FilterPredicate,
    build_filter_where,
    build_partial_update,
    contains_pattern,
    render_where,
)

# Job fields already match their column names.
JOB_COLUMN_ALIASES: Mapping[str, str] = MappingProxyType({})

JOB_FILTERS: Mapping[str, FilterPredicate] = MappingProxyType(
    {
        "minSalary": FilterPredicate("salary >= {}"),
        "maxSalary": FilterPredicate("salary <= {}"),
        "title": FilterPredicate("title ILIKE {}", contains_pattern),
    }
)

JOB_COLUMNS = "id, title, salary, equity, company_handle"


class JobRepository:
    """CRUD operations for jobs."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists_for_company(self, title: str, company_handle: str) -> bool:
        result = await execute_positional(
            self.session,
            "SELECT id FROM jobs WHERE title = $1 AND company_handle = $2",
            [title, company_handle],
            query_name="job_exists_for_company",
        )
        return result.fetchone() is not None

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result = await execute_positional(
            self.session,
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}
            """,
            [data["title"], data.get("salary"), data.get("equity"), data["company_handle"]],
            query_name="job_create",
        )
        return row_to_dict(result.fetchone())

    async def find_all(self, filters: Mapping[str, Any]) -> list[dict[str, Any]]:
        """List jobs matching `filters`, ordered by title."""
        where_clause, params = build_filter_where(filters, JOB_FILTERS)
        result = await execute_positional(
            self.session,
            f"""
            SELECT {JOB_COLUMNS}
            FROM jobs
            {render_where(where_clause)}
            ORDER BY title
            """,
            params,
            query_name="job_find_all",
        )
        return [row_to_dict(row) for row in result.fetchall()]

    async def get(self, job_id: int) -> dict[str, Any] | None:
        result = await execute_positional(
            self.session,
            f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1",
            [job_id],
            query_name="job_get",
        )
        row = result.fetchone()
        if row is None:
            return None
        return row_to_dict(row)

    async def update(self, job_id: int, data: Mapping[str, Any]) -> dict[str, Any] | None:
        """Partially update a job. Returns None when no job matched."""
        set_clause, params = build_partial_update(data, JOB_COLUMN_ALIASES)
        id_idx = len(params) + 1
        result = await execute_positional(
            self.session,
            f"""
            UPDATE jobs
            SET {set_clause}
            WHERE id = ${id_idx}
            RETURNING {JOB_COLUMNS}
            """,
            [*params, job_id],
            query_name="job_update",
        )
        row = result.fetchone()
        if row is None:
            return None
        return row_to_dict(row)

    async def remove(self, job_id: int) -> bool:
        result = await execute_positional(
            self.session,
            "DELETE FROM jobs WHERE id = $1 RETURNING id",
            [job_id],
            query_name="job_remove",
        )
        return result.fetchone() is not None
