"""Company repository - CRUD and search over companies."""

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

COMPANY_COLUMN_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "numEmployees": "num_employees",
        "logoUrl": "logo_url",
    }
)

COMPANY_FILTERS: Mapping[str, FilterPredicate] = MappingProxyType(
    {
        "minEmployees": FilterPredicate("num_employees >= {}"),
        "maxEmployees": FilterPredicate("num_employees <= {}"),
        "name": FilterPredicate("name ILIKE {}", contains_pattern),
    }
)

COMPANY_COLUMNS = (
    'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


class CompanyRepository:
    """CRUD operations for companies."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, handle: str) -> bool:
        result = await execute_positional(
            self.session,
            "SELECT handle FROM companies WHERE handle = $1",
            [handle],
            query_name="company_exists",
        )
        return result.fetchone() is not None

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a company; `data` uses the external (camelCase) field names."""
        result = await execute_positional(
            self.session,
            f"""
            INSERT INTO companies
                (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}
            """,
            [
                data["handle"],
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
            query_name="company_create",
        )
        return row_to_dict(result.fetchone())

    async def find_all(self, filters: Mapping[str, Any]) -> list[dict[str, Any]]:
        """List companies matching `filters`, ordered by name."""
        where_clause, params = build_filter_where(filters, COMPANY_FILTERS)
        result = await execute_positional(
            self.session,
            f"""
            SELECT {COMPANY_COLUMNS}
            FROM companies
            {render_where(where_clause)}
            ORDER BY name
            """,
            params,
            query_name="company_find_all",
        )
        return [row_to_dict(row) for row in result.fetchall()]

    async def get(self, handle: str) -> dict[str, Any] | None:
        result = await execute_positional(
            self.session,
            f"""
            SELECT {COMPANY_COLUMNS}
            FROM companies
            WHERE handle = $1
            """,
            [handle],
            query_name="company_get",
        )
        row = result.fetchone()
        if row is None:
            return None
        return row_to_dict(row)

    async def list_jobs(self, handle: str) -> list[dict[str, Any]]:
        """Jobs posted by a company, oldest first."""
        result = await execute_positional(
            self.session,
            """
            SELECT id, title, salary, equity, company_handle
            FROM jobs
            WHERE company_handle = $1
            ORDER BY id
            """,
            [handle],
            query_name="company_list_jobs",
        )
        return [row_to_dict(row) for row in result.fetchall()]

    async def update(self, handle: str, data: Mapping[str, Any]) -> dict[str, Any] | None:
        """Partially update a company. Returns None when no company matched."""
        set_clause, params = build_partial_update(data, COMPANY_COLUMN_ALIASES)
        handle_idx = len(params) + 1
        result = await execute_positional(
            self.session,
            f"""
            UPDATE companies
            SET {set_clause}
            WHERE handle = ${handle_idx}
            RETURNING {COMPANY_COLUMNS}
            """,
            [*params, handle],
            query_name="company_update",
        )
        row = result.fetchone()
        if row is None:
            return None
        return row_to_dict(row)

    async def remove(self, handle: str) -> bool:
        """Delete a company. Returns False when no company matched."""
        result = await execute_positional(
            self.session,
            "DELETE FROM companies WHERE handle = $1 RETURNING handle",
            [handle],
            query_name="company_remove",
        )
        return result.fetchone() is not None
