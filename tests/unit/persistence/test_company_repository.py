"""Unit tests for CompanyRepository."""

from unittest.mock import AsyncMock

import pytest

from jobly.core.errors import InvalidInputError
from jobly.persistence.company_repository import CompanyRepository
from tests.helpers import make_result, make_row


def _executed(mock_session, call_index: int = 0) -> tuple[str, dict]:
    """Return (sql, params) of the n-th execute() call."""
    query, params = mock_session.execute.call_args_list[call_index].args
    return " ".join(query.text.split()), params


@pytest.mark.asyncio
async def test_find_all_without_filters_has_no_where(mock_session, company_row):
    mock_session.execute = AsyncMock(return_value=make_result(fetchall_rows=[company_row]))
    repo = CompanyRepository(mock_session)

    companies = await repo.find_all({})

    sql, params = _executed(mock_session)
    assert "WHERE" not in sql
    assert sql.endswith("FROM companies ORDER BY name")
    assert params == {}
    assert companies == [
        {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }
    ]


@pytest.mark.asyncio
async def test_find_all_with_filters_builds_where(mock_session):
    repo = CompanyRepository(mock_session)

    await repo.find_all({"minEmployees": 2, "maxEmployees": 3, "name": "C"})

    sql, params = _executed(mock_session)
    assert (
        "WHERE num_employees >= :p1 AND num_employees <= :p2 AND name ILIKE :p3 ORDER BY name"
        in sql
    )
    assert params == {"p1": 2, "p2": 3, "p3": "%C%"}


@pytest.mark.asyncio
async def test_find_all_ignores_unrecognized_filters(mock_session):
    repo = CompanyRepository(mock_session)

    await repo.find_all({"invalid": None, "color": "red"})

    sql, params = _executed(mock_session)
    assert "WHERE" not in sql
    assert params == {}


@pytest.mark.asyncio
async def test_get_returns_none_when_missing(mock_session):
    repo = CompanyRepository(mock_session)

    assert await repo.get("nope") is None
    _, params = _executed(mock_session)
    assert params == {"p1": "nope"}


@pytest.mark.asyncio
async def test_update_maps_camel_case_fields_to_columns(mock_session, company_row):
    mock_session.execute = AsyncMock(return_value=make_result(fetchone_row=company_row))
    repo = CompanyRepository(mock_session)

    company = await repo.update("c1", {"name": "New", "numEmployees": 10, "logoUrl": None})

    sql, params = _executed(mock_session)
    assert 'SET "name"=:p1, "num_employees"=:p2, "logo_url"=:p3 WHERE handle = :p4' in sql
    assert "RETURNING" in sql
    assert params == {"p1": "New", "p2": 10, "p3": None, "p4": "c1"}
    assert company["handle"] == "c1"


@pytest.mark.asyncio
async def test_update_returns_none_when_no_row_matched(mock_session):
    repo = CompanyRepository(mock_session)

    assert await repo.update("nope", {"name": "New"}) is None


@pytest.mark.asyncio
async def test_update_with_no_data_raises_before_querying(mock_session):
    repo = CompanyRepository(mock_session)

    with pytest.raises(InvalidInputError):
        await repo.update("c1", {})

    mock_session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_create_binds_all_columns(mock_session, company_row):
    mock_session.execute = AsyncMock(return_value=make_result(fetchone_row=company_row))
    repo = CompanyRepository(mock_session)

    await repo.create(
        {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }
    )

    sql, params = _executed(mock_session)
    assert sql.startswith("INSERT INTO companies")
    assert params == {
        "p1": "c1",
        "p2": "C1",
        "p3": "Desc1",
        "p4": 1,
        "p5": "http://c1.img",
    }


@pytest.mark.asyncio
async def test_list_jobs_orders_by_id(mock_session):
    mock_session.execute = AsyncMock(
        return_value=make_result(
            fetchall_rows=[make_row(id=1, title="j1", salary=10, equity=None, company_handle="c1")]
        )
    )
    repo = CompanyRepository(mock_session)

    jobs = await repo.list_jobs("c1")

    sql, _ = _executed(mock_session)
    assert "WHERE company_handle = :p1 ORDER BY id" in sql
    assert jobs[0]["title"] == "j1"


@pytest.mark.asyncio
async def test_remove_reports_whether_a_row_was_deleted(mock_session):
    repo = CompanyRepository(mock_session)
    assert await repo.remove("nope") is False

    mock_session.execute = AsyncMock(return_value=make_result(fetchone_row=make_row(handle="c1")))
    assert await repo.remove("c1") is True
