"""Unit tests for JobRepository."""

from unittest.mock import AsyncMock

import pytest

from jobly.core.errors import InvalidInputError
from jobly.persistence.job_repository import JobRepository
from tests.helpers import make_result, make_row


def _executed(mock_session) -> tuple[str, dict]:
    query, params = mock_session.execute.call_args.args
    return " ".join(query.text.split()), params


@pytest.mark.asyncio
async def test_find_all_salary_range(mock_session, job_row):
    mock_session.execute = AsyncMock(return_value=make_result(fetchall_rows=[job_row]))
    repo = JobRepository(mock_session)

    jobs = await repo.find_all({"minSalary": 10, "maxSalary": 15})

    sql, params = _executed(mock_session)
    assert "FROM jobs WHERE salary >= :p1 AND salary <= :p2 ORDER BY title" in sql
    assert params == {"p1": 10, "p2": 15}
    assert [job["title"] for job in jobs] == ["j1"]


@pytest.mark.asyncio
async def test_find_all_title_is_substring_match(mock_session):
    repo = JobRepository(mock_session)

    await repo.find_all({"title": "Engineer"})

    sql, params = _executed(mock_session)
    assert "WHERE title ILIKE :p1" in sql
    assert params == {"p1": "%Engineer%"}


@pytest.mark.asyncio
async def test_find_all_no_filters(mock_session):
    repo = JobRepository(mock_session)

    assert await repo.find_all({}) == []

    sql, params = _executed(mock_session)
    assert "WHERE" not in sql
    assert sql.endswith("ORDER BY title")
    assert params == {}


@pytest.mark.asyncio
async def test_update_uses_field_names_and_trailing_id(mock_session, job_row):
    mock_session.execute = AsyncMock(return_value=make_result(fetchone_row=job_row))
    repo = JobRepository(mock_session)

    job = await repo.update(1, {"title": "j1", "salary": 10})

    sql, params = _executed(mock_session)
    assert 'SET "title"=:p1, "salary"=:p2 WHERE id = :p3' in sql
    assert params == {"p1": "j1", "p2": 10, "p3": 1}
    assert job["id"] == 1


@pytest.mark.asyncio
async def test_update_empty_payload_raises(mock_session):
    repo = JobRepository(mock_session)

    with pytest.raises(InvalidInputError):
        await repo.update(1, {})


@pytest.mark.asyncio
async def test_get_missing_job_returns_none(mock_session):
    repo = JobRepository(mock_session)

    assert await repo.get(999) is None


@pytest.mark.asyncio
async def test_exists_for_company_checks_title_and_handle(mock_session):
    mock_session.execute = AsyncMock(return_value=make_result(fetchone_row=make_row(id=4)))
    repo = JobRepository(mock_session)

    assert await repo.exists_for_company("j1", "c1") is True
    _, params = _executed(mock_session)
    assert params == {"p1": "j1", "p2": "c1"}
