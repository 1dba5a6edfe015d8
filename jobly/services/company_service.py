"""Company service - create, search, read, update and delete companies."""

from collections.abc import Mapping
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.errors import InvalidInputError, NotFoundError
from jobly.core.metrics import jobly_resource_mutations_total
from jobly.persistence.company_repository import CompanyRepository

logger = structlog.get_logger(__name__)


def _duplicate_name_error(name: str) -> InvalidInputError:
    logger.info("Duplicate company name rejected", name=name)
    return InvalidInputError(f"Duplicate company name: {name}", details={"name": name})


class CompanyService:
    """Service for managing companies."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.company_repo = CompanyRepository(session)

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Create a company.

        Raises InvalidInputError if the handle or the name is already taken.
        """
        handle = data["handle"]
        if await self.company_repo.exists(handle):
            raise InvalidInputError(f"Duplicate company: {handle}", details={"handle": handle})

        try:
            company = await self.company_repo.create(data)
        except IntegrityError as exc:
            await self.session.rollback()
            if "name" not in data:
                raise
            raise _duplicate_name_error(data["name"]) from exc
        await self.session.commit()

        jobly_resource_mutations_total.labels(resource="company", action="create").inc()
        logger.info("Company created", handle=handle)
        return company

    async def find_all(self, filters: Mapping[str, Any]) -> list[dict[str, Any]]:
        return await self.company_repo.find_all(filters)

    async def get(self, handle: str) -> dict[str, Any]:
        """Get a company along with its jobs."""
        company = await self.company_repo.get(handle)
        if company is None:
            raise NotFoundError(f"No company: {handle}", details={"handle": handle})

        company["jobs"] = await self.company_repo.list_jobs(handle)
        return company

    async def update(self, handle: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Apply a partial update.

        Raises InvalidInputError when `data` is empty and NotFoundError when
        no company has this handle. Taking another company's name is an
        InvalidInputError as well.
        """
        try:
            company = await self.company_repo.update(handle, data)
        except IntegrityError as exc:
            await self.session.rollback()
            if "name" not in data:
                raise
            raise _duplicate_name_error(data["name"]) from exc
        if company is None:
            raise NotFoundError(f"No company: {handle}", details={"handle": handle})
        await self.session.commit()

        jobly_resource_mutations_total.labels(resource="company", action="update").inc()
        logger.info("Company updated", handle=handle, fields=sorted(data))
        return company

    async def remove(self, handle: str) -> None:
        if not await self.company_repo.remove(handle):
            raise NotFoundError(f"No company: {handle}", details={"handle": handle})
        await self.session.commit()

        jobly_resource_mutations_total.labels(resource="company", action="delete").inc()
        logger.info("Company deleted", handle=handle)
