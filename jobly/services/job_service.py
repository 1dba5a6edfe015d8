"""Job service - create, search, read, update and delete jobs."""

from collections.abc import Mapping
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.errors import InvalidInputError, NotFoundError
from jobly.core.metrics import jobly_resource_mutations_total
from jobly.persistence.company_repository import CompanyRepository
from jobly.persistence.job_repository import JobRepository

logger = structlog.get_logger(__name__)


class JobService:
    """Service for managing jobs."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.job_repo = JobRepository(session)
        self.company_repo = CompanyRepository(session)

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Create a job posting for an existing company.

        Raises NotFoundError for an unknown company and InvalidInputError when
        the company already has a job with the same title.
        """
        company_handle = data["company_handle"]
        if not await self.company_repo.exists(company_handle):
            raise NotFoundError(
                f"No company: {company_handle}", details={"handle": company_handle}
            )
        if await self.job_repo.exists_for_company(data["title"], company_handle):
            raise InvalidInputError(
                f"Duplicate job: {data['title']}",
                details={"title": data["title"], "company_handle": company_handle},
            )

        job = await self.job_repo.create(data)
        await self.session.commit()

        jobly_resource_mutations_total.labels(resource="job", action="create").inc()
        logger.info("Job created", job_id=job["id"], company_handle=company_handle)
        return job

    async def find_all(self, filters: Mapping[str, Any]) -> list[dict[str, Any]]:
        return await self.job_repo.find_all(filters)

    async def get(self, job_id: int) -> dict[str, Any]:
        job = await self.job_repo.get(job_id)
        if job is None:
            raise NotFoundError(f"No job: {job_id}", details={"id": job_id})
        return job

    async def update(self, job_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        job = await self.job_repo.update(job_id, data)
        if job is None:
            raise NotFoundError(f"No job: {job_id}", details={"id": job_id})
        await self.session.commit()

        jobly_resource_mutations_total.labels(resource="job", action="update").inc()
        logger.info("Job updated", job_id=job_id, fields=sorted(data))
        return job

    async def remove(self, job_id: int) -> None:
        if not await self.job_repo.remove(job_id):
            raise NotFoundError(f"No job: {job_id}", details={"id": job_id})
        await self.session.commit()

        jobly_resource_mutations_total.labels(resource="job", action="delete").inc()
        logger.info("Job deleted", job_id=job_id)
