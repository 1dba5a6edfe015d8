"""Job routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.database import get_session
from jobly.core.dependencies import RequireAdmin
from jobly.schemas.v1.common import DeletedResponse
from jobly.schemas.v1.jobs import (
    PG_INT_MAX,
    JobCreate,
    JobListResponse,
    JobResponse,
    JobSearchParams,
    JobUpdate,
)
from jobly.services.job_service import JobService

router = APIRouter(prefix="/jobs", tags=["jobs"])

JobId = Annotated[int, Path(ge=1, le=PG_INT_MAX)]


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    request: JobCreate,
    user: RequireAdmin,
    session: AsyncSession = Depends(get_session),
):
    """Create a job for an existing company."""
    job = await JobService(session).create(request.model_dump())
    return JobResponse(job=job)


@router.get("", response_model=JobListResponse)
async def list_jobs(
    request: Request,
    filters: Annotated[JobSearchParams, Query()],
    session: AsyncSession = Depends(get_session),
):
    """List jobs ordered by title.

    Optional filters: `minSalary`, `maxSalary` and `title`
    (case-insensitive partial match).
    """
    search = filters.to_filters(request.query_params.keys())
    jobs = await JobService(session).find_all(search)
    return JobListResponse(jobs=jobs)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: JobId,
    session: AsyncSession = Depends(get_session),
):
    job = await JobService(session).get(job_id)
    return JobResponse(job=job)


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: JobId,
    request: JobUpdate,
    user: RequireAdmin,
    session: AsyncSession = Depends(get_session),
):
    """Partially update a job's title, salary or equity."""
    job = await JobService(session).update(job_id, request.to_update_fields())
    return JobResponse(job=job)


@router.delete("/{job_id}", response_model=DeletedResponse)
async def delete_job(
    job_id: JobId,
    user: RequireAdmin,
    session: AsyncSession = Depends(get_session),
):
    await JobService(session).remove(job_id)
    return DeletedResponse(deleted=str(job_id))
