"""Company routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.database import get_session
from jobly.core.dependencies import RequireAdmin
from jobly.schemas.v1.common import DeletedResponse
from jobly.schemas.v1.companies import (
    CompanyCreate,
    CompanyListResponse,
    CompanyResponse,
    CompanySearchParams,
    CompanyUpdate,
    CompanyWithJobsResponse,
)
from jobly.services.company_service import CompanyService

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    request: CompanyCreate,
    user: RequireAdmin,
    session: AsyncSession = Depends(get_session),
):
    """Create a company."""
    company = await CompanyService(session).create(request.to_record())
    return CompanyResponse(company=company)


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    request: Request,
    filters: Annotated[CompanySearchParams, Query()],
    session: AsyncSession = Depends(get_session),
):
    """List companies ordered by name.

    Optional filters: `minEmployees`, `maxEmployees` and `name`
    (case-insensitive partial match).
    """
    search = filters.to_filters(request.query_params.keys())
    companies = await CompanyService(session).find_all(search)
    return CompanyListResponse(companies=companies)


@router.get("/{handle}", response_model=CompanyWithJobsResponse)
async def get_company(
    handle: str,
    session: AsyncSession = Depends(get_session),
):
    """Get a company and its jobs."""
    company = await CompanyService(session).get(handle)
    return CompanyWithJobsResponse(company=company)


@router.patch("/{handle}", response_model=CompanyResponse)
async def update_company(
    handle: str,
    request: CompanyUpdate,
    user: RequireAdmin,
    session: AsyncSession = Depends(get_session),
):
    """Partially update a company."""
    company = await CompanyService(session).update(handle, request.to_update_fields())
    return CompanyResponse(company=company)


@router.delete("/{handle}", response_model=DeletedResponse)
async def delete_company(
    handle: str,
    user: RequireAdmin,
    session: AsyncSession = Depends(get_session),
):
    await CompanyService(session).remove(handle)
    return DeletedResponse(deleted=handle)
