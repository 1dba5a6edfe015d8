"""Company schemas.

Request and response bodies use the API's camelCase names (`numEmployees`,
`logoUrl`); Python attributes are snake_case.
"""

from collections.abc import Iterable
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jobly.schemas.v1.common import in_request_order
from jobly.schemas.v1.jobs import HANDLE_MAX_LENGTH, PG_INT_MAX, JobDetail

HANDLE_PATTERN = r"^[a-z0-9][a-z0-9-]*$"
URL_PATTERN = r"^https?://\S+$"


class CompanyCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handle: str = Field(min_length=1, max_length=HANDLE_MAX_LENGTH, pattern=HANDLE_PATTERN)
    name: str = Field(min_length=1)
    description: str
    num_employees: int | None = Field(default=None, ge=0, le=PG_INT_MAX, alias="numEmployees")
    logo_url: str | None = Field(default=None, alias="logoUrl", pattern=URL_PATTERN)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, ge=0, le=PG_INT_MAX, alias="numEmployees")
    logo_url: str | None = Field(default=None, alias="logoUrl", pattern=URL_PATTERN)

    @model_validator(mode="after")
    def reject_null_required_columns(self) -> Self:
        for field in ("name", "description"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def to_update_fields(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class CompanySearchParams(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    min_employees: int | None = Field(default=None, ge=0, le=PG_INT_MAX, alias="minEmployees")
    max_employees: int | None = Field(default=None, ge=0, le=PG_INT_MAX, alias="maxEmployees")
    name: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def check_employee_range(self) -> Self:
        if (
            self.min_employees is not None
            and self.max_employees is not None
            and self.min_employees > self.max_employees
        ):
            raise ValueError("minEmployees cannot be greater than maxEmployees")
        return self

    def to_filters(self, key_order: Iterable[str] = ()) -> dict[str, Any]:
        """Supplied filters keyed by their query names, in `key_order` when given."""
        return in_request_order(self.model_dump(by_alias=True, exclude_none=True), key_order)


class CompanyDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    handle: str
    name: str
    description: str
    num_employees: int | None = Field(default=None, alias="numEmployees")
    logo_url: str | None = Field(default=None, alias="logoUrl")


class CompanyWithJobs(CompanyDetail):
    jobs: list[JobDetail] = Field(default_factory=list)


class CompanyResponse(BaseModel):
    company: CompanyDetail


class CompanyWithJobsResponse(BaseModel):
    company: CompanyWithJobs


class CompanyListResponse(BaseModel):
    companies: list[CompanyDetail]
