"""Job schemas."""

from collections.abc import Iterable
from decimal import Decimal
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jobly.schemas.v1.common import in_request_order

HANDLE_MAX_LENGTH = 25
# Upper bound of a PostgreSQL INTEGER column.
PG_INT_MAX = 2_147_483_647


class JobCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0, le=PG_INT_MAX)
    equity: Decimal | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=HANDLE_MAX_LENGTH)


class JobUpdate(BaseModel):
    """Partial update; `company_handle` cannot change."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0, le=PG_INT_MAX)
    equity: Decimal | None = Field(default=None, ge=0, le=1)

    @model_validator(mode="after")
    def reject_null_title(self) -> Self:
        if "title" in self.model_fields_set and self.title is None:
            raise ValueError("title cannot be null")
        return self

    def to_update_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class JobSearchParams(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    min_salary: int | None = Field(default=None, ge=0, le=PG_INT_MAX, alias="minSalary")
    max_salary: int | None = Field(default=None, ge=0, le=PG_INT_MAX, alias="maxSalary")
    title: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def check_salary_range(self) -> Self:
        if (
            self.min_salary is not None
            and self.max_salary is not None
            and self.min_salary > self.max_salary
        ):
            raise ValueError("minSalary cannot be greater than maxSalary")
        return self

    def to_filters(self, key_order: Iterable[str] = ()) -> dict[str, Any]:
        """Supplied filters keyed by their query names, in `key_order` when given."""
        return in_request_order(self.model_dump(by_alias=True, exclude_none=True), key_order)


class JobDetail(BaseModel):
    id: int
    title: str
    salary: int | None = None
    equity: Decimal | None = None
    company_handle: str


class JobResponse(BaseModel):
    job: JobDetail


class JobListResponse(BaseModel):
    jobs: list[JobDetail]
