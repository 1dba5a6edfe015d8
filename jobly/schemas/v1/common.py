"""Common schemas: error and deletion responses, search-filter ordering."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel


class ApiError(BaseModel):
    code: str
    detail: str
    errors: dict[str, Any] | list[str] | None = None


class DeletedResponse(BaseModel):
    deleted: str


def in_request_order(values: dict[str, Any], key_order: Iterable[str]) -> dict[str, Any]:
    """Reorder `values` to follow `key_order`; keys it does not name go last."""
    ordered = {key: values[key] for key in key_order if key in values}
    ordered.update(values)
    return ordered
