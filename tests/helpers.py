"""Shared mock builders for repository and API tests."""

from typing import Any
from unittest.mock import MagicMock


def make_row(**columns: Any) -> MagicMock:
    """Mock row compatible with row_to_dict(): `_mapping` is a real dict."""
    row = MagicMock()
    row._mapping = columns
    return row


def make_result(fetchone_row: Any = None, fetchall_rows: list[Any] | None = None) -> MagicMock:
    result = MagicMock()
    result.fetchone.return_value = fetchone_row
    result.fetchall.return_value = fetchall_rows or []
    return result
