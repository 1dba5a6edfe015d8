"""Helpers for building parameterized SQL fragments.

Fragments use PostgreSQL positional placeholders (`$1`, `$2`, ...) and come
paired with a parameter list in the same order. Identifiers and predicate
templates must be static/trusted (owned by application code), not user input.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from jobly.core.errors import InvalidInputError

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")
_LIKE_SPECIAL_RE = re.compile(r"([\\%_])")


def build_partial_update(
    update_fields: Mapping[str, Any],
    column_aliases: Mapping[str, str],
) -> tuple[str, list[Any]]:
    """Build the `SET` portion of an UPDATE from a sparse payload.

    Fields are assigned placeholders in iteration order; a field listed in
    `column_aliases` is written under its storage column name, any other field
    under its own name.

        >>> build_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        ('"first_name"=$1, "age"=$2', ['Aliya', 32])

    Raises InvalidInputError when `update_fields` is empty.
    """
    if not update_fields:
        raise InvalidInputError("No data", details={"reason": "empty_update"})

    assignments = [
        f'"{column_aliases.get(field, field)}"=${idx}'
        for idx, field in enumerate(update_fields, start=1)
    ]
    return ", ".join(assignments), list(update_fields.values())


def _identity(value: Any) -> Any:
    return value


def contains_pattern(value: Any) -> str:
    """Wrap `value` for a literal, case-insensitive substring match via ILIKE."""
    escaped = _LIKE_SPECIAL_RE.sub(r"\\\1", str(value))
    return f"%{escaped}%"


@dataclass(frozen=True)
class FilterPredicate:
    """One recognized filter: a SQL template plus a value transform.

    `template` holds a single `{}` slot that receives the placeholder, e.g.
    `"salary >= {}"`.
    """

    template: str
    transform: Callable[[Any], Any] = _identity

    def render(self, placeholder: str) -> str:
        return self.template.format(placeholder)


def build_filter_where(
    filters: Mapping[str, Any],
    predicates: Mapping[str, FilterPredicate],
    *,
    start_index: int = 1,
) -> tuple[str, list[Any]]:
    """Build `AND`-joined predicates for the recognized, non-None filters.

    Keys missing from `predicates` are ignored. Returns an empty clause when
    nothing applies.
    """
    conditions: list[str] = []
    params: list[Any] = []

    for key, value in filters.items():
        predicate = predicates.get(key)
        if predicate is None or value is None:
            continue
        params.append(predicate.transform(value))
        conditions.append(predicate.render(f"${start_index + len(params) - 1}"))

    return " AND ".join(conditions), params


def render_where(where_clause: str) -> str:
    return f"WHERE {where_clause}" if where_clause else ""


def bind_positional(sql: str, params: Sequence[Any]) -> tuple[TextClause, dict[str, Any]]:
    """Convert `$n` placeholders into named binds for `AsyncSession.execute`."""
    bind_params: dict[str, Any] = {}

    def _named(match: re.Match[str]) -> str:
        position = int(match.group(1))
        if not 1 <= position <= len(params):
            raise ValueError(
                f"Placeholder ${position} has no parameter ({len(params)} supplied)"
            )
        name = f"p{position}"
        bind_params[name] = params[position - 1]
        return f":{name}"

    return text(_PLACEHOLDER_RE.sub(_named, sql)), bind_params
