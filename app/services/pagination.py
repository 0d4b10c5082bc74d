"""Shared sort and pagination helpers for listing queries."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement
from sqlalchemy.orm import InstrumentedAttribute, Query

from app.schemas.base import normalize_field_name
from app.schemas.pagination import PaginationMeta
from app.services.errors import ValidationFailed

T = TypeVar("T")

SORT_ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the totals needed to navigate."""

    items: list[T]
    current_page: int
    last_page: int
    per_page: int
    total: int

    def meta(self) -> PaginationMeta:
        return PaginationMeta(
            current_page=self.current_page,
            last_page=self.last_page,
            per_page=self.per_page,
            total=self.total,
        )


def validate_page_params(page: int, per_page: int, max_per_page: int) -> dict[str, list[str]]:
    """Return per-field errors for page/perPage (empty when valid)."""
    errors: dict[str, list[str]] = {}
    if page < 1:
        errors["page"] = ["The page must be at least 1."]
    if per_page < 1:
        errors["perPage"] = ["The per page value must be at least 1."]
    elif per_page > max_per_page:
        errors["perPage"] = [f"The per page value may not be greater than {max_per_page}."]
    return errors


def validate_sort(
    sort_by: str,
    sort_order: str,
    sortable: Mapping[str, Any],
) -> tuple[str, str, dict[str, list[str]]]:
    """
    Normalize sort_by (camelCase accepted) and sort_order (case-insensitive).

    Returns (sort_by, sort_order, errors).
    """
    errors: dict[str, list[str]] = {}
    field = normalize_field_name(sort_by or "created_at")
    order = (sort_order or "desc").strip().lower()
    if field not in sortable:
        errors["sortBy"] = [f"The sort field must be one of: {', '.join(sorted(sortable))}."]
    if order not in SORT_ORDERS:
        errors["sortOrder"] = ["The sort order must be 'asc' or 'desc'."]
    return field, order, errors


def apply_sort(
    query: Query,
    sort_by: str,
    sort_order: str,
    sortable: Mapping[str, InstrumentedAttribute[Any] | ColumnElement[Any]],
    tiebreak: InstrumentedAttribute[Any],
) -> Query:
    """
    Single-key sort (a column or an ordering expression) with the primary key
    appended in the same direction for a stable order.
    """
    column = sortable[sort_by]
    direction = column.asc() if sort_order == "asc" else column.desc()
    clauses = [direction]
    if column is not tiebreak:
        clauses.append(tiebreak.asc() if sort_order == "asc" else tiebreak.desc())
    return query.order_by(*clauses)


def paginate(query: Query, page: int, per_page: int) -> Page:
    """
    Count matches, then fetch one page. A page past the end yields no items
    but keeps the true total and last_page.
    """
    if per_page < 1:
        raise ValidationFailed.single("perPage", "The per page value must be at least 1.")
    if page < 1:
        raise ValidationFailed.single("page", "The page must be at least 1.")
    total = query.order_by(None).count()
    last_page = max(1, math.ceil(total / per_page))
    items = query.offset((page - 1) * per_page).limit(per_page).all() if total else []
    return Page(
        items=items,
        current_page=page,
        last_page=last_page,
        per_page=per_page,
        total=total,
    )
