"""
Filtered, sorted, paginated resource listing.

Criteria combine with AND; the values of a multi-value filter (status,
priority) combine with OR. Empty criteria are ignored. The caller's
visibility predicate and the soft-delete exclusion narrow the candidate set
before any explicit filter.
"""

import logging
from typing import TYPE_CHECKING

from sqlalchemy import case, func, literal, or_, select
from sqlalchemy.orm import Session

from app.models import Resource
from app.schemas.auth import Caller
from app.schemas.resource import (
    RESOURCE_PRIORITY_VALUES,
    RESOURCE_STATUS_VALUES,
    RESOURCE_TYPE_VALUES,
    ResourceFilters,
)
from app.services.access import visible_resource_conditions
from app.services.errors import ValidationFailed
from app.services.pagination import Page, apply_sort, paginate, validate_page_params, validate_sort

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def declaration_order(column, values: tuple[str, ...]):
    """Rank enum values by their declared position (low < medium < high < urgent), not alphabetically."""
    return case({value: rank for rank, value in enumerate(values)}, value=column, else_=len(values))


SORTABLE_COLUMNS = {
    "id": Resource.id,
    "name": Resource.name,
    "type": declaration_order(Resource.type, RESOURCE_TYPE_VALUES),
    "status": declaration_order(Resource.status, RESOURCE_STATUS_VALUES),
    "priority": declaration_order(Resource.priority, RESOURCE_PRIORITY_VALUES),
    "due_date": Resource.due_date,
    "created_at": Resource.created_at,
    "updated_at": Resource.updated_at,
}

LIKE_ESCAPE = "\\"

# Table-valued function expanding a JSON array into one row per element, by dialect.
JSON_ARRAY_ELEMENTS = {
    "sqlite": func.json_each,
    "postgresql": func.json_array_elements_text,
}


def split_multi_value(values: list[str] | str | None) -> list[str]:
    """Flatten repeated and comma-separated values: ['a,b', 'c'] -> ['a', 'b', 'c']."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    out: list[str] = []
    for value in values:
        for part in value.split(","):
            part = part.strip().lower()
            if part and part not in out:
                out.append(part)
    return out


def like_pattern(term: str) -> str:
    """Substring LIKE pattern with wildcard characters in the term escaped."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def validate_resource_filters(filters: ResourceFilters, settings: "Settings") -> ResourceFilters:
    """
    Normalize and check listing criteria; raise ValidationFailed with per-field
    messages (keyed by their camelCase names) on any violation.
    """
    errors: dict[str, list[str]] = {}

    statuses = split_multi_value(filters.status)
    bad = [s for s in statuses if s not in RESOURCE_STATUS_VALUES]
    if bad:
        errors["status"] = [f"The selected status is invalid: {', '.join(bad)}."]

    priorities = split_multi_value(filters.priority)
    bad = [p for p in priorities if p not in RESOURCE_PRIORITY_VALUES]
    if bad:
        errors["priority"] = [f"The selected priority is invalid: {', '.join(bad)}."]

    resource_type = (filters.type or "").strip().lower() or None
    if resource_type is not None and resource_type not in RESOURCE_TYPE_VALUES:
        errors["type"] = [f"The selected type is invalid: {resource_type}."]

    if filters.assigned_to is not None and filters.assigned_to < 1:
        errors["assignedTo"] = ["The assigned user id must be a positive integer."]

    sort_by, sort_order, sort_errors = validate_sort(
        filters.sort_by, filters.sort_order, SORTABLE_COLUMNS
    )
    errors.update(sort_errors)
    errors.update(validate_page_params(filters.page, filters.per_page, settings.MAX_PER_PAGE))

    if errors:
        raise ValidationFailed(errors)

    search = (filters.search or "").strip() or None
    return filters.model_copy(
        update={
            "search": search,
            "status": statuses,
            "priority": priorities,
            "type": resource_type,
            "sort_by": sort_by,
            "sort_order": sort_order,
        }
    )


def tag_matches(dialect_name: str, pattern: str):
    """
    EXISTS over the individual tag strings, so JSON punctuation and escaping
    in the stored document never take part in the match.
    """
    tag = JSON_ARRAY_ELEMENTS[dialect_name](Resource.tags).table_valued("value", name="tag")
    return (
        select(literal(1))
        .select_from(tag)
        .where(tag.c.value.ilike(pattern, escape=LIKE_ESCAPE))
        .exists()
    )


def build_resource_query(db: Session, caller: Caller, filters: ResourceFilters):
    """Visibility first, then the explicit AND-of-filters, then the sort. Expects validated filters."""
    query = db.query(Resource).filter(*visible_resource_conditions(caller))

    if filters.search:
        pattern = like_pattern(filters.search)
        query = query.filter(
            or_(
                Resource.name.ilike(pattern, escape=LIKE_ESCAPE),
                Resource.description.ilike(pattern, escape=LIKE_ESCAPE),
                tag_matches(db.get_bind().dialect.name, pattern),
            )
        )
    if filters.status:
        query = query.filter(Resource.status.in_(filters.status))
    if filters.priority:
        query = query.filter(Resource.priority.in_(filters.priority))
    if filters.type:
        query = query.filter(Resource.type == filters.type)
    if filters.assigned_to is not None:
        query = query.filter(Resource.assigned_to == filters.assigned_to)

    return apply_sort(query, filters.sort_by, filters.sort_order, SORTABLE_COLUMNS, Resource.id)


def list_resources(
    db: Session,
    caller: Caller,
    filters: ResourceFilters,
    settings: "Settings",
) -> Page[Resource]:
    """Validate criteria and return the requested page of visible resources."""
    filters = validate_resource_filters(filters, settings)
    page = paginate(build_resource_query(db, caller, filters), filters.page, filters.per_page)
    logger.debug(
        "Resource listing: user_id=%s admin=%s total=%s page=%s/%s",
        caller.id,
        caller.is_admin,
        page.total,
        page.current_page,
        page.last_page,
    )
    return page
