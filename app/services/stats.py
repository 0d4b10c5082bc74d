"""
Dashboard aggregation: grouped counts, overdue detection, recent activity,
user directory statistics and the monthly creation series.

Each figure is its own read against current state. The reads are not wrapped
in one snapshot, so under concurrent writes the figures may reflect slightly
different moments; sums across groups are exact only for a quiescent store.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import extract, func
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.models import Resource, Role, User, role_user
from app.schemas.auth import Caller
from app.schemas.resource import ResourceRead
from app.schemas.stats import DashboardResponse, ResourceStats, UserStats, UserStatusCounts
from app.schemas.user import UserRead
from app.services.access import require_user_directory_access, visible_resource_conditions

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

RECENT_REGISTRATIONS_LIMIT = 5


def grouped_counts(
    db: Session,
    column,
    conditions: Iterable[ColumnElement[bool]],
) -> dict[str, int]:
    """value -> count for the given column; values with no rows are absent."""
    rows = (
        db.query(column, func.count(Resource.id))
        .filter(*conditions)
        .group_by(column)
        .all()
    )
    return {value: count for value, count in rows}


def overdue_count(
    db: Session,
    conditions: Iterable[ColumnElement[bool]],
    now: datetime,
    excluded_statuses: Iterable[str],
) -> int:
    """Due date set and strictly before now, status not in excluded_statuses."""
    query = (
        db.query(func.count(Resource.id))
        .filter(*conditions)
        .filter(Resource.due_date.is_not(None), Resource.due_date < now)
    )
    excluded = list(excluded_statuses)
    if excluded:
        query = query.filter(Resource.status.not_in(excluded))
    return query.scalar() or 0


def recent_activity(
    db: Session,
    conditions: Iterable[ColumnElement[bool]],
    limit: int,
) -> list[Resource]:
    """Most recently updated resources, owner and assignee loaded."""
    return (
        db.query(Resource)
        .filter(*conditions)
        .order_by(Resource.updated_at.desc(), Resource.id.desc())
        .limit(limit)
        .all()
    )


def resource_stats(
    db: Session,
    caller: Caller,
    settings: "Settings",
    now: datetime | None = None,
) -> ResourceStats:
    """Resource figures over everything the caller can see (global for administrators)."""
    now = now or datetime.now(timezone.utc)
    conditions = visible_resource_conditions(caller)
    total = db.query(func.count(Resource.id)).filter(*conditions).scalar() or 0
    stats = ResourceStats(
        total_resources=total,
        by_status=grouped_counts(db, Resource.status, conditions),
        by_priority=grouped_counts(db, Resource.priority, conditions),
        by_type=grouped_counts(db, Resource.type, conditions),
        overdue=overdue_count(db, conditions, now, settings.OVERDUE_EXCLUDED_STATUSES),
        recent_activity=[
            ResourceRead.model_validate(r)
            for r in recent_activity(db, conditions, settings.RECENT_ACTIVITY_LIMIT)
        ],
    )
    logger.info(
        "Resource stats computed",
        extra={
            "user_id": caller.id,
            "scope": "global" if caller.is_admin else "own",
            "total_resources": stats.total_resources,
            "overdue": stats.overdue,
        },
    )
    return stats


def user_stats(db: Session, caller: Caller, limit: int = RECENT_REGISTRATIONS_LIMIT) -> UserStats:
    """
    User directory figures (administrator only). A user holding several roles
    is counted once under each of them.
    """
    require_user_directory_access(caller)

    total = db.query(func.count(User.id)).scalar() or 0
    role_rows = (
        db.query(Role.name, func.count(role_user.c.user_id))
        .join(role_user, role_user.c.role_id == Role.id)
        .group_by(Role.name)
        .all()
    )
    active = (
        db.query(func.count(User.id)).filter(User.email_verified_at.is_not(None)).scalar() or 0
    )
    invited = db.query(func.count(User.id)).filter(User.email_verified_at.is_(None)).scalar() or 0
    recent = db.query(User).order_by(User.created_at.desc(), User.id.desc()).limit(limit).all()

    return UserStats(
        total_users=total,
        by_role={name: count for name, count in role_rows},
        by_status=UserStatusCounts(active=active, invited=invited),
        recent_registrations=[UserRead.model_validate(u) for u in recent],
    )


def monthly_resource_counts(db: Session, caller: Caller, year: int) -> dict[int, int]:
    """Resources created in each month (1-12) of year within the caller's visibility; zero-filled."""
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    month = extract("month", Resource.created_at)
    rows = (
        db.query(month, func.count(Resource.id))
        .filter(*visible_resource_conditions(caller))
        .filter(Resource.created_at >= start, Resource.created_at < end)
        .group_by(month)
        .all()
    )
    counts = {int(m): c for m, c in rows}
    return {m: counts.get(m, 0) for m in range(1, 13)}


def dashboard(
    db: Session,
    caller: Caller,
    settings: "Settings",
    now: datetime | None = None,
) -> DashboardResponse:
    """Resource stats, user stats (administrators only, else None) and this year's monthly series."""
    now = now or datetime.now(timezone.utc)
    return DashboardResponse(
        resource_stats=resource_stats(db, caller, settings, now=now),
        user_stats=user_stats(db, caller) if caller.is_admin else None,
        monthly_data=monthly_resource_counts(db, caller, now.year),
        is_admin=caller.is_admin,
        generated_at=now,
    )
