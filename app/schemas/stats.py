"""Pydantic schemas for dashboard aggregation responses."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import ApiModel
from app.schemas.resource import ResourceRead
from app.schemas.user import UserRead


class ResourceStats(ApiModel):
    """
    Grouped counts over the caller's visible resources.

    by_status / by_priority / by_type only contain values present in at least
    one matching record; each sums to total_resources.
    """

    total_resources: int = Field(..., ge=0)
    by_status: dict[str, int]
    by_priority: dict[str, int]
    by_type: dict[str, int]
    overdue: int = Field(..., ge=0)
    recent_activity: list[ResourceRead]


class UserStatusCounts(ApiModel):
    """Verified (active) vs unverified (invited) accounts."""

    active: int = Field(..., ge=0)
    invited: int = Field(..., ge=0)


class UserStats(ApiModel):
    """User directory statistics (administrators only)."""

    total_users: int = Field(..., ge=0)
    by_role: dict[str, int]
    by_status: UserStatusCounts
    recent_registrations: list[UserRead]


class DashboardResponse(ApiModel):
    """Combined dashboard payload; user_stats is null for non-administrators."""

    resource_stats: ResourceStats
    user_stats: UserStats | None
    monthly_data: dict[int, int]
    is_admin: bool
    generated_at: datetime
