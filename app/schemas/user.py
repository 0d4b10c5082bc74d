"""Pydantic schemas for the user directory (admin listing, detail, assignment list)."""

from datetime import datetime
from typing import Any

from pydantic import field_validator

from app.schemas.base import ApiModel


def _role_names(value: Any) -> list[str]:
    """Accept Role ORM objects or plain names."""
    if value is None:
        return []
    return [getattr(role, "name", role) for role in value]


class UserRead(ApiModel):
    """User as shown to administrators (no password or token)."""

    id: int
    uuid: str
    name: str
    email: str
    email_verified_at: datetime | None
    roles: list[str]
    created_at: datetime
    updated_at: datetime

    @field_validator("roles", mode="before")
    @classmethod
    def roles_to_names(cls, v: Any) -> list[str]:
        return _role_names(v)


class AssignableUser(ApiModel):
    """Minimal user entry for the resource assignment picker."""

    id: int
    name: str
    email: str


class AssignableUsersResponse(ApiModel):
    """Response for GET /users/assignment."""

    data: list[AssignableUser]


class UserFilters(ApiModel):
    """Listing criteria for GET /users; validated by app.services.user_query."""

    search: str | None = None
    role: str | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
    page: int = 1
    per_page: int = 15
