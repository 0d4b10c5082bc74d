"""Pydantic schemas for resources: enum domains, create/update payloads, filters and read models."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field, StringConstraints

from app.schemas.base import ApiModel

ResourceType = Literal["project", "task", "inventory", "document", "other"]
ResourceStatus = Literal["pending", "in_progress", "completed", "cancelled"]
ResourcePriority = Literal["low", "medium", "high", "urgent"]
SortOrder = Literal["asc", "desc"]

RESOURCE_TYPE_VALUES: tuple[str, ...] = ("project", "task", "inventory", "document", "other")
RESOURCE_STATUS_VALUES: tuple[str, ...] = ("pending", "in_progress", "completed", "cancelled")
RESOURCE_PRIORITY_VALUES: tuple[str, ...] = ("low", "medium", "high", "urgent")

TAG_MAX_LEN = 50

Tag = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TAG_MAX_LEN)]


class UserSummary(ApiModel):
    """Owner/assignee display data embedded in resource payloads."""

    id: int
    name: str
    email: str


class ResourceCreate(ApiModel):
    """Body for POST /resources. The owner is always the caller."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: ResourceType
    status: ResourceStatus
    priority: ResourcePriority
    assigned_to: int | None = Field(default=None, ge=1)
    due_date: datetime | None = None
    tags: list[Tag] = Field(default_factory=list)


class ResourceUpdate(ApiModel):
    """
    Body for PUT /resources/{uuid}: partial update.

    Only fields present in the request are applied; name, type, status and
    priority may be omitted but not cleared.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    type: ResourceType | None = None
    status: ResourceStatus | None = None
    priority: ResourcePriority | None = None
    assigned_to: int | None = Field(default=None, ge=1)
    due_date: datetime | None = None
    tags: list[Tag] | None = None


class ResourceRead(ApiModel):
    """Resource as returned to clients (owner/assignee expanded)."""

    id: int
    uuid: str
    name: str
    description: str | None
    type: ResourceType
    status: ResourceStatus
    priority: ResourcePriority
    user_id: int
    assigned_to: int | None
    due_date: datetime | None
    tags: list[str]
    owner: UserSummary
    assignee: UserSummary | None
    created_at: datetime
    updated_at: datetime


class ResourceFilters(ApiModel):
    """
    Listing criteria. Values arrive unvalidated from the query string and are
    checked by ``app.services.resource_query.validate_resource_filters``.
    """

    search: str | None = None
    status: list[str] = Field(default_factory=list)
    priority: list[str] = Field(default_factory=list)
    type: str | None = None
    assigned_to: int | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
    page: int = 1
    per_page: int = 15


class ResourceDeleted(ApiModel):
    """Confirmation for DELETE /resources/{uuid}."""

    message: str = "Resource deleted successfully"
