"""Pydantic request/response schemas."""

from app.schemas.auth import Caller, LoginRequest, RegisterRequest, TokenResponse
from app.schemas.base import ApiModel
from app.schemas.health import HealthResponse
from app.schemas.pagination import Paginated, PaginationMeta
from app.schemas.resource import (
    ResourceCreate,
    ResourceFilters,
    ResourceRead,
    ResourceUpdate,
    UserSummary,
)
from app.schemas.stats import DashboardResponse, ResourceStats, UserStats
from app.schemas.user import AssignableUser, UserFilters, UserRead

__all__ = [
    "ApiModel",
    "AssignableUser",
    "Caller",
    "DashboardResponse",
    "HealthResponse",
    "LoginRequest",
    "Paginated",
    "PaginationMeta",
    "RegisterRequest",
    "ResourceCreate",
    "ResourceFilters",
    "ResourceRead",
    "ResourceStats",
    "ResourceUpdate",
    "TokenResponse",
    "UserFilters",
    "UserRead",
    "UserStats",
    "UserSummary",
]
