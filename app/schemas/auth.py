"""Request/response schemas for auth endpoints and the authenticated caller."""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from app.schemas.base import ApiModel

RoleName = Literal["Administrator", "Regular User"]

ADMIN_ROLE: RoleName = "Administrator"
DEFAULT_ROLE: RoleName = "Regular User"
ROLE_NAMES: tuple[str, ...] = (ADMIN_ROLE, DEFAULT_ROLE)


class LoginRequest(ApiModel):
    """Credentials for login."""

    email: EmailStr = Field(..., max_length=255, description="Account email")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class RegisterRequest(ApiModel):
    """Self-registration; the account starts unverified with the 'Regular User' role."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)


class TokenResponse(ApiModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class Caller(ApiModel):
    """
    Authenticated identity attached to each request: id, display data and the
    role set resolved at authentication time.
    """

    id: int
    name: str
    email: str
    roles: frozenset[str] = Field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles


class MeResponse(ApiModel):
    """Response for GET /auth/me."""

    id: int
    uuid: str
    name: str
    email: str
    email_verified_at: datetime | None
    roles: list[str]
    is_admin: bool


class MessageResponse(ApiModel):
    """Plain confirmation message."""

    message: str
