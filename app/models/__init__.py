"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.resource import Resource
from app.models.user import Role, User, role_user

__all__ = ["Base", "Resource", "Role", "User", "role_user"]
