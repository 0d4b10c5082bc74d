"""User directory listing (administrators only) and the assignment picker list."""

from typing import TYPE_CHECKING

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models import Role, User
from app.schemas.auth import Caller
from app.schemas.user import UserFilters
from app.services.access import require_user_directory_access
from app.services.errors import NotFoundError, ValidationFailed
from app.services.pagination import Page, apply_sort, paginate, validate_page_params, validate_sort
from app.services.resource_query import LIKE_ESCAPE, like_pattern

if TYPE_CHECKING:
    from app.core.config import Settings

SORTABLE_COLUMNS = {
    "id": User.id,
    "name": User.name,
    "email": User.email,
    "email_verified_at": User.email_verified_at,
    "created_at": User.created_at,
    "updated_at": User.updated_at,
}


def list_users(
    db: Session,
    caller: Caller,
    filters: UserFilters,
    settings: "Settings",
) -> Page[User]:
    """Search by name/email, filter by role name, sort and paginate. Administrator only."""
    require_user_directory_access(caller)

    sort_by, sort_order, errors = validate_sort(filters.sort_by, filters.sort_order, SORTABLE_COLUMNS)
    errors.update(validate_page_params(filters.page, filters.per_page, settings.MAX_PER_PAGE))
    if errors:
        raise ValidationFailed(errors)

    query = db.query(User)
    search = (filters.search or "").strip()
    if search:
        pattern = like_pattern(search)
        query = query.filter(
            or_(
                User.name.ilike(pattern, escape=LIKE_ESCAPE),
                User.email.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    role = (filters.role or "").strip()
    if role:
        query = query.filter(User.roles.any(Role.name == role))

    query = apply_sort(query, sort_by, sort_order, SORTABLE_COLUMNS, User.id)
    return paginate(query, filters.page, filters.per_page)


def assignable_users(db: Session) -> list[User]:
    """Every account, ordered by name, for the assign-to dropdown."""
    return db.query(User).order_by(User.name.asc(), User.id.asc()).all()


def get_user(db: Session, caller: Caller, user_id: int) -> User:
    """Single user for administrators; raises NotFoundError when missing."""
    require_user_directory_access(caller)
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user
