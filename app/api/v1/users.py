"""User directory endpoints: admin listing, statistics and detail; assignment picker for everyone."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.api.v1.errors import service_errors
from app.core.config import get_settings
from app.core.database import get_db
from app.schemas.auth import Caller
from app.schemas.pagination import Paginated
from app.schemas.stats import UserStats
from app.schemas.user import AssignableUser, AssignableUsersResponse, UserFilters, UserRead
from app.services.stats import user_stats
from app.services.user_query import assignable_users, get_user, list_users

router = APIRouter()


@router.get("", response_model=Paginated[UserRead])
def get_users(
    admin: Annotated[Caller, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    search: str | None = None,
    role: str | None = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = "created_at",
    sort_order: Annotated[str, Query(alias="sortOrder")] = "desc",
    page: int = 1,
    per_page: Annotated[int | None, Query(alias="perPage")] = None,
) -> Paginated[UserRead]:
    """List users (administrator only); search matches name or email."""
    settings = get_settings()
    filters = UserFilters(
        search=search,
        role=role,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        per_page=per_page if per_page is not None else settings.DEFAULT_PER_PAGE,
    )
    with service_errors("fetch users", user_id=admin.id):
        result = list_users(db, admin, filters, settings)
        return Paginated[UserRead](
            data=[UserRead.model_validate(u) for u in result.items],
            pagination=result.meta(),
        )


@router.get("/stats", response_model=UserStats)
def get_user_stats(
    admin: Annotated[Caller, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserStats:
    """Totals by role and by verification status, plus the latest registrations."""
    with service_errors("fetch user statistics", user_id=admin.id):
        return user_stats(db, admin)


@router.get("/assignment", response_model=AssignableUsersResponse)
def get_users_for_assignment(
    caller: Annotated[Caller, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> AssignableUsersResponse:
    """id, name and email of every user, for the assign-to picker."""
    with service_errors("fetch users for assignment", user_id=caller.id):
        return AssignableUsersResponse(
            data=[AssignableUser.model_validate(u) for u in assignable_users(db)]
        )


@router.get("/{user_id}", response_model=UserRead)
def get_user_detail(
    user_id: int,
    admin: Annotated[Caller, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    with service_errors("fetch user", user_id=admin.id, target_user_id=user_id):
        return UserRead.model_validate(get_user(db, admin, user_id))
