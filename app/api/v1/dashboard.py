"""Combined dashboard endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.api.v1.errors import service_errors
from app.core.config import get_settings
from app.core.database import get_db
from app.schemas.auth import Caller
from app.schemas.stats import DashboardResponse
from app.services.stats import dashboard

router = APIRouter()


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    caller: Annotated[Caller, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardResponse:
    """
    Resource statistics scoped to the caller, user statistics for
    administrators (null otherwise), and resources created per month this year.
    """
    with service_errors("fetch dashboard statistics", user_id=caller.id):
        return dashboard(db, caller, get_settings())
