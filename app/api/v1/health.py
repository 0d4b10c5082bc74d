"""Unauthenticated health check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import API_VERSION, settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Used by load balancers and monitoring; never requires a token."""
    return HealthResponse(
        version=API_VERSION,
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
