"""Health check response."""

from typing import Literal

from pydantic import Field

from app.schemas.base import ApiModel


class HealthResponse(ApiModel):
    """Liveness plus database reachability; `status` stays "ok" while the process serves requests."""

    status: Literal["ok"] = "ok"
    version: str
    environment: str = Field(description="dev, test or prod")
    database: Literal["connected", "disconnected"]
