"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, dashboard, health, resources, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(resources.router, prefix="/resources", tags=["resources"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
