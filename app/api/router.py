"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.endpoints import auth, clients, health, photos, profile, tenants, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(photos.router, prefix="/photos", tags=["photos"])
