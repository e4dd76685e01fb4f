"""
API router - aggregates all endpoint modules under /api.
"""

from fastapi import APIRouter

from petfinder.api.endpoints import announcements, auth, comments, health, locations

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(announcements.router, tags=["announcements"])
api_router.include_router(comments.router, tags=["comments"])
api_router.include_router(locations.router, tags=["locations"])
