"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from whereabouts.api.v1.endpoints import patterns, quarters, slots, templates

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    quarters.router, prefix="/quarters", tags=["Quarters"]
)
api_router.include_router(
    slots.router, tags=["Daily slots"]
)
api_router.include_router(
    patterns.router, tags=["Patterns and calendar"]
)
api_router.include_router(
    templates.router, prefix="/templates", tags=["Templates"]
)
