"""
API v1 Router - Main Entry Point
Aggregates all v1 endpoints of the placement intake engine.
"""
from fastapi import APIRouter

from placement import __version__
from placement.api.v1 import beds, identity, interests, onboarding
from placement.core.logging import get_logger
from placement.schemas.common import ErrorResponse

logger = get_logger(__name__)

router = APIRouter(
    responses={
        404: {"model": ErrorResponse, "description": "Not Found"},
        409: {"model": ErrorResponse, "description": "Conflict"},
        422: {"model": ErrorResponse, "description": "Validation Error"},
        503: {"model": ErrorResponse, "description": "Record store unavailable"},
    }
)

router.include_router(identity.router)
router.include_router(onboarding.router)
router.include_router(beds.router)
router.include_router(interests.router)


@router.get("/health", tags=["System Health"])
def api_health_check():
    return {
        "status": "healthy",
        "version": __version__,
        "api_version": "v1",
    }


logger.debug(f"API v1 router initialized with {len(router.routes)} routes")
