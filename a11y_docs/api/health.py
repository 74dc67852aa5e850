"""
A11y Docs Service - Health API Routes

Patterns Applied:
- Health Check Pattern
- HealthService class holding readiness state
- Pydantic response models
"""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from a11y_docs import __version__
from a11y_docs.core.logging import SERVICE_NAME, get_logger
from a11y_docs.search.cache import ContentCache

# Initialize router
router = APIRouter(tags=["health"])

# Get logger
logger = get_logger(__name__)


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    version: str
    service: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    status: str
    checks: dict[str, bool]
    cache: dict[str, int] | None = None


# =============================================================================
# Health Service
# =============================================================================


class HealthService:
    """Service class for health check operations.

    Readiness flips once the lifespan handler has wired the docs client and
    the content cache into the app.
    """

    def __init__(self, version: str = __version__):
        """Initialize health service.

        Args:
            version: Service version string
        """
        self._version = version
        self._search_ready = False
        self._cache: ContentCache | None = None

    def check_health(self) -> dict[str, Any]:
        """Check basic service health.

        Returns:
            Health status dictionary with status, version, service
        """
        return {
            "status": "healthy",
            "version": self._version,
            "service": SERVICE_NAME,
        }

    def check_readiness(self) -> tuple[dict[str, Any], bool]:
        """Check if service is ready to accept requests.

        Returns:
            Tuple of (readiness dict, is_ready bool)
        """
        checks = {
            "search_service": self._search_ready,
            "content_cache": self._cache is not None,
        }

        is_ready = all(checks.values())

        result: dict[str, Any] = {
            "status": "ready" if is_ready else "not_ready",
            "checks": checks,
        }
        if self._cache is not None:
            result["cache"] = {
                "entries": len(self._cache),
                **self._cache.stats.to_dict(),
            }

        return result, is_ready

    def set_search_ready(self, ready: bool, cache: ContentCache | None = None) -> None:
        """Set search service status.

        Called by the lifespan handler on startup and shutdown.

        Args:
            ready: Whether the search service is wired
            cache: Content cache to report stats for
        """
        self._search_ready = ready
        self._cache = cache if ready else None


# Global health service instance
_health_service = HealthService()


def get_health_service() -> HealthService:
    """Get health service instance."""
    return _health_service


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Basic health check endpoint for liveness probe",
)
async def health_check() -> HealthResponse:
    """Health check endpoint (liveness probe)."""
    service = get_health_service()
    data = service.check_health()
    logger.debug("health_check", status=data["status"])
    return HealthResponse(**data)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Service is not ready"},
    },
    summary="Readiness Check",
    description="Readiness check endpoint for Kubernetes readiness probe",
)
async def readiness_check() -> JSONResponse:
    """Readiness check endpoint.

    Returns:
        200 if ready, 503 if not ready
    """
    service = get_health_service()
    data, is_ready = service.check_readiness()

    status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE

    logger.debug("readiness_check", status=data["status"], is_ready=is_ready)
    return JSONResponse(content=data, status_code=status_code)
