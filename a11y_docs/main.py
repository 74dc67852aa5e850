"""
A11y Docs Service - Main Application Entry Point

- FastAPI app with lifespan handler
- uvicorn a11y_docs.main:app starts the service

Patterns Applied:
- Lifespan context manager (no deprecated @app.on_event)
- One-time configure_logging() at startup
- Docs client and content cache created once and shared by all requests
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from a11y_docs.api.articles import articles_router
from a11y_docs.api.health import get_health_service
from a11y_docs.api.health import router as health_router
from a11y_docs.clients.docs_client import DocsClient
from a11y_docs.core.config import get_settings
from a11y_docs.core.logging import configure_logging, get_logger
from a11y_docs.core.tracing import configure_tracing
from a11y_docs.search.cache import ContentCache
from a11y_docs.search.service import ArticleSearchService

# Get settings
settings = get_settings()

# Configure logging ONCE at module load
configure_logging(
    log_level=settings.log_level,
    json_output=settings.log_json,
)

# Get logger after configuration
logger = get_logger(__name__)


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager for startup/shutdown events.

    Builds the docs client, the process-wide content cache and the search
    service, and closes the client's connection pool on shutdown.
    """
    # =========================================================================
    # STARTUP
    # =========================================================================
    logger.info(
        "startup",
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
        index_url=settings.index_url,
    )

    if settings.tracing_enabled:
        configure_tracing(
            service_name=settings.service_name,
            console_export=settings.tracing_console_export,
            environment=settings.environment,
        )
        logger.info("tracing_configured")

    client = DocsClient.from_settings(settings)
    cache = ContentCache(
        max_entries=settings.cache_max_entries,
        ttl_seconds=settings.cache_ttl_seconds,
        cache_failures=settings.cache_failures,
    )
    logger.info(
        "content_cache_configured",
        max_entries=settings.cache_max_entries,
        ttl_seconds=settings.cache_ttl_seconds,
        cache_failures=settings.cache_failures,
    )

    app.state.search_service = ArticleSearchService(client=client, cache=cache)
    get_health_service().set_search_ready(True, cache=cache)

    yield

    # =========================================================================
    # SHUTDOWN
    # =========================================================================
    logger.info("shutdown", service=settings.service_name, cached_articles=len(cache))

    get_health_service().set_search_ready(False)
    app.state.search_service = None
    await client.close()


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="A11y-Docs-Service",
    description="Search and fetch W3C WAI-ARIA patterns and web accessibility guidance",
    version=settings.version,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(articles_router)


# =============================================================================
# Root endpoint
# =============================================================================


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint pointing at the docs."""
    return {
        "service": settings.service_name,
        "version": settings.version,
        "docs": "/docs",
    }
