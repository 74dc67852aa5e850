"""
Article Endpoints

POST /v1/articles/search - Ranked search over titles, paths and bodies
POST /v1/articles/fetch  - One article with extracted title and metadata
GET  /v1/articles        - Every indexed article, sorted by title

Patterns Applied:
- FastAPI router pattern
- Pydantic request/response models
- Dependency injection for the search service (app.state, set in lifespan)
"""

import time
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from a11y_docs.core.exceptions import (
    ArticleFetchError,
    ArticleNotFoundError,
    IndexFetchError,
)
from a11y_docs.core.logging import get_logger
from a11y_docs.search.service import (
    DEFAULT_MAX_RESULTS,
    MAX_RESULTS,
    MIN_RESULTS,
    ArticleSearchService,
)

logger = get_logger(__name__)

# =============================================================================
# Request/Response Models
# =============================================================================


class SearchRequest(BaseModel):
    """Request body for the search endpoint."""

    query: str = Field(..., description="Search query (e.g. 'accordion')")
    max_results: int = Field(
        default=DEFAULT_MAX_RESULTS,
        ge=MIN_RESULTS,
        le=MAX_RESULTS,
        description="Maximum number of results to return (1-20)",
    )
    include_content: bool = Field(
        default=False,
        description="Also search article bodies (one fetch per weakly matching article)",
    )


class RankedArticleItem(BaseModel):
    """A ranked search result."""

    title: str
    path: str
    url: str
    relevance_score: float
    match_reason: str
    snippet: str | None = None


class SearchResponse(BaseModel):
    """Response from the search endpoint."""

    articles: list[RankedArticleItem]
    total_found: int
    query: str
    processing_time_ms: float


class FetchRequest(BaseModel):
    """Request body for the fetch endpoint."""

    path: str = Field(
        ...,
        min_length=1,
        description="Article path from search results (e.g. 'docs/www.w3.org_WAI_ARIA_apg_patterns_accordion.md')",
    )
    include_metadata: bool = Field(
        default=True,
        description="Include source URL, last updated date, size and content type",
    )


class ArticleMetadataItem(BaseModel):
    """Metadata of a fetched article."""

    url: str
    size: int
    content_type: str
    source: str | None = None
    last_updated: str | None = None


class ArticleResponse(BaseModel):
    """Response from the fetch endpoint."""

    path: str
    content: str
    title: str | None = None
    metadata: ArticleMetadataItem | None = None


class ArticleRecordItem(BaseModel):
    """An entry of the article listing."""

    title: str
    path: str
    url: str | None = None


class ListResponse(BaseModel):
    """Response from the list endpoint."""

    articles: list[ArticleRecordItem]
    total_count: int


# =============================================================================
# Dependencies
# =============================================================================


def get_search_service(request: Request) -> ArticleSearchService:
    """Search service wired into app.state by the lifespan handler.

    Raises:
        HTTPException: 503 if the service has not been wired yet
    """
    service: ArticleSearchService | None = getattr(request.app.state, "search_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search service is not ready",
        )
    return service


# =============================================================================
# Router
# =============================================================================

articles_router = APIRouter(prefix="/v1/articles", tags=["articles"])


@articles_router.post("/search", response_model=SearchResponse)
async def search_articles(
    request: SearchRequest,
    service: ArticleSearchService = Depends(get_search_service),
) -> SearchResponse:
    """Search accessibility articles by title, path and optionally content.

    Args:
        request: SearchRequest with query, max_results and include_content

    Returns:
        SearchResponse with ranked articles and the pre-truncation count
    """
    start_time = time.perf_counter()

    try:
        result = await service.search(
            query=request.query,
            max_results=request.max_results,
            include_content=request.include_content,
        )
    except IndexFetchError as e:
        logger.error("search_failed", query=request.query, error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    elapsed_ms = (time.perf_counter() - start_time) * 1000

    return SearchResponse(
        articles=[RankedArticleItem(**asdict(a)) for a in result.articles],
        total_found=result.total_found,
        query=result.query,
        processing_time_ms=elapsed_ms,
    )


@articles_router.post("/fetch", response_model=ArticleResponse, response_model_exclude_none=True)
async def fetch_article(
    request: FetchRequest,
    service: ArticleSearchService = Depends(get_search_service),
) -> ArticleResponse:
    """Fetch the full markdown content of one article.

    Args:
        request: FetchRequest with path and include_metadata

    Returns:
        ArticleResponse with content, title and optional metadata
    """
    try:
        article = await service.fetch_article(
            path=request.path,
            include_metadata=request.include_metadata,
        )
    except ArticleNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ArticleFetchError as e:
        logger.error("fetch_failed", path=request.path, error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    metadata = None
    if article.metadata is not None:
        metadata = ArticleMetadataItem(**asdict(article.metadata))

    return ArticleResponse(
        path=article.path,
        content=article.content,
        title=article.title,
        metadata=metadata,
    )


@articles_router.get("", response_model=ListResponse)
async def list_articles(
    service: ArticleSearchService = Depends(get_search_service),
) -> ListResponse:
    """List every available accessibility article, sorted by title."""
    try:
        listing = await service.list_all()
    except IndexFetchError as e:
        logger.error("list_failed", error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    return ListResponse(
        articles=[
            ArticleRecordItem(title=r.title, path=r.path, url=r.url)
            for r in listing.articles
        ],
        total_count=listing.total_count,
    )
