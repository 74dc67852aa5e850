"""
Docs Repository Client

HTTP client for the remote documentation repository: one JSON index
(title → path) and one raw markdown file per article.

Patterns Applied:
- Connection pooling (one httpx.AsyncClient per DocsClient)
- Repository Pattern: Protocols for duck typing, FakeDocsClient for tests
- Custom namespaced exceptions raised ``from`` the httpx error

Requests are made once; there is no retry or rate limiting.
"""

import asyncio
from typing import Protocol

import httpx

from a11y_docs.core.config import Settings
from a11y_docs.core.exceptions import (
    ArticleFetchError,
    ArticleNotFoundError,
    IndexFetchError,
)
from a11y_docs.core.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Protocols for Duck Typing (Repository Pattern)
# =============================================================================


class IndexProvider(Protocol):
    """Returns the full title → path mapping of the collection."""

    async def fetch_index(self) -> dict[str, str]:
        """Fetch the article index."""
        ...


class ContentProvider(Protocol):
    """Returns the raw body of an article."""

    async def fetch_article(self, path: str) -> str:
        """Fetch the markdown body stored at ``path``."""
        ...


class DocsClientProtocol(IndexProvider, ContentProvider, Protocol):
    """Everything the search service needs from the repository."""

    def article_url(self, path: str) -> str:
        """Browse URL for an article path."""
        ...


# =============================================================================
# DocsClient Implementation
# =============================================================================


class DocsClient:
    """HTTP client for the documentation repository.

    Attributes:
        index_url: URL of the JSON index
        raw_base_url: Base URL raw article bodies are served from
        browse_base_url: Base URL of the human-facing article pages
        timeout: Request timeout in seconds (default: 30)
    """

    def __init__(
        self,
        index_url: str,
        raw_base_url: str,
        browse_base_url: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the docs client.

        Args:
            index_url: URL of the JSON index
            raw_base_url: Base URL for raw article bodies
            browse_base_url: Base URL for article pages
            timeout: Request timeout in seconds
        """
        self.index_url = index_url
        self.raw_base_url = raw_base_url.rstrip("/")
        self.browse_base_url = browse_base_url.rstrip("/")
        self.timeout = timeout

        # Connection pooling: single client instance
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocsClient":
        """Build a client from application settings."""
        return cls(
            index_url=settings.index_url,
            raw_base_url=settings.raw_base_url,
            browse_base_url=settings.browse_base_url,
            timeout=settings.request_timeout,
        )

    def raw_url(self, path: str) -> str:
        """Raw content URL for an article path."""
        return f"{self.raw_base_url}/{path.lstrip('/')}"

    def article_url(self, path: str) -> str:
        """Browse URL for an article path."""
        return f"{self.browse_base_url}/{path.lstrip('/')}"

    async def fetch_index(self) -> dict[str, str]:
        """Fetch the article index.

        Returns:
            Mapping of article title to article path

        Raises:
            IndexFetchError: On network errors, an unusable URL, non-2xx
                responses or a body that is not a JSON object of strings
        """
        try:
            response = await self._get(self.index_url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise IndexFetchError(f"Failed to fetch index: {e}") from e

        if not response.is_success:
            raise IndexFetchError(
                f"Failed to fetch index: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise IndexFetchError(f"Index is not valid JSON: {e}") from e

        return self._parse_index(payload)

    async def fetch_article(self, path: str) -> str:
        """Fetch the markdown body of an article.

        Args:
            path: Repository-relative article path

        Returns:
            Raw article text

        Raises:
            ArticleNotFoundError: On a 404 response
            ArticleFetchError: On network errors, unusable URLs and other non-2xx
                responses
        """
        url = self.raw_url(path)
        try:
            response = await self._get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ArticleFetchError(f"Failed to fetch article {path}: {e}") from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise ArticleNotFoundError(path)

        if not response.is_success:
            raise ArticleFetchError(
                f"Failed to fetch article {path}: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        return response.text

    async def _get(self, url: str) -> httpx.Response:
        """Issue a single GET request."""
        logger.debug("docs_request", url=url)
        return await self._client.get(url)

    def _parse_index(self, payload: object) -> dict[str, str]:
        """Validate the decoded index payload.

        Args:
            payload: Decoded JSON body

        Returns:
            Mapping of title to path

        Raises:
            IndexFetchError: If the payload is not an object of strings
        """
        if not isinstance(payload, dict):
            raise IndexFetchError(
                f"Index must be a JSON object, got {type(payload).__name__}"
            )

        index: dict[str, str] = {}
        for title, path in payload.items():
            if not isinstance(path, str):
                raise IndexFetchError(f"Index entry {title!r} has a non-string path")
            index[title] = path
        return index

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self._client.aclose()


# =============================================================================
# FakeDocsClient for Testing
# =============================================================================


class FakeDocsClient:
    """Fake client for unit testing without real HTTP.

    Implements DocsClientProtocol. Paths missing from ``articles`` behave as
    404s; paths listed in ``failing_paths`` raise ArticleFetchError.
    """

    def __init__(
        self,
        index: dict[str, str] | None = None,
        articles: dict[str, str] | None = None,
        failing_paths: set[str] | None = None,
        browse_base_url: str = "https://docs.example.test/blob/main",
    ) -> None:
        """Initialize the fake with a preset index and article bodies.

        Args:
            index: Title → path mapping returned by fetch_index()
            articles: Path → body mapping served by fetch_article()
            failing_paths: Paths that fail with a non-404 error
            browse_base_url: Base URL for article_url()
        """
        self.index = dict(index or {})
        self.articles = dict(articles or {})
        self.failing_paths = set(failing_paths or ())
        self.browse_base_url = browse_base_url
        self.index_error: Exception | None = None
        self.index_calls = 0
        self.article_calls: list[str] = []

    def article_url(self, path: str) -> str:
        return f"{self.browse_base_url}/{path}"

    async def fetch_index(self) -> dict[str, str]:
        await asyncio.sleep(0)
        self.index_calls += 1
        if self.index_error is not None:
            raise self.index_error
        return dict(self.index)

    async def fetch_article(self, path: str) -> str:
        await asyncio.sleep(0)
        self.article_calls.append(path)
        if path in self.failing_paths:
            raise ArticleFetchError(
                f"Failed to fetch article {path}: 500 Internal Server Error",
                status_code=500,
            )
        if path not in self.articles:
            raise ArticleNotFoundError(path)
        return self.articles[path]

    async def close(self) -> None:
        await asyncio.sleep(0)
