"""
A11y Docs Service - Custom Exceptions

Namespaced exceptions so nothing shadows builtins like ConnectionError.
Provider errors keep the HTTP status (when there is one) and are raised
with ``from`` so the original httpx error stays in the cause chain.
"""


class A11yDocsError(Exception):
    """Base exception for A11y Docs Service.

    All custom exceptions inherit from this base class.
    """
    pass


class DocsClientError(A11yDocsError):
    """Raised when the remote documentation repository cannot be read."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class IndexFetchError(DocsClientError):
    """Raised when the article index cannot be fetched or decoded.

    Aborts the whole search or list operation.
    """
    pass


class ArticleNotFoundError(DocsClientError):
    """Raised when an article path does not exist in the repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Article not found: {path}", status_code=404)
        self.path = path


class ArticleFetchError(DocsClientError):
    """Raised on any other failure while fetching an article body."""
    pass
