"""
Docs Repository Client

HTTP client for the remote documentation index and article bodies.
"""

from a11y_docs.clients.docs_client import (
    ContentProvider,
    DocsClient,
    DocsClientProtocol,
    FakeDocsClient,
    IndexProvider,
)

__all__ = [
    "ContentProvider",
    "DocsClient",
    "DocsClientProtocol",
    "FakeDocsClient",
    "IndexProvider",
]
