"""
Article Search

Similarity scoring, snippet extraction, content caching and the search
service that combines them into ranked results.
"""

from a11y_docs.search.cache import CacheStats, ContentCache
from a11y_docs.search.models import (
    ArticleContent,
    ArticleListing,
    ArticleMetadata,
    ArticleRecord,
    RankedArticle,
    SearchResponse,
    SearchResult,
)
from a11y_docs.search.service import ArticleSearchService
from a11y_docs.search.similarity import similarity
from a11y_docs.search.snippets import extract_snippet

__all__ = [
    "ArticleContent",
    "ArticleListing",
    "ArticleMetadata",
    "ArticleRecord",
    "ArticleSearchService",
    "CacheStats",
    "ContentCache",
    "RankedArticle",
    "SearchResponse",
    "SearchResult",
    "extract_snippet",
    "similarity",
]
