"""
Article Search Service

Ranks every indexed article against a query and serves direct article
fetches and the full listing.

Ranking, per index entry:
1. Title similarity (> 0.3) scores at full weight
2. Path similarity (> 0.3, and above the title similarity) scores at 0.7
3. Without a strong match (< 0.6), and when content search is on, the body
   is scanned for the whole query (0.5) or for its words ((k/n) * 0.4)
4. Entries scoring above 0.2 are kept, sorted and truncated

Content search may fetch one body per index entry. Bodies go through the
shared ContentCache, and a body that cannot be fetched counts as empty
rather than failing the search.
"""

from typing import NamedTuple

from a11y_docs.clients.docs_client import DocsClientProtocol
from a11y_docs.core.exceptions import DocsClientError
from a11y_docs.core.logging import get_logger, search_context
from a11y_docs.core.tracing import get_tracer
from a11y_docs.search.cache import ContentCache
from a11y_docs.search.frontmatter import parse_article_header
from a11y_docs.search.models import (
    CONTENT_MATCH,
    PATH_MATCH,
    TITLE_MATCH,
    ArticleContent,
    ArticleListing,
    ArticleMetadata,
    ArticleRecord,
    RankedArticle,
    SearchResponse,
    SearchResult,
    content_words_match,
)
from a11y_docs.search.similarity import similarity
from a11y_docs.search.snippets import extract_snippet

logger = get_logger(__name__)
tracer = get_tracer(__name__)

# Signal gating and weighting
SIGNAL_THRESHOLD = 0.3
TITLE_WEIGHT = 1.0
PATH_WEIGHT = 0.7
STRONG_MATCH_SCORE = 0.6
CONTENT_SUBSTRING_SCORE = 0.5
CONTENT_WORDS_WEIGHT = 0.4
MIN_QUERY_WORD_LENGTH = 3
ADMISSION_THRESHOLD = 0.2

MIN_RESULTS = 1
MAX_RESULTS = 20
DEFAULT_MAX_RESULTS = 10


class ContentMatch(NamedTuple):
    """A content signal for one article."""

    score: float
    match_reason: str
    snippet: str


class ArticleSearchService:
    """Search, fetch and list articles from a documentation repository.

    Attributes:
        client: Index and content provider
        cache: Content cache shared by every search on this service
    """

    def __init__(
        self,
        client: DocsClientProtocol,
        cache: ContentCache | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Index/content provider (DocsClient or FakeDocsClient)
            cache: Content cache to use (default: a new unbounded cache)
        """
        self.client = client
        self.cache = cache if cache is not None else ContentCache()

    # =========================================================================
    # Search
    # =========================================================================

    async def search(
        self,
        query: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        include_content: bool = False,
    ) -> SearchResponse:
        """Rank indexed articles against ``query``.

        Args:
            query: Free-text query
            max_results: Number of articles to return (1-20)
            include_content: Also scan article bodies when title/path
                matching is inconclusive

        Returns:
            SearchResponse with the top articles, the number of admitted
            candidates before truncation and the original query

        Raises:
            ValueError: If max_results is outside 1-20
            IndexFetchError: If the index cannot be fetched
        """
        if not MIN_RESULTS <= max_results <= MAX_RESULTS:
            raise ValueError(
                f"max_results must be between {MIN_RESULTS} and {MAX_RESULTS}, got {max_results}"
            )

        with (
            search_context("search", query=query),
            tracer.start_as_current_span("article_search.search") as span,
        ):
            span.set_attribute("search.query", query)
            span.set_attribute("search.include_content", include_content)

            index = await self.client.fetch_index()

            admitted: list[SearchResult] = []
            content_fetches = 0
            for title, path in index.items():
                result, fetched = await self._score_entry(query, title, path, include_content)
                content_fetches += fetched
                if result is not None:
                    admitted.append(result)

            admitted.sort(key=lambda r: r.score, reverse=True)
            articles = [self._to_ranked_article(r) for r in admitted[:max_results]]

            span.set_attribute("search.total_found", len(admitted))
            logger.info(
                "search_completed",
                query=query,
                include_content=include_content,
                index_size=len(index),
                total_found=len(admitted),
                returned=len(articles),
                content_fetches=content_fetches,
            )

            return SearchResponse(
                articles=articles,
                total_found=len(admitted),
                query=query,
            )

    async def _score_entry(
        self,
        query: str,
        title: str,
        path: str,
        include_content: bool,
    ) -> tuple[SearchResult | None, int]:
        """Score one index entry.

        Returns:
            The admitted result (or None) and the number of remote content
            fetches made for it (0 or 1)
        """
        score = 0.0
        reason = ""
        snippet: str | None = None
        fetched = 0

        title_score = similarity(query, title)
        if title_score > SIGNAL_THRESHOLD:
            score = title_score * TITLE_WEIGHT
            reason = TITLE_MATCH

        path_score = similarity(query, path)
        if path_score > SIGNAL_THRESHOLD and path_score > title_score:
            score = path_score * PATH_WEIGHT
            reason = PATH_MATCH

        if include_content and score < STRONG_MATCH_SCORE:
            content, fetched = await self._get_content(path)
            if content:
                match = self._score_content(query, content)
                if match is not None and match.score > score:
                    score, reason, snippet = match.score, match.match_reason, match.snippet

        if score <= ADMISSION_THRESHOLD:
            return None, fetched

        return (
            SearchResult(
                title=title,
                path=path,
                score=score,
                match_reason=reason,
                snippet=snippet,
            ),
            fetched,
        )

    def _score_content(self, query: str, content: str) -> ContentMatch | None:
        """Best content signal for ``query`` in ``content``, if any."""
        content_lower = content.lower()
        query_lower = query.lower()
        best: ContentMatch | None = None

        if query_lower in content_lower:
            best = ContentMatch(
                score=CONTENT_SUBSTRING_SCORE,
                match_reason=CONTENT_MATCH,
                snippet=extract_snippet(content, query),
            )

        words = [w for w in query_lower.split() if len(w) >= MIN_QUERY_WORD_LENGTH]
        matched = [w for w in words if w in content_lower]
        if matched:
            words_score = len(matched) / len(words) * CONTENT_WORDS_WEIGHT
            if best is None or words_score > best.score:
                best = ContentMatch(
                    score=words_score,
                    match_reason=content_words_match(len(matched), len(words)),
                    snippet=extract_snippet(content, matched[0]),
                )

        return best

    async def _get_content(self, path: str) -> tuple[str, int]:
        """Article body from the cache, fetching it on a miss.

        Any fetch failure is logged and treated as empty content, which is
        cached like any other result (subject to the cache's failure policy).

        Returns:
            The body ("" when unavailable) and 1 if a remote fetch was made
        """
        cached = self.cache.get(path)
        if cached is not None:
            return cached, 0

        try:
            content = await self.client.fetch_article(path)
        except DocsClientError as e:
            logger.warning(
                "content_fetch_failed",
                path=path,
                error=str(e),
                status_code=e.status_code,
            )
            content = ""
        else:
            logger.debug("content_fetched", path=path, size=len(content))

        self.cache.put(path, content)
        return content, 1

    def _to_ranked_article(self, result: SearchResult) -> RankedArticle:
        return RankedArticle(
            title=result.title,
            path=result.path,
            url=self.client.article_url(result.path),
            relevance_score=result.relevance_score,
            match_reason=result.match_reason,
            snippet=result.snippet,
        )

    # =========================================================================
    # Fetch
    # =========================================================================

    async def fetch_article(
        self,
        path: str,
        include_metadata: bool = True,
    ) -> ArticleContent:
        """Fetch one article directly, bypassing ranking.

        The fetched body is stored in the content cache so later content
        searches reuse it.

        Args:
            path: Repository-relative article path
            include_metadata: Attach URL, source, date, size and content type

        Returns:
            ArticleContent with the body and extracted title

        Raises:
            ArticleNotFoundError: If the article does not exist
            ArticleFetchError: On any other fetch failure
        """
        with (
            search_context("fetch_article", path=path),
            tracer.start_as_current_span("article_search.fetch_article") as span,
        ):
            span.set_attribute("article.path", path)

            content = await self.client.fetch_article(path)
            self.cache.put(path, content)

            header = parse_article_header(content)
            article = ArticleContent(path=path, content=content, title=header.title)

            if include_metadata:
                article.metadata = ArticleMetadata(
                    url=self.client.article_url(path),
                    size=len(content),
                    source=header.source,
                    last_updated=header.last_updated,
                )

            logger.info(
                "article_fetched",
                path=path,
                size=len(content),
                has_title=header.title is not None,
            )
            return article

    # =========================================================================
    # List
    # =========================================================================

    async def list_all(self) -> ArticleListing:
        """Every indexed article, sorted by title, without scoring.

        Raises:
            IndexFetchError: If the index cannot be fetched
        """
        with (
            search_context("list_all"),
            tracer.start_as_current_span("article_search.list_all") as span,
        ):
            index = await self.client.fetch_index()

            records = [
                ArticleRecord(title=title, path=path, url=self.client.article_url(path))
                for title, path in index.items()
            ]
            records.sort(key=lambda r: r.title.lower())

            span.set_attribute("list.total_count", len(records))
            logger.info("articles_listed", total_count=len(records))
            return ArticleListing(articles=records)
