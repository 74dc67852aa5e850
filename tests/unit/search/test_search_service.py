"""
Article Search Service Tests

Tests for ArticleSearchService:
- search(): title/path/content ranking, thresholds, truncation
- fetch_article(): title and metadata extraction, not-found handling
- list_all(): sorted listing without scoring

All tests run against FakeDocsClient; no HTTP is made.
"""

import httpx
import pytest

from a11y_docs.clients.docs_client import DocsClient, FakeDocsClient
from a11y_docs.core.exceptions import (
    ArticleFetchError,
    ArticleNotFoundError,
    IndexFetchError,
)
from a11y_docs.search.cache import ContentCache
from a11y_docs.search.service import ArticleSearchService

ACCORDION_TITLE = "Accordion Pattern (Sections With Show/Hide Functionality)"
ACCORDION_PATH = "docs/www.w3.org_WAI_ARIA_apg_patterns_accordion.md"
BREADCRUMB_TITLE = "Breadcrumb Pattern"
BREADCRUMB_PATH = "docs/www.w3.org_WAI_ARIA_apg_patterns_breadcrumb.md"
DATEPICKER_TITLE = "Date Picker Dialog Example"
DATEPICKER_PATH = "docs/www.w3.org_WAI_ARIA_apg_patterns_dialog-modal_examples_datepicker-dialog.md"

ACCORDION_CONTENT = """---
title: Accordion Pattern
url: https://www.w3.org/WAI/ARIA/apg/patterns/accordion/
date: 2025-07-20
---

# Accordion Pattern (Sections With Show/Hide Functionality)

An accordion is a vertically stacked set of interactive headings that each contain a title,
content snippet, or thumbnail representing a section of content.

## ARIA Roles and Properties

- **button**: The accordion header acts as a button
- **aria-expanded**: Indicates if the panel is expanded
- **aria-controls**: Associates the button with its panel
"""

# Titles and paths that share almost no characters with the content queries
# below, so only the content signal can admit them.
QUIET_INDEX = {
    "Qq": "q1.md",
    "Qqq": "q2.md",
}


@pytest.fixture
def docs_client() -> FakeDocsClient:
    """Fake client with the three W3C pattern articles."""
    return FakeDocsClient(
        index={
            ACCORDION_TITLE: ACCORDION_PATH,
            BREADCRUMB_TITLE: BREADCRUMB_PATH,
            DATEPICKER_TITLE: DATEPICKER_PATH,
        },
        articles={ACCORDION_PATH: ACCORDION_CONTENT},
    )


@pytest.fixture
def service(docs_client: FakeDocsClient) -> ArticleSearchService:
    """Search service with its own cache."""
    return ArticleSearchService(client=docs_client, cache=ContentCache())


# =============================================================================
# Title and Path Matching
# =============================================================================


class TestTitleAndPathMatching:
    """Scores from title and path similarity."""

    @pytest.mark.asyncio
    async def test_title_substring_match(self, service: ArticleSearchService) -> None:
        """'accordion' hits the accordion title with 0.8 / Title match."""
        result = await service.search("accordion")

        top = result.articles[0]
        assert top.title == ACCORDION_TITLE
        assert top.relevance_score == pytest.approx(0.8)
        assert top.match_reason == "Title match"
        assert top.snippet is None

    @pytest.mark.asyncio
    async def test_exact_title_match_scores_one(self, service: ArticleSearchService) -> None:
        """A case-insensitive exact title match scores 1.0."""
        result = await service.search("breadcrumb pattern")

        top = result.articles[0]
        assert top.title == BREADCRUMB_TITLE
        assert top.relevance_score == pytest.approx(1.0)
        assert top.match_reason == "Title match"

    @pytest.mark.asyncio
    async def test_path_match_when_title_is_weaker(self) -> None:
        """A path score above the title score takes over at 0.7 weight."""
        client = FakeDocsClient(index={"Qq": "docs/menubar.md"})
        service = ArticleSearchService(client=client)

        result = await service.search("menubar")

        top = result.articles[0]
        assert top.match_reason == "Path match"
        assert top.relevance_score == pytest.approx(0.8 * 0.7)

    @pytest.mark.asyncio
    async def test_title_wins_when_path_is_not_higher(self, service: ArticleSearchService) -> None:
        """Equal title and path scores keep the title match."""
        # 'accordion' is a substring of both the title and the path
        result = await service.search("accordion")

        assert result.articles[0].match_reason == "Title match"

    @pytest.mark.asyncio
    async def test_results_carry_browse_url(
        self, service: ArticleSearchService, docs_client: FakeDocsClient
    ) -> None:
        """Every result has the browse URL of its path."""
        result = await service.search("accordion")

        assert result.articles[0].url == docs_client.article_url(ACCORDION_PATH)

    @pytest.mark.asyncio
    async def test_unrelated_query_finds_nothing(self, service: ArticleSearchService) -> None:
        """A query sharing no characters with the index returns nothing."""
        result = await service.search("zzz")

        assert result.articles == []
        assert result.total_found == 0


# =============================================================================
# Thresholds, Sorting and Truncation
# =============================================================================


class TestRankingAndLimits:
    """Admission threshold, ordering and max_results."""

    @pytest.mark.asyncio
    async def test_total_found_counts_before_truncation(self) -> None:
        """max_results=1 returns one article but counts both matches."""
        client = FakeDocsClient(
            index={
                "Accordion Pattern...": "docs/accordion.md",
                "Breadcrumb Pattern": "docs/breadcrumb.md",
            }
        )
        service = ArticleSearchService(client=client)

        result = await service.search("pattern", max_results=1)

        assert result.total_found == 2
        assert len(result.articles) == 1
        assert result.query == "pattern"

    @pytest.mark.asyncio
    async def test_results_sorted_by_score_descending(self, service: ArticleSearchService) -> None:
        """Higher scores come first."""
        result = await service.search("accordion", max_results=20)

        scores = [a.relevance_score for a in result.articles]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_all_results_above_admission_threshold(
        self, service: ArticleSearchService
    ) -> None:
        """Nothing at or below 0.2 is admitted."""
        result = await service.search("dialog", max_results=20)

        assert all(a.relevance_score > 0.2 for a in result.articles)

    @pytest.mark.asyncio
    async def test_original_query_is_echoed(self, service: ArticleSearchService) -> None:
        """The response carries the query as given, not lowercased."""
        result = await service.search("Accordion")

        assert result.query == "Accordion"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_results", [0, 21, -1])
    async def test_max_results_out_of_range(
        self, service: ArticleSearchService, max_results: int
    ) -> None:
        """max_results must be within 1-20."""
        with pytest.raises(ValueError):
            await service.search("accordion", max_results=max_results)

    @pytest.mark.asyncio
    async def test_empty_query_admits_every_entry(self, service: ArticleSearchService) -> None:
        """The empty string is a substring of every title, so all entries match."""
        result = await service.search("")

        assert result.total_found == 3
        assert all(a.relevance_score == pytest.approx(0.8) for a in result.articles)
        assert all(a.match_reason == "Title match" for a in result.articles)

    @pytest.mark.asyncio
    async def test_whitespace_query_is_scored(self, service: ArticleSearchService) -> None:
        """A whitespace-only query is ranked like any other query."""
        result = await service.search("   ")

        assert result.query == "   "
        assert result.total_found == len(result.articles)

    @pytest.mark.asyncio
    async def test_repeated_searches_are_identical(self, service: ArticleSearchService) -> None:
        """Same query and options give the same ranked output."""
        first = await service.search("aria expanded panel", include_content=True)
        second = await service.search("aria expanded panel", include_content=True)

        assert first == second


# =============================================================================
# Content Search
# =============================================================================


class TestContentSearch:
    """Escalation to article bodies."""

    @pytest.mark.asyncio
    async def test_content_not_searched_by_default(self) -> None:
        """include_content=False never fetches bodies."""
        client = FakeDocsClient(index=QUIET_INDEX, articles={"q1.md": "aria-expanded"})
        service = ArticleSearchService(client=client)

        result = await service.search("aria-expanded")

        assert result.total_found == 0
        assert client.article_calls == []

    @pytest.mark.asyncio
    async def test_full_query_in_content(self) -> None:
        """The whole query in the body scores 0.5 / Content match with a snippet."""
        body = "Buttons toggle panels. The aria-expanded state is true when open."
        client = FakeDocsClient(index={"Qq": "q1.md"}, articles={"q1.md": body})
        service = ArticleSearchService(client=client)

        result = await service.search("aria-expanded", include_content=True)

        top = result.articles[0]
        assert top.match_reason == "Content match"
        assert top.relevance_score == pytest.approx(0.5)
        assert top.snippet is not None
        assert "aria-expanded" in top.snippet

    @pytest.mark.asyncio
    async def test_partial_word_overlap(self) -> None:
        """k of n query words found scores (k/n) * 0.4 with the count in the reason."""
        body = "Move keyboard focus to the first item in the list."
        client = FakeDocsClient(index={"Qq": "q1.md"}, articles={"q1.md": body})
        service = ArticleSearchService(client=client)

        result = await service.search("keyboard focus trap", include_content=True)

        top = result.articles[0]
        assert top.match_reason == "Content match (2/3 words)"
        assert top.relevance_score == pytest.approx(2 / 3 * 0.4)
        assert top.snippet is not None
        assert top.snippet.startswith("Move keyboard")

    @pytest.mark.asyncio
    async def test_short_words_are_ignored(self) -> None:
        """Words of two characters or fewer do not count."""
        body = "keyboard and focus"
        client = FakeDocsClient(index={"Qq": "q1.md"}, articles={"q1.md": body})
        service = ArticleSearchService(client=client)

        result = await service.search("to keyboard focus", include_content=True)

        assert result.articles[0].match_reason == "Content match (2/2 words)"
        assert result.articles[0].relevance_score == pytest.approx(0.4)

    @pytest.mark.asyncio
    async def test_weak_word_overlap_not_admitted(self) -> None:
        """1 of 3 words scores 0.133 and stays below the admission threshold."""
        body = "keyboard only"
        client = FakeDocsClient(index={"Qq": "q1.md"}, articles={"q1.md": body})
        service = ArticleSearchService(client=client)

        result = await service.search("keyboard focus trap", include_content=True)

        assert result.total_found == 0

    @pytest.mark.asyncio
    async def test_strong_title_match_skips_content(
        self, service: ArticleSearchService, docs_client: FakeDocsClient
    ) -> None:
        """A title score of 0.6 or more suppresses the content fetch."""
        await service.search("accordion", include_content=True)

        assert ACCORDION_PATH not in docs_client.article_calls

    @pytest.mark.asyncio
    async def test_content_cannot_lower_score(self) -> None:
        """A content signal below a weak title score is not adopted."""
        # "tablist" vs "Blast ox": 5 shared of 9 distinct characters
        client = FakeDocsClient(
            index={"Blast ox": "q1.md"},
            articles={"q1.md": "The tablist element"},
        )
        service = ArticleSearchService(client=client)

        result = await service.search("tablist", include_content=True)

        top = result.articles[0]
        assert top.match_reason == "Title match"
        assert top.relevance_score == pytest.approx(5 / 9)
        assert top.snippet is None
        assert client.article_calls == ["q1.md"]

    @pytest.mark.asyncio
    async def test_content_overrides_weak_title_match(self) -> None:
        """A content score above a weak title score replaces it."""
        # "tablist" vs "Slider": 3 shared of 9 distinct characters, 0.333
        client = FakeDocsClient(
            index={"Slider": "q1.md"},
            articles={"q1.md": "Each tab in the tablist has role tab."},
        )
        service = ArticleSearchService(client=client)

        result = await service.search("tablist", include_content=True)

        top = result.articles[0]
        assert top.match_reason == "Content match"
        assert top.relevance_score == pytest.approx(0.5)

    @pytest.mark.asyncio
    async def test_missing_article_does_not_abort_search(self) -> None:
        """A 404 during content search counts as no content."""
        client = FakeDocsClient(
            index={"Qq": "q1.md", "Qqq": "q2.md"},
            articles={"q2.md": "aria-expanded"},
        )
        service = ArticleSearchService(client=client)

        result = await service.search("aria-expanded", include_content=True)

        assert [a.path for a in result.articles] == ["q2.md"]

    @pytest.mark.asyncio
    async def test_fetch_error_does_not_abort_search(self) -> None:
        """A server error during content search counts as no content."""
        client = FakeDocsClient(
            index=QUIET_INDEX,
            articles={"q2.md": "aria-expanded"},
            failing_paths={"q1.md"},
        )
        service = ArticleSearchService(client=client)

        result = await service.search("aria-expanded", include_content=True)

        assert result.total_found == 1
        assert result.articles[0].path == "q2.md"


# =============================================================================
# Content Cache Coordination
# =============================================================================


class TestContentCaching:
    """Bodies are fetched once and reused."""

    @pytest.mark.asyncio
    async def test_bodies_fetched_once(self) -> None:
        """A second search reads bodies from the cache."""
        client = FakeDocsClient(index=QUIET_INDEX, articles={"q1.md": "a", "q2.md": "b"})
        service = ArticleSearchService(client=client)

        await service.search("aria-expanded", include_content=True)
        await service.search("aria-expanded", include_content=True)

        assert sorted(client.article_calls) == ["q1.md", "q2.md"]

    @pytest.mark.asyncio
    async def test_failures_are_cached_by_default(self) -> None:
        """A failed fetch is stored as '' and not retried."""
        client = FakeDocsClient(index={"Qq": "q1.md"}, failing_paths={"q1.md"})
        cache = ContentCache()
        service = ArticleSearchService(client=client, cache=cache)

        await service.search("aria-expanded", include_content=True)
        await service.search("aria-expanded", include_content=True)

        assert client.article_calls == ["q1.md"]
        assert cache.get("q1.md") == ""

    @pytest.mark.asyncio
    async def test_failures_retried_when_failure_caching_off(self) -> None:
        """With cache_failures=False the next search retries the fetch."""
        client = FakeDocsClient(index={"Qq": "q1.md"}, failing_paths={"q1.md"})
        service = ArticleSearchService(client=client, cache=ContentCache(cache_failures=False))

        await service.search("aria-expanded", include_content=True)
        await service.search("aria-expanded", include_content=True)

        assert client.article_calls == ["q1.md", "q1.md"]

    @pytest.mark.asyncio
    async def test_shared_cache_between_services(self) -> None:
        """Two services sharing a cache share fetched bodies."""
        cache = ContentCache()
        first = FakeDocsClient(index={"Qq": "q1.md"}, articles={"q1.md": "aria-expanded"})
        second = FakeDocsClient(index={"Qq": "q1.md"}, articles={"q1.md": "aria-expanded"})

        await ArticleSearchService(first, cache).search("aria-expanded", include_content=True)
        result = await ArticleSearchService(second, cache).search(
            "aria-expanded", include_content=True
        )

        assert result.total_found == 1
        assert second.article_calls == []

    @pytest.mark.asyncio
    async def test_fetch_article_populates_cache(
        self, service: ArticleSearchService
    ) -> None:
        """A direct fetch stores the body for later content searches."""
        await service.fetch_article(ACCORDION_PATH)

        assert service.cache.get(ACCORDION_PATH) == ACCORDION_CONTENT


# =============================================================================
# Unreachable Articles
# =============================================================================

KEYBOARD_PATH = "docs/keyboard.md"
BROKEN_PATH = "docs/bad\x01path.md"


def _repository_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("index.json"):
        return httpx.Response(
            200,
            json={"Broken \x01 doc": BROKEN_PATH, "Keyboard Guide": KEYBOARD_PATH},
        )
    if request.url.path.endswith(KEYBOARD_PATH):
        return httpx.Response(200, text="Dialogs must avoid focus traps.")
    return httpx.Response(404)


@pytest.fixture
def repository_client() -> DocsClient:
    """DocsClient whose pooled client is served by an in-memory repository."""
    client = DocsClient(
        index_url="https://raw.example.test/main/docs/index.json",
        raw_base_url="https://raw.example.test/main",
        browse_base_url="https://github.example.test/blob/main",
    )
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(_repository_handler))
    return client


class TestUnreachableArticles:
    """A path the client cannot request does not abort ranking."""

    @pytest.mark.asyncio
    async def test_search_ranks_remaining_articles(
        self, repository_client: DocsClient
    ) -> None:
        """An article whose URL cannot be built counts as empty content."""
        service = ArticleSearchService(client=repository_client)

        result = await service.search("focus traps", include_content=True)

        assert result.articles[0].path == KEYBOARD_PATH
        assert result.articles[0].match_reason == "Content match"
        assert service.cache.get(BROKEN_PATH) == ""

    @pytest.mark.asyncio
    async def test_direct_fetch_raises_fetch_error(
        self, repository_client: DocsClient
    ) -> None:
        """fetch_article() reports the unusable path as ArticleFetchError."""
        service = ArticleSearchService(client=repository_client)

        with pytest.raises(ArticleFetchError):
            await service.fetch_article(BROKEN_PATH)


# =============================================================================
# Index Failures
# =============================================================================


class TestIndexFailures:
    """Index errors abort the operation."""

    @pytest.mark.asyncio
    async def test_search_propagates_index_error(
        self, service: ArticleSearchService, docs_client: FakeDocsClient
    ) -> None:
        """search() raises IndexFetchError."""
        docs_client.index_error = IndexFetchError("Failed to fetch index: 503", status_code=503)

        with pytest.raises(IndexFetchError):
            await service.search("accordion")

    @pytest.mark.asyncio
    async def test_list_propagates_index_error(
        self, service: ArticleSearchService, docs_client: FakeDocsClient
    ) -> None:
        """list_all() raises IndexFetchError."""
        docs_client.index_error = IndexFetchError("Failed to fetch index: boom")

        with pytest.raises(IndexFetchError):
            await service.list_all()

    @pytest.mark.asyncio
    async def test_index_fetched_per_search(
        self, service: ArticleSearchService, docs_client: FakeDocsClient
    ) -> None:
        """The index is not cached between searches."""
        await service.search("accordion")
        await service.search("accordion")

        assert docs_client.index_calls == 2


# =============================================================================
# fetch_article
# =============================================================================


class TestFetchArticle:
    """Direct article fetches."""

    @pytest.mark.asyncio
    async def test_frontmatter_title_and_metadata(
        self, service: ArticleSearchService, docs_client: FakeDocsClient
    ) -> None:
        """Title, source and date come from the frontmatter verbatim."""
        article = await service.fetch_article(ACCORDION_PATH)

        assert article.path == ACCORDION_PATH
        assert article.content == ACCORDION_CONTENT
        assert article.title == "Accordion Pattern"
        assert article.metadata is not None
        assert article.metadata.source == "https://www.w3.org/WAI/ARIA/apg/patterns/accordion/"
        assert article.metadata.last_updated == "2025-07-20"
        assert article.metadata.size == len(ACCORDION_CONTENT)
        assert article.metadata.content_type == "text/markdown"
        assert article.metadata.url == docs_client.article_url(ACCORDION_PATH)

    @pytest.mark.asyncio
    async def test_without_metadata(self, service: ArticleSearchService) -> None:
        """include_metadata=False leaves metadata out."""
        article = await service.fetch_article(ACCORDION_PATH, include_metadata=False)

        assert article.metadata is None
        assert article.title == "Accordion Pattern"

    @pytest.mark.asyncio
    async def test_heading_title_without_frontmatter(self) -> None:
        """Without frontmatter the first heading is the title and source is unset."""
        client = FakeDocsClient(articles={"docs/button.md": "# Button Pattern\n\nText"})
        service = ArticleSearchService(client=client)

        article = await service.fetch_article("docs/button.md")

        assert article.title == "Button Pattern"
        assert article.metadata is not None
        assert article.metadata.source is None
        assert article.metadata.last_updated is None

    @pytest.mark.asyncio
    async def test_not_found(self, service: ArticleSearchService) -> None:
        """A missing path raises ArticleNotFoundError naming the path."""
        with pytest.raises(ArticleNotFoundError) as exc_info:
            await service.fetch_article("docs/nope.md")

        assert "docs/nope.md" in str(exc_info.value)
        assert exc_info.value.path == "docs/nope.md"

    @pytest.mark.asyncio
    async def test_fetch_failure(self) -> None:
        """Other failures raise ArticleFetchError."""
        client = FakeDocsClient(failing_paths={"docs/a.md"})
        service = ArticleSearchService(client=client)

        with pytest.raises(ArticleFetchError):
            await service.fetch_article("docs/a.md")


# =============================================================================
# list_all
# =============================================================================


class TestListAll:
    """Full listing."""

    @pytest.mark.asyncio
    async def test_sorted_by_title(self, service: ArticleSearchService) -> None:
        """Records come back sorted by title with browse URLs."""
        listing = await service.list_all()

        assert [r.title for r in listing.articles] == [
            ACCORDION_TITLE,
            BREADCRUMB_TITLE,
            DATEPICKER_TITLE,
        ]
        assert listing.total_count == 3
        assert all(r.url and r.url.endswith(r.path) for r in listing.articles)

    @pytest.mark.asyncio
    async def test_empty_index(self) -> None:
        """An empty index lists nothing."""
        listing = await ArticleSearchService(FakeDocsClient()).list_all()

        assert listing.articles == []
        assert listing.total_count == 0
