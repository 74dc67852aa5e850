"""
Search Models

Data models for ranked search results, fetched articles and listings.
They are built per call and never persisted.
"""

from dataclasses import dataclass, field

TITLE_MATCH = "Title match"
PATH_MATCH = "Path match"
CONTENT_MATCH = "Content match"
MARKDOWN_CONTENT_TYPE = "text/markdown"


def content_words_match(matched: int, total: int) -> str:
    """Match reason for a partial word-overlap content match."""
    return f"{CONTENT_MATCH} ({matched}/{total} words)"


@dataclass
class ArticleRecord:
    """One entry of the article index.

    Attributes:
        title: Article title (index key)
        path: Repository-relative document path
        url: Browse URL of the article
        source: Original page the article was taken from
        last_updated: Date recorded in the article frontmatter
    """

    title: str
    path: str
    url: str | None = None
    source: str | None = None
    last_updated: str | None = None


@dataclass
class SearchResult:
    """A ranked candidate, before it is turned into a response item.

    Attributes:
        title: Article title
        path: Article path
        score: Relevance score in [0, 1]
        match_reason: Which signal produced the score
        snippet: Context excerpt for content matches
    """

    title: str
    path: str
    score: float
    match_reason: str
    snippet: str | None = None

    @property
    def relevance_score(self) -> float:
        """Alias for score (response schema name)."""
        return self.score


@dataclass
class RankedArticle:
    """A search result as returned to callers."""

    title: str
    path: str
    url: str
    relevance_score: float
    match_reason: str
    snippet: str | None = None


@dataclass
class SearchResponse:
    """Result of a search: the top articles plus the pre-truncation count."""

    articles: list[RankedArticle]
    total_found: int
    query: str


@dataclass
class ArticleMetadata:
    """Metadata attached to a fetched article."""

    url: str
    size: int
    content_type: str = MARKDOWN_CONTENT_TYPE
    source: str | None = None
    last_updated: str | None = None


@dataclass
class ArticleContent:
    """A directly fetched article."""

    path: str
    content: str
    title: str | None = None
    metadata: ArticleMetadata | None = None


@dataclass
class ArticleListing:
    """Every indexed article, sorted by title."""

    articles: list[ArticleRecord] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.articles)
