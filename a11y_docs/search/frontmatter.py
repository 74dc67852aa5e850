"""
Frontmatter Parser

Reads the handful of fields the service needs from a markdown article:
the YAML-style frontmatter block (``title``, ``url``, ``date``) and, as a
title fallback, the first level-one heading.

Values are kept as the literal strings written in the file; a date such as
``2025-07-20`` is not converted.
"""

import re
from dataclasses import dataclass

FRONTMATTER_PATTERN = re.compile(r"^---\s*\n([\s\S]*?)\n---")
HEADING_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)


def _field_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"^[ \t]*{name}:[ \t]*[\"']?([^\"'\n]+)[\"']?", re.MULTILINE)


TITLE_PATTERN = _field_pattern("title")
URL_PATTERN = _field_pattern("url")
DATE_PATTERN = _field_pattern("date")


@dataclass
class ArticleHeader:
    """Fields extracted from an article body.

    Attributes:
        title: Frontmatter title, else first ``# `` heading
        source: Frontmatter ``url`` (the page the article was taken from)
        last_updated: Frontmatter ``date``
    """

    title: str | None = None
    source: str | None = None
    last_updated: str | None = None


def _search(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def parse_article_header(content: str) -> ArticleHeader:
    """Parse title, source URL and date from a markdown article.

    Args:
        content: Raw markdown body

    Returns:
        ArticleHeader with whichever fields were found
    """
    header = ArticleHeader()

    frontmatter = FRONTMATTER_PATTERN.match(content)
    if frontmatter:
        block = frontmatter.group(1)
        header.title = _search(TITLE_PATTERN, block)
        header.source = _search(URL_PATTERN, block)
        header.last_updated = _search(DATE_PATTERN, block)

    if header.title is None:
        header.title = _search(HEADING_PATTERN, content)

    return header
