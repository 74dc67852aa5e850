"""
Snippet Extractor

Bounded excerpts of an article body around the first occurrence of a query.
"""

ELLIPSIS = "..."
CONTEXT_BEFORE = 50
CONTEXT_AFTER = 150
DEFAULT_MAX_LENGTH = 200


def extract_snippet(content: str, query: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Extract a short excerpt of ``content`` around ``query``.

    The search is case-insensitive. When the query is found at offset ``i``,
    the window runs from ``i - 50`` to ``i + len(query) + 150`` (clamped to
    the content) and is wrapped in ellipses on the sides that were cut.
    When the query is absent, the first ``max_length`` characters are used.

    Args:
        content: Full article body
        query: Text to anchor the excerpt on
        max_length: Length of the fallback excerpt when the query is absent

    Returns:
        The excerpt, or an empty string for empty content
    """
    if not content:
        return ""

    index = content.lower().find(query.lower())

    if index == -1:
        if len(content) > max_length:
            return content[:max_length] + ELLIPSIS
        return content

    start = max(0, index - CONTEXT_BEFORE)
    end = min(len(content), index + len(query) + CONTEXT_AFTER)

    snippet = content[start:end]
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(content):
        snippet = snippet + ELLIPSIS
    return snippet
