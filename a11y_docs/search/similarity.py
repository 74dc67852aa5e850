"""
Similarity Scorer

Cheap lexical similarity between a query and a candidate string
(article title or path). Policy constants come first:

- exact match (case-insensitive) scores EXACT_MATCH_SCORE
- containment in either direction scores SUBSTRING_MATCH_SCORE
- anything else falls back to Jaccard overlap of the distinct characters

The character-set fallback ignores order and multiplicity, so it tolerates
typos and reordering but is only an approximate signal.
"""

EXACT_MATCH_SCORE = 1.0
SUBSTRING_MATCH_SCORE = 0.8


def similarity(a: str, b: str) -> float:
    """Score how similar two strings are, in the range [0, 1].

    Args:
        a: First string (typically the query)
        b: Second string (typically a title or path)

    Returns:
        1.0 for a case-insensitive exact match, 0.8 when one contains
        the other, otherwise the character-set Jaccard index. Two empty
        strings score 0.0.
    """
    a_lower = a.lower()
    b_lower = b.lower()

    if not a_lower and not b_lower:
        return 0.0

    if a_lower == b_lower:
        return EXACT_MATCH_SCORE

    if a_lower in b_lower or b_lower in a_lower:
        return SUBSTRING_MATCH_SCORE

    return character_jaccard(a_lower, b_lower)


def character_jaccard(a: str, b: str) -> float:
    """Jaccard index of the distinct characters of two strings."""
    chars_a = set(a)
    chars_b = set(b)
    union = chars_a | chars_b
    if not union:
        return 0.0
    return len(chars_a & chars_b) / len(union)
