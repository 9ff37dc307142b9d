"""
Keyword extraction from free-text queries
"""
import re
from typing import List

from core.exceptions import EmptyQueryError

# Anything that is not an ASCII letter or digit
_STRIP_PATTERN = re.compile(r"[^a-z0-9]")


def _is_foreign(token: str) -> bool:
    """True when the token contains a letter or digit outside ASCII"""
    return any(ch.isalnum() and not ch.isascii() for ch in token)


def extract_keywords(query: str) -> List[str]:
    """Normalize free text into an ordered token list

    Lowercases, splits on whitespace and removes punctuation. Tokens are
    ASCII-only because they become domain labels: a token with non-ASCII
    letters ("café") is skipped whole rather than truncated. Duplicates are
    kept; the variation generator deduplicates its output.

    Args:
        query: Raw user query

    Returns:
        Tokens in input order
    """
    if not query:
        return []

    keywords = []
    for token in query.lower().split():
        if _is_foreign(token):
            continue
        cleaned = _STRIP_PATTERN.sub("", token)
        if cleaned:
            keywords.append(cleaned)
    return keywords


def require_keywords(query: str) -> List[str]:
    """Extract keywords or reject the query

    Raises:
        EmptyQueryError: When the query has no ASCII alphanumeric content
    """
    keywords = extract_keywords(query)
    if not keywords:
        raise EmptyQueryError(query=query)
    return keywords
