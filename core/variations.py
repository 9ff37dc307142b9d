"""
Domain stem variation generator
"""
from typing import Iterator, List, Sequence

from config.constants import PREFIXES, SUFFIXES


def iter_raw_variations(
    keywords: Sequence[str],
    prefixes: Sequence[str] = PREFIXES,
    suffixes: Sequence[str] = SUFFIXES
) -> Iterator[str]:
    """Yield every stem before deduplication

    Order: each token followed by its prefixed and suffixed forms, then
    pairwise concatenations in both orders.
    """
    for keyword in keywords:
        yield keyword

        for prefix in prefixes:
            yield f"{prefix}{keyword}"

        for suffix in suffixes:
            yield f"{keyword}{suffix}"

    for i in range(len(keywords)):
        for j in range(i + 1, len(keywords)):
            yield f"{keywords[i]}{keywords[j]}"
            yield f"{keywords[j]}{keywords[i]}"


def generate_variations(
    keywords: Sequence[str],
    prefixes: Sequence[str] = PREFIXES,
    suffixes: Sequence[str] = SUFFIXES
) -> List[str]:
    """Expand keywords into an ordered, deduplicated stem list

    Downstream selection consumes stems in this order and stops at its
    result budget, so earlier stems are favored.

    Args:
        keywords: Non-empty token list
        prefixes: Prefix vocabulary
        suffixes: Suffix vocabulary

    Returns:
        Stems in first-occurrence order
    """
    # dict preserves insertion order
    return list(dict.fromkeys(iter_raw_variations(keywords, prefixes, suffixes)))
