"""
Domain quality metrics
"""
from dataclasses import asdict, dataclass
from typing import Dict
import re

from config.constants import KEYWORD_CATEGORIES
from core.catalog import split_domain

SEO_WORDS = ("app", "web", "tech", "hub", "pro", "plus", "best", "top")
MEMORABLE_WORDS = SEO_WORDS + (
    "smart", "quick", "easy", "fast", "cool", "new", "good",
    "great", "super", "ultra", "mega"
)

_VOWELS = re.compile(r"[aeiou]", re.IGNORECASE)
_REPEAT = re.compile(r"(.)\1")
# Stored names are lowercase, so word boundaries are hyphens and underscores only
_WORD_SPLIT = re.compile(r"[-_]")


@dataclass(frozen=True)
class DomainMetrics:
    length: int
    seo_score: int
    brandability: int
    memorability: int
    is_typable: bool
    has_hyphens: bool
    has_numbers: bool
    category: str
    age: str = "New domain"
    backlinks: str = "No backlinks"

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def _clamp(score: int) -> int:
    return min(100, max(0, score))


def _has_digit(name: str) -> bool:
    return any(ch.isdigit() for ch in name)


def seo_score(name: str) -> int:
    score = 50

    if 8 <= len(name) <= 15:
        score += 20
    elif len(name) < 8:
        score += 10
    elif len(name) > 20:
        score -= 20

    if "-" not in name:
        score += 10
    if not _has_digit(name):
        score += 10
    if any(word in name.lower() for word in SEO_WORDS):
        score += 10

    return _clamp(score)


def brandability_score(name: str) -> int:
    score = 50

    if len(name) <= 8:
        score += 25
    elif len(name) <= 12:
        score += 15
    else:
        score -= 10

    # Pronounceable names sit around a 0.3-0.5 vowel ratio
    if name:
        vowel_ratio = len(_VOWELS.findall(name)) / len(name)
        if 0.3 <= vowel_ratio <= 0.5:
            score += 15

    if not _has_digit(name):
        score += 10
    if "-" not in name:
        score += 10

    return _clamp(score)


def memorability_score(name: str) -> int:
    score = 50

    if len(name) <= 6:
        score += 30
    elif len(name) <= 10:
        score += 20
    elif len(name) <= 15:
        score += 10

    words = [w for w in _WORD_SPLIT.split(name) if w]
    alliteration = len(words) > 1 and words[0][0] == words[1][0]
    if _REPEAT.search(name) or alliteration:
        score += 15

    if any(word in name.lower() for word in MEMORABLE_WORDS):
        score += 10

    return _clamp(score)


def categorize(name: str) -> str:
    """First keyword category whose vocabulary appears in the name"""
    lowered = name.lower()
    for category, keywords in KEYWORD_CATEGORIES.items():
        if any(keyword in lowered for keyword in keywords):
            return category
    return "general"


def calculate_domain_metrics(domain: str) -> DomainMetrics:
    """
    Score a domain name for SEO, brandability and memorability

    Args:
        domain: Full domain name; the extension is ignored

    Returns:
        DomainMetrics with scores in 0..100
    """
    name, _ = split_domain(domain)
    has_hyphens = "-" in name
    has_numbers = _has_digit(name)

    return DomainMetrics(
        length=len(name),
        seo_score=seo_score(name),
        brandability=brandability_score(name),
        memorability=memorability_score(name),
        is_typable=not has_hyphens and not has_numbers,
        has_hyphens=has_hyphens,
        has_numbers=has_numbers,
        category=categorize(name)
    )
