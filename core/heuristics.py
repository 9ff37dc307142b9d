"""
Heuristic availability estimate

Last stage of the cascade. Scores a name on a few surface features and adds
seeded jitter, so the same seed and domain always give the same answer.
"""
from typing import Callable, Optional, Sequence
import random

from config.constants import (
    COMMON_EXTENSIONS,
    COMMON_WORDS,
    HEURISTIC_BASE_SCORE,
    HEURISTIC_COM_PENALTY,
    HEURISTIC_DIGIT_BONUS,
    HEURISTIC_HYPHEN_BONUS,
    HEURISTIC_JITTER,
    HEURISTIC_MAX_WORD_PENALTY,
    HEURISTIC_SHORT_BONUS,
    HEURISTIC_SHORT_LENGTH,
    HEURISTIC_THRESHOLD,
    HEURISTIC_UNCOMMON_EXTENSION_BONUS,
    HEURISTIC_WORD_PENALTY,
    LABEL_BRAND,
    LABEL_ESTIMATED_AVAILABLE,
    LABEL_ESTIMATED_REGISTERED,
    PRIMARY_EXTENSION,
    WELL_KNOWN_BRANDS,
)
from core.availability import AvailabilityResult, ResolutionStrategy
from core.catalog import split_domain

RandomFactory = Callable[[str], random.Random]


def contains_brand(stem: str, brands: Sequence[str] = WELL_KNOWN_BRANDS) -> bool:
    return any(brand in stem for brand in brands)


def base_score(stem: str, extension: str, words: Sequence[str] = COMMON_WORDS) -> float:
    """Deterministic part of the score; higher means more likely free"""
    score = HEURISTIC_BASE_SCORE

    if len(stem) <= HEURISTIC_SHORT_LENGTH:
        score += HEURISTIC_SHORT_BONUS
    if "-" in stem:
        score += HEURISTIC_HYPHEN_BONUS
    if any(ch.isdigit() for ch in stem):
        score += HEURISTIC_DIGIT_BONUS

    if extension == PRIMARY_EXTENSION:
        score -= HEURISTIC_COM_PENALTY
    elif extension not in COMMON_EXTENSIONS:
        score += HEURISTIC_UNCOMMON_EXTENSION_BONUS

    word_hits = sum(1 for word in words if word in stem)
    score -= min(word_hits * HEURISTIC_WORD_PENALTY, HEURISTIC_MAX_WORD_PENALTY)

    return score


class HeuristicStrategy(ResolutionStrategy):
    """Always answers; results are marked unverified"""

    name = "heuristic"

    def __init__(self, seed: int = 0, random_factory: Optional[RandomFactory] = None):
        self.seed = seed
        self.random_factory = random_factory or self._seeded_random

    def _seeded_random(self, domain: str) -> random.Random:
        return random.Random(f"{self.seed}:{domain}")

    def score(self, domain: str) -> Optional[float]:
        """Final score for a domain, or None for well-known brands"""
        domain = domain.lower()
        stem, extension = split_domain(domain)

        if contains_brand(stem):
            return None

        rng = self.random_factory(domain)
        jitter = rng.uniform(-HEURISTIC_JITTER, HEURISTIC_JITTER)
        return base_score(stem, extension) + jitter

    async def attempt(self, domain: str) -> AvailabilityResult:
        score = self.score(domain)

        if score is None:
            return AvailabilityResult(
                domain=domain,
                available=False,
                source_label=LABEL_BRAND,
                verified=False
            )

        available = score >= HEURISTIC_THRESHOLD
        return AvailabilityResult(
            domain=domain,
            available=available,
            source_label=LABEL_ESTIMATED_AVAILABLE if available else LABEL_ESTIMATED_REGISTERED,
            verified=False
        )
