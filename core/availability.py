"""
Availability Resolver

Answers "is this domain likely registered?" through an ordered cascade of
strategies. The first strategy that gives a definite answer wins; the
heuristic at the end of the cascade always answers.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, List, Optional, Sequence
import asyncio
import logging
import time

import aiohttp

from config.constants import LABEL_UNVERIFIED
from config.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilityResult:
    """Outcome of resolving one domain"""
    domain: str
    available: bool
    source_label: str
    price: Optional[Decimal] = None
    premium: bool = False
    verified: bool = True

    def __post_init__(self):
        # Only available domains carry a price from resolution
        if not self.available and self.price is not None:
            object.__setattr__(self, "price", None)


def conservative_default(domain: str) -> AvailabilityResult:
    """Result used when no strategy could answer"""
    return AvailabilityResult(
        domain=domain,
        available=True,
        source_label=LABEL_UNVERIFIED,
        verified=False
    )


SessionGetter = Callable[[], aiohttp.ClientSession]


class ResolutionStrategy(ABC):
    """One stage of the availability cascade"""

    name = "strategy"

    def bind(self, session_getter: SessionGetter):
        """Give network strategies access to the resolver's HTTP session"""

    @abstractmethod
    async def attempt(self, domain: str) -> Optional[AvailabilityResult]:
        """
        Try to resolve a domain

        Returns:
            A result, or None to defer to the next strategy
        """
        pass


class BatchPacer:
    """Minimum-interval limiter between batches

    Shared by every call on one resolver, so consecutive batches are spaced
    by at least ``min_interval`` seconds even across concurrent callers.
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], "asyncio.Future"] = asyncio.sleep
    ):
        self.min_interval = max(0.0, min_interval)
        self._clock = clock
        self._sleep = sleep
        self._last: Optional[float] = None
        self._lock = asyncio.Lock()

    async def wait(self):
        async with self._lock:
            if self._last is not None:
                delay = self._last + self.min_interval - self._clock()
                if delay > 0:
                    await self._sleep(delay)
            self._last = self._clock()


class AvailabilityResolver:
    """Cascade of resolution strategies with batched, paced fan-out"""

    def __init__(
        self,
        strategies: Sequence[ResolutionStrategy],
        batch_size: int = 3,
        pacer: Optional[BatchPacer] = None,
        stage_timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Args:
            strategies: Cascade stages in evaluation order
            batch_size: Number of domains resolved concurrently
            pacer: Limiter between batches (defaults to no spacing)
            stage_timeout: Upper bound in seconds for a single stage
            session: Optional externally owned HTTP session
        """
        self.strategies: List[ResolutionStrategy] = list(strategies)
        self.batch_size = max(1, batch_size)
        self.pacer = pacer or BatchPacer(0.0)
        self.stage_timeout = stage_timeout
        self._session = session
        self._owns_session = session is None

        for strategy in self.strategies:
            strategy.bind(self.get_session)

    def get_session(self) -> aiohttp.ClientSession:
        """HTTP session shared by network strategies, created on first use"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def _attempt(self, strategy: ResolutionStrategy, domain: str) -> Optional[AvailabilityResult]:
        if self.stage_timeout:
            return await asyncio.wait_for(strategy.attempt(domain), timeout=self.stage_timeout)
        return await strategy.attempt(domain)

    async def resolve(self, domain: str) -> AvailabilityResult:
        """
        Resolve one domain through the cascade

        Never raises: failing or timed-out stages defer to the next one, and
        the conservative default is returned when nothing answers.
        """
        for strategy in self.strategies:
            try:
                result = await self._attempt(strategy, domain)
            except asyncio.TimeoutError:
                logger.warning(f"⏱️ {strategy.name} timed out for {domain}")
                continue
            except Exception as e:
                logger.warning(f"⚠️ {strategy.name} failed for {domain}: {e}")
                continue

            if result is not None:
                logger.debug(f"🔎 {domain}: {result.source_label} via {strategy.name}")
                return result

        logger.info(f"❔ No strategy answered for {domain}, using conservative default")
        return conservative_default(domain)

    async def resolve_many(self, domains: Sequence[str]) -> List[AvailabilityResult]:
        """
        Resolve domains in paced batches

        Args:
            domains: Domains to resolve

        Returns:
            One result per input, in input order
        """
        results: List[AvailabilityResult] = []

        for i in range(0, len(domains), self.batch_size):
            batch = list(domains[i:i + self.batch_size])
            await self.pacer.wait()

            outcomes = await asyncio.gather(
                *[self.resolve(domain) for domain in batch],
                return_exceptions=True
            )

            for domain, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    logger.error(f"❌ Resolution crashed for {domain}: {outcome}")
                    results.append(conservative_default(domain))
                else:
                    results.append(outcome)

        return results

    async def close(self):
        """Release the HTTP session if this resolver created it"""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def create_availability_resolver(
    presence_probe: Optional[bool] = None,
    domain_apis: Optional[List[dict]] = None
) -> AvailabilityResolver:
    """
    Build the resolver cascade from settings

    Stage order: authoritative lookup (only when a provider and key are
    configured), presence probe (when enabled), heuristic (always).

    Args:
        presence_probe: Override for settings.enable_presence_probe
        domain_apis: Override for the configured domain APIs

    Returns:
        A resolver that owns its own HTTP session
    """
    from core.heuristics import HeuristicStrategy
    from core.resolvers import AuthoritativeLookupStrategy, PresenceProbeStrategy

    if presence_probe is None:
        presence_probe = settings.enable_presence_probe
    if domain_apis is None:
        domain_apis = settings.get_domain_apis()

    strategies: List[ResolutionStrategy] = []

    if domain_apis:
        strategies.append(AuthoritativeLookupStrategy(
            domain_apis,
            timeout=settings.availability_timeout
        ))

    if presence_probe:
        strategies.append(PresenceProbeStrategy(timeout=settings.availability_timeout))

    strategies.append(HeuristicStrategy(seed=settings.heuristic_seed))

    # Registry lookup tries each configured provider with the full timeout;
    # the presence probe spends one timeout across all of its steps
    stage_timeout = settings.availability_timeout * max(1, len(domain_apis)) + 1

    return AvailabilityResolver(
        strategies,
        batch_size=settings.availability_batch_size,
        pacer=BatchPacer(settings.availability_batch_delay),
        stage_timeout=stage_timeout
    )
