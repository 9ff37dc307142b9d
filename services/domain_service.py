"""
Domain Candidate Service

Generates domain candidates from a free-text query, resolves their
availability, prices them and stores the results.
"""
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple
import logging

from pydantic.alias_generators import to_camel

from config.constants import (
    DEFAULT_RECENT_SEARCHES,
    ERROR_MESSAGES,
    MAX_RECENT_SEARCHES,
    PREMIUM_PRICE_THRESHOLD,
    SortOption,
)
from config.logging_config import LogContext
from config.settings import settings
from core.availability import AvailabilityResolver, AvailabilityResult, create_availability_resolver
from core.catalog import split_domain
from core.exceptions import InvalidFilterError, NotFoundError, UnsupportedExtensionError
from core.keywords import require_keywords
from core.metrics import calculate_domain_metrics
from core.registrars import PricingResult
from core.variations import generate_variations
from database.repositories.base_repository import utc_now
from services.base_service import BaseService
from utils.formatters import build_description, filter_candidates, format_price, sort_candidates
from utils.validators import clean_domain, sanitize_input

logger = logging.getLogger(__name__)

PREMIUM_THRESHOLD = Decimal(PREMIUM_PRICE_THRESHOLD)

# (domain, extension, pricing) for one stem x extension combination
Pair = Tuple[str, str, PricingResult]


class DomainService(BaseService):
    """Service for generating and checking domain candidates"""

    def __init__(self, resolver: Optional[AvailabilityResolver] = None, **kwargs):
        super().__init__(**kwargs)
        self._owns_resolver = resolver is None
        self.resolver = resolver if resolver is not None else create_availability_resolver()

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def _validate_filters(self, filters: Optional[Dict[str, Any]], for_generation: bool = True) -> Dict[str, Any]:
        """
        Check and normalize a filter set

        Raises:
            InvalidFilterError: On unknown extensions, an inverted price range,
                or a non-positive count or length
        """
        filters = dict(filters or {})

        extensions = [ext.suffix for ext in self.catalog.ordered(filters.get("extensions"))]

        min_price = _to_price(filters.get("min_price"), "minPrice")
        max_price = _to_price(filters.get("max_price"), "maxPrice")
        if min_price is not None and max_price is not None and min_price > max_price:
            raise InvalidFilterError(ERROR_MESSAGES["price_range"], field="minPrice")

        max_length = filters.get("max_length")
        if max_length is not None and max_length <= 0:
            raise InvalidFilterError("maxLength must be positive", field="maxLength")

        sort_by = filters.get("sort_by")
        if sort_by:
            try:
                sort_by = SortOption(sort_by)
            except ValueError:
                raise InvalidFilterError(f"Unknown sort option: {sort_by}", field="sortBy")

        available_only = bool(filters.get("available_only"))

        target_count = filters.get("target_count")
        if for_generation:
            if target_count is None:
                target_count = settings.target_count_for(available_only)
            elif target_count <= 0:
                raise InvalidFilterError("targetCount must be positive", field="targetCount")
            target_count = min(target_count, settings.max_target_count)

        return {
            "extensions": extensions,
            "min_price": min_price,
            "max_price": max_price,
            "available_only": available_only,
            "max_length": max_length,
            "target_count": target_count,
            "sort_by": sort_by,
            "explicit_extensions": bool(filters.get("extensions"))
        }

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def _iter_pairs(self, stems: Sequence[str], extensions: Sequence[str]) -> Iterator[Pair]:
        """Lazily price stem x extension pairs, primary extension first per stem"""
        for stem in stems:
            for extension in extensions:
                domain = f"{stem}{extension}"
                try:
                    pricing = self.pricing.quote(domain, extension)
                except Exception as e:
                    logger.warning(f"⚠️ Pricing failed for {domain}: {e}")
                    continue
                yield domain, extension, pricing

    def _passes_cheap_filters(self, domain: str, pricing: PricingResult, filters: Dict[str, Any]) -> bool:
        if filters["max_length"] is not None and len(domain) > filters["max_length"]:
            return False
        price = pricing.best_price
        if filters["min_price"] is not None and price < filters["min_price"]:
            return False
        if filters["max_price"] is not None and price > filters["max_price"]:
            return False
        return True

    def _build_candidate(
        self,
        domain: str,
        extension: str,
        pricing: PricingResult,
        result: AvailabilityResult,
        keywords: Sequence[str]
    ) -> Dict[str, Any]:
        """Row for the domains table"""
        best = pricing.best_quote
        tags = list(dict.fromkeys(keywords))

        return {
            "name": domain,
            "extension": extension,
            "price": str(best.price),
            "is_available": result.available,
            "is_premium": result.premium or best.price > PREMIUM_THRESHOLD,
            "registrar": best.registrar_name if result.available else result.source_label,
            "affiliate_link": best.affiliate_link,
            "registrar_pricing": pricing.quotes_as_dict(),
            "description": build_description(tags),
            "tags": tags,
            "length": len(domain),
            "availability_source": result.source_label,
            "checked_at": utc_now()
        }

    async def _resolve_chunk(self, chunk: List[Pair]) -> List[Optional[AvailabilityResult]]:
        try:
            return await self.resolver.resolve_many([domain for domain, _, _ in chunk])
        except Exception as e:
            logger.error(f"❌ Resolution failed for chunk starting at {chunk[0][0]}: {e}")
            return [None] * len(chunk)

    async def select_candidates(
        self,
        keywords: Sequence[str],
        filters: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """
        Walk stem x extension pairs until enough candidates are accepted

        Cheap filters (length and price) run before any network work. Pairs
        that survive are resolved in chunks of the resolver's batch width and
        accepted in iteration order.

        Args:
            keywords: Extracted query tokens
            filters: Validated filters

        Returns:
            Candidate rows, at most filters["target_count"]
        """
        stems = generate_variations(keywords)
        target = filters["target_count"]
        budget = settings.max_pairs_per_request
        width = self.resolver.batch_size

        accepted: List[Dict[str, Any]] = []
        evaluated = 0
        chunk: List[Pair] = []
        pairs = self._iter_pairs(stems, filters["extensions"])

        logger.info(f"🔍 Selecting up to {target} candidates from {len(stems)} stems")

        while len(accepted) < target and evaluated < budget:
            pair = next(pairs, None)
            if pair is not None:
                domain, _, pricing = pair
                if not self._passes_cheap_filters(domain, pricing, filters):
                    continue
                chunk.append(pair)
                if len(chunk) < min(width, budget - evaluated):
                    continue

            if not chunk:
                break

            results = await self._resolve_chunk(chunk)
            evaluated += len(chunk)

            for (domain, extension, pricing), result in zip(chunk, results):
                if result is None:
                    continue
                if filters["available_only"] and not result.available:
                    continue
                accepted.append(self._build_candidate(domain, extension, pricing, result, keywords))
                if len(accepted) >= target:
                    break

            chunk = []
            if pair is None:
                break

        logger.info(f"✅ Accepted {len(accepted)} candidates after resolving {evaluated} pairs")
        return accepted

    async def generate(self, query: str, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Generate, resolve, price and store domain candidates

        Args:
            query: Free-text business idea or keywords
            filters: Optional filters (snake_case keys)

        Returns:
            {"domains": stored rows, "total": count}

        Raises:
            InvalidFilterError: Malformed filters
            EmptyQueryError: No usable keywords
            DatabaseError: Result store failure
        """
        query = sanitize_input(query or "")
        normalized = self._validate_filters(filters)
        keywords = require_keywords(query)

        with LogContext(query=query):
            logger.info(f"🚀 Generating domains for '{query}' ({len(keywords)} keywords)")

            candidates = await self.select_candidates(keywords, normalized)

            stored = []
            for candidate in candidates:
                stored.append(await self.domain_repo.save_domain(candidate))

            await self.search_repo.create_search(
                query=query,
                filters=_audit_filters(filters),
                results_count=len(stored)
            )

        return {
            "domains": sort_candidates(stored, normalized["sort_by"]),
            "total": len(stored)
        }

    # ------------------------------------------------------------------
    # Single-domain check
    # ------------------------------------------------------------------

    def _price_for(self, domain: str, extension: str) -> Optional[PricingResult]:
        try:
            return self.pricing.quote(domain, extension)
        except UnsupportedExtensionError:
            return None

    async def check_domain(self, domain: str) -> Dict[str, Any]:
        """
        Resolve and price one user-supplied domain

        Args:
            domain: Domain text; scheme, "www." and path are stripped and
                ".com" is added when there is no extension

        Returns:
            Availability summary plus the refreshed stored row, if any
        """
        name = clean_domain(domain)
        _, extension = split_domain(name)

        with LogContext(domain=name):
            result = await self.resolver.resolve(name)
            pricing = self._price_for(name, extension)

            price = pricing.best_price if (pricing and result.available) else None
            premium = result.premium or (pricing is not None and pricing.best_price > PREMIUM_THRESHOLD)

            record = await self.domain_repo.get_by_name(name)
            if record:
                record = await self.domain_repo.update_availability(name, result.available) or record

            status = f"available at {format_price(price)}" if result.available else "taken"
            logger.info(f"🔎 Checked {name}: {status} ({result.source_label})")

        return {
            "domain": name,
            "is_available": result.available,
            "registrar": result.source_label,
            "price": price,
            "premium": premium,
            "verified": result.verified,
            "record": record
        }

    # ------------------------------------------------------------------
    # Stored results
    # ------------------------------------------------------------------

    async def search(self, query: Optional[str] = None, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Filter and sort stored candidates without resolving anything

        Filtering happens in the result store; the rows it returns are
        checked once more here so the text match is exact substring matching
        on name, tags and description.
        """
        normalized = self._validate_filters(filters, for_generation=False)
        criteria = dict(
            extensions=normalized["extensions"] if normalized["explicit_extensions"] else None,
            min_price=normalized["min_price"],
            max_price=normalized["max_price"],
            available_only=normalized["available_only"],
            max_length=normalized["max_length"]
        )
        term = query.strip().lower() if query else None

        rows = await self.domain_repo.search_domains(term=term, **criteria)
        matches = filter_candidates(rows, query=query, **criteria)

        return {
            "domains": sort_candidates(matches, normalized["sort_by"]),
            "total": len(matches)
        }

    async def get_domain(self, domain_id: int) -> Dict[str, Any]:
        row = await self.domain_repo.get_domain(domain_id)
        if not row:
            raise NotFoundError("Domain", domain_id)
        return row

    async def get_domain_metrics(self, domain_id: int) -> Dict[str, Any]:
        row = await self.get_domain(domain_id)
        metrics = calculate_domain_metrics(row["name"])
        return {"domain": row["name"], **metrics.to_dict()}

    async def recent_searches(self, limit: int = DEFAULT_RECENT_SEARCHES) -> List[Dict[str, Any]]:
        limit = max(1, min(limit, MAX_RECENT_SEARCHES))
        return await self.search_repo.get_recent(limit)

    async def close(self):
        if self._owns_resolver:
            await self.resolver.close()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()


def _to_price(value: Any, field: str) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidFilterError(f"{field} must be a number", field=field)
    if price < 0:
        raise InvalidFilterError(f"{field} cannot be negative", field=field)
    return price


def _audit_filters(filters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """JSON-safe, camelCase copy of the filters as the client sent them"""
    audit = {}
    for key, value in (filters or {}).items():
        if value is None:
            continue
        if isinstance(value, Decimal):
            value = str(value)
        elif isinstance(value, Enum):
            value = value.value
        audit[to_camel(key)] = value
    return audit
