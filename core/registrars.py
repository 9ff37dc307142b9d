"""
Registrar Pricing Aggregator

Builds per-registrar quotes and affiliate links for a domain and picks the
cheapest one.
"""
from collections import OrderedDict
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from urllib.parse import urlencode
import logging

from config.constants import REGISTRAR_PRICING
from config.settings import settings
from core.catalog import ExtensionCatalog, get_extension_catalog, normalize_extension, to_price

logger = logging.getLogger(__name__)

# (search params, tracking params) for one domain and affiliate id
LinkParams = Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]


@dataclass(frozen=True)
class RegistrarQuote:
    """One registrar's price and purchase link for a domain"""
    registrar_name: str
    price: Decimal
    affiliate_link: str
    logo_id: str
    has_affiliate: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "registrar_name": self.registrar_name,
            "price": str(self.price),
            "affiliate_link": self.affiliate_link,
            "logo_id": self.logo_id,
            "has_affiliate": self.has_affiliate
        }


@dataclass(frozen=True)
class PricingResult:
    """All quotes for a domain plus the chosen best one"""
    registrar_quotes: Dict[str, RegistrarQuote]
    best_quote: RegistrarQuote

    @property
    def best_price(self) -> Decimal:
        return self.best_quote.price

    def quotes_as_dict(self) -> Dict[str, Dict[str, object]]:
        return {name: quote.to_dict() for name, quote in self.registrar_quotes.items()}


@dataclass(frozen=True)
class RegistrarConfig:
    """Static registrar description"""
    name: str
    logo_id: str
    base_url: str
    build_params: Callable[[str, Optional[str], Dict[str, str]], LinkParams]
    prices: Dict[str, Decimal] = field(default_factory=dict)
    affiliate_id: Optional[str] = None
    extra: Dict[str, str] = field(default_factory=dict)

    def price_for(self, extension: str) -> Optional[Decimal]:
        return self.prices.get(extension)

    def build_link(self, domain: str) -> str:
        """Purchase link for a domain, with tracking when an id is configured"""
        search, tracking = self.build_params(domain, self.affiliate_id, self.extra)
        params = search + (tracking if self.affiliate_id else [])
        return f"{self.base_url}?{urlencode(params)}"


def _godaddy_params(domain: str, affiliate_id: Optional[str], extra: Dict[str, str]) -> LinkParams:
    tracking = [("isc", affiliate_id or "")]
    if extra.get("plid"):
        tracking.append(("plid", extra["plid"]))
    return [("checkAvail", "1"), ("domainToCheck", domain)], tracking


def _namecheap_params(domain: str, affiliate_id: Optional[str], extra: Dict[str, str]) -> LinkParams:
    return [("domain", domain)], [("afftrack", affiliate_id or "")]


def _hover_params(domain: str, affiliate_id: Optional[str], extra: Dict[str, str]) -> LinkParams:
    return [("utf8", "✓"), ("domain-name", domain)], [
        ("utm_source", affiliate_id or ""),
        ("utm_medium", "affiliate"),
        ("utm_campaign", "domain-search")
    ]


def _porkbun_params(domain: str, affiliate_id: Optional[str], extra: Dict[str, str]) -> LinkParams:
    return [("q", domain)], [("coupon", affiliate_id or "")]


def _squarespace_params(domain: str, affiliate_id: Optional[str], extra: Dict[str, str]) -> LinkParams:
    return [("query", domain)], [("channel", affiliate_id or "")]


# name -> (logo id, base url, param builder), in configuration order
REGISTRAR_LINKS = OrderedDict([
    ("GoDaddy", ("godaddy", "https://www.godaddy.com/domainsearch/find", _godaddy_params)),
    ("Namecheap", ("namecheap", "https://www.namecheap.com/domains/registration/results/", _namecheap_params)),
    ("Hover", ("hover", "https://hover.com/domains/results", _hover_params)),
    ("Porkbun", ("porkbun", "https://porkbun.com/checkout/search", _porkbun_params)),
    ("Squarespace", ("squarespace", "https://domains.squarespace.com/search", _squarespace_params)),
])


def build_registrars(
    affiliate_ids: Optional[Dict[str, Optional[str]]] = None,
    extras: Optional[Dict[str, Dict[str, str]]] = None
) -> List[RegistrarConfig]:
    """Build registrar configs from the static tables

    Args:
        affiliate_ids: Affiliate id per registrar name; missing means untracked
        extras: Additional tracking values per registrar (e.g. GoDaddy plid)

    Returns:
        Registrars in configuration order
    """
    affiliate_ids = affiliate_ids or {}
    extras = extras or {}
    registrars = []

    for name, (logo_id, base_url, build_params) in REGISTRAR_LINKS.items():
        prices = {
            normalize_extension(ext): to_price(price)
            for ext, price in REGISTRAR_PRICING.get(name, {}).items()
        }
        registrars.append(RegistrarConfig(
            name=name,
            logo_id=logo_id,
            base_url=base_url,
            build_params=build_params,
            prices=prices,
            affiliate_id=affiliate_ids.get(name) or None,
            extra={k: v for k, v in extras.get(name, {}).items() if v}
        ))

    return registrars


class PricingAggregator:
    """Merges registrar price tables into one result per domain"""

    def __init__(
        self,
        registrars: Sequence[RegistrarConfig],
        catalog: Optional[ExtensionCatalog] = None
    ):
        if not registrars:
            raise ValueError("At least one registrar is required")
        self.registrars = list(registrars)
        self.catalog = catalog or get_extension_catalog()

    @property
    def default_registrar(self) -> RegistrarConfig:
        return self.registrars[0]

    def _quote(self, registrar: RegistrarConfig, domain: str, price: Decimal) -> RegistrarQuote:
        return RegistrarQuote(
            registrar_name=registrar.name,
            price=price,
            affiliate_link=registrar.build_link(domain),
            logo_id=registrar.logo_id,
            has_affiliate=registrar.affiliate_id is not None
        )

    def quote(self, domain: str, extension: str) -> PricingResult:
        """Price a domain across all registrars

        Args:
            domain: Full domain name, e.g. "acmehub.com"
            extension: Its extension, e.g. ".com"

        Returns:
            Quotes in registrar order and the cheapest one; ties keep the
            earlier registrar. When no registrar lists the extension the
            default registrar is used at the catalog base price.
        """
        extension = normalize_extension(extension)
        quotes: Dict[str, RegistrarQuote] = OrderedDict()
        best: Optional[RegistrarQuote] = None

        for registrar in self.registrars:
            price = registrar.price_for(extension)
            if price is None:
                continue

            quote = self._quote(registrar, domain, price)
            quotes[registrar.name] = quote
            if best is None or quote.price < best.price:
                best = quote

        if best is None:
            best = self._quote(self.default_registrar, domain, self.catalog.base_price(extension))
            logger.debug(f"💲 No registrar lists {extension}, using base price for {domain}")

        return PricingResult(registrar_quotes=quotes, best_quote=best)


@lru_cache()
def get_pricing_aggregator() -> PricingAggregator:
    """Process-wide aggregator built from configured affiliate ids"""
    registrars = build_registrars(
        affiliate_ids=settings.get_affiliate_ids(),
        extras={"GoDaddy": {"plid": settings.godaddy_plid}}
    )
    tracked = [r.name for r in registrars if r.affiliate_id]
    logger.info(f"💲 Pricing aggregator ready ({len(registrars)} registrars, tracked: {tracked or 'none'})")
    return PricingAggregator(registrars)
