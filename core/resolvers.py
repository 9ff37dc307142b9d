"""
Network resolution strategies: registry API lookup and DNS/HTTP presence probe
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple
import asyncio
import logging

import aiohttp
import dns.asyncresolver
import dns.exception
import dns.resolver

from config.constants import (
    DNS_PROBE_ORDER,
    DomainApiProvider,
    LABEL_NO_DNS,
    LABEL_NO_PRESENCE,
    LABEL_RATE_LIMITED,
    LABEL_REGISTERED,
    LABEL_REGISTRY_AVAILABLE,
    LABEL_WEBSITE,
    LABEL_WEBSITE_HTTPS,
)
from core.availability import AvailabilityResult, ResolutionStrategy, SessionGetter

logger = logging.getLogger(__name__)

DEFAULT_API_URLS = {
    DomainApiProvider.WHOISXML.value: "https://domain-availability.whoisxmlapi.com/api/v1",
    DomainApiProvider.WHOAPI.value: "https://api.whoapi.com/"
}


class _SessionBound(ResolutionStrategy):
    """Strategy that issues HTTP requests through the resolver's session"""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session
        self._session_getter: Optional[SessionGetter] = None

    def bind(self, session_getter: SessionGetter):
        self._session_getter = session_getter

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is not None:
            return self._session
        if self._session_getter is None:
            raise RuntimeError(f"{self.name} strategy is not bound to a resolver")
        return self._session_getter()


class AuthoritativeLookupStrategy(_SessionBound):
    """Registry-backed lookup through a configured domain API"""

    name = "registry_api"

    def __init__(
        self,
        apis: Sequence[Dict[str, Any]],
        timeout: float = 5.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Args:
            apis: Provider configs with "provider", "key" and optional "url"
            timeout: Per-request timeout in seconds
            session: Optional session; otherwise the bound resolver's is used
        """
        super().__init__(session)
        self.apis = list(apis)
        self.timeout = timeout

    def _request_params(self, provider: str, api: Dict[str, Any], domain: str) -> Dict[str, str]:
        if provider == DomainApiProvider.WHOISXML.value:
            return {
                "apiKey": api["key"],
                "domainName": domain,
                "credits": "DA",
                "outputFormat": "JSON"
            }
        return {
            "domain": domain,
            "r": "taken",
            "apikey": api["key"]
        }

    def _parse(self, provider: str, domain: str, data: Dict[str, Any]) -> Optional[AvailabilityResult]:
        """Turn a provider payload into a result, or None when inconclusive"""
        if provider == DomainApiProvider.WHOISXML.value:
            info = data.get("DomainInfo") or {}
            status = str(info.get("domainAvailability", "")).upper()
            if status == "AVAILABLE":
                return self._available(domain)
            if status == "UNAVAILABLE":
                return self._registered(domain, info.get("registrarName"))
            return None

        # WhoAPI: status "0" means the request succeeded
        if str(data.get("status")) != "0" or "taken" not in data:
            return None
        if str(data.get("taken")) == "0":
            return self._available(domain)
        return self._registered(domain, data.get("registrar"))

    def _available(self, domain: str) -> AvailabilityResult:
        return AvailabilityResult(domain=domain, available=True, source_label=LABEL_REGISTRY_AVAILABLE)

    def _registered(self, domain: str, registrar: Optional[str]) -> AvailabilityResult:
        return AvailabilityResult(
            domain=domain,
            available=False,
            source_label=registrar or LABEL_REGISTERED
        )

    async def attempt(self, domain: str) -> Optional[AvailabilityResult]:
        for api in self.apis:
            provider = str(api.get("provider", "")).lower()
            url = api.get("url") or DEFAULT_API_URLS.get(provider)
            if provider not in DEFAULT_API_URLS or not url:
                logger.warning(f"⚠️ Unsupported domain API provider: {provider}")
                continue

            try:
                async with self.session.get(
                    url,
                    params=self._request_params(provider, api, domain),
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status == 429:
                        logger.warning(f"🚦 {provider} rate limited while checking {domain}")
                        return AvailabilityResult(
                            domain=domain,
                            available=False,
                            source_label=LABEL_RATE_LIMITED
                        )

                    if response.status != 200:
                        logger.warning(f"⚠️ {provider} returned {response.status} for {domain}")
                        continue

                    data = await response.json(content_type=None)

            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                logger.error(f"{provider} check failed for {domain}: {e}")
                continue

            if not isinstance(data, dict):
                continue

            result = self._parse(provider, domain, data)
            if result is not None:
                return result

        return None


# Outcome of one DNS query: True = records found, False = no records, None = unknown
DnsOutcome = Optional[bool]


class DomainNotFound(Exception):
    """Raised by a DNS lookup when the name does not exist"""


class PresenceProbeStrategy(_SessionBound):
    """DNS records first, then HTTP and HTTPS reachability

    One `timeout` covers the whole probe and is split evenly across the DNS
    queries and the two web requests.
    """

    name = "presence_probe"

    def __init__(
        self,
        timeout: float = 5.0,
        record_types: Sequence[Tuple[str, str]] = DNS_PROBE_ORDER,
        dns_resolver: Optional[dns.asyncresolver.Resolver] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        super().__init__(session)
        self.timeout = timeout
        self.record_types = list(record_types)
        self._dns_resolver = dns_resolver

    @property
    def step_timeout(self) -> float:
        return self.timeout / (len(self.record_types) + 2)

    @property
    def dns_resolver(self) -> dns.asyncresolver.Resolver:
        if self._dns_resolver is None:
            resolver = dns.asyncresolver.Resolver()
            resolver.timeout = self.step_timeout
            resolver.lifetime = self.step_timeout
            self._dns_resolver = resolver
        return self._dns_resolver

    async def query_dns(self, domain: str, record_type: str) -> DnsOutcome:
        """
        Look up one record type

        Raises:
            DomainNotFound: On NXDOMAIN
        """
        try:
            answer = await self.dns_resolver.resolve(domain, record_type)
            return len(answer) > 0
        except dns.resolver.NXDOMAIN:
            raise DomainNotFound(domain)
        except dns.resolver.NoAnswer:
            return False
        except (dns.resolver.NoNameservers, dns.exception.Timeout):
            return None
        except dns.exception.DNSException as e:
            logger.debug(f"DNS {record_type} lookup failed for {domain}: {e}")
            return None

    async def check_http(self, url: str) -> bool:
        """True when anything answers at the URL"""
        try:
            async with self.session.get(
                url,
                allow_redirects=True,
                timeout=aiohttp.ClientTimeout(total=self.step_timeout)
            ) as response:
                return response.status < 500
        except (aiohttp.ClientError, asyncio.TimeoutError):
            return False

    async def attempt(self, domain: str) -> Optional[AvailabilityResult]:
        uncertain = False

        for record_type, label in self.record_types:
            try:
                outcome = await self.query_dns(domain, record_type)
            except DomainNotFound:
                return AvailabilityResult(domain=domain, available=True, source_label=LABEL_NO_DNS)

            if outcome:
                return AvailabilityResult(domain=domain, available=False, source_label=label)
            if outcome is None:
                uncertain = True

        web_checks: List[Tuple[str, str]] = [
            (f"http://{domain}", LABEL_WEBSITE),
            (f"https://{domain}", LABEL_WEBSITE_HTTPS)
        ]
        for url, label in web_checks:
            if await self.check_http(url):
                return AvailabilityResult(domain=domain, available=False, source_label=label)

        if uncertain:
            return None

        return AvailabilityResult(domain=domain, available=True, source_label=LABEL_NO_PRESENCE)
