"""
Base Service Class
"""
from typing import Optional
import logging

from core.catalog import ExtensionCatalog, get_extension_catalog
from core.registrars import PricingAggregator, get_pricing_aggregator
from database.repositories.domain_repository import DomainRepository
from database.repositories.search_repository import SearchRepository

logger = logging.getLogger(__name__)


class BaseService:
    """
    Shared wiring for services that read and write the result store
    """

    def __init__(
        self,
        domain_repo: Optional[DomainRepository] = None,
        search_repo: Optional[SearchRepository] = None,
        catalog: Optional[ExtensionCatalog] = None,
        pricing: Optional[PricingAggregator] = None,
        db=None
    ):
        """Initialize base service with optional dependency injection for testing"""
        self.domain_repo = domain_repo if domain_repo is not None else DomainRepository(db=db)
        self.search_repo = search_repo if search_repo is not None else SearchRepository(db=db)
        self.catalog = catalog if catalog is not None else get_extension_catalog()
        self.pricing = pricing if pricing is not None else get_pricing_aggregator()
        self.service_name = self.__class__.__name__
