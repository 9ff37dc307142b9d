"""
FastAPI Dependencies
"""
from fastapi import Depends
from typing import AsyncIterator
import logging

from core.availability import AvailabilityResolver, create_availability_resolver
from database.repositories.domain_repository import DomainRepository
from database.repositories.search_repository import SearchRepository
from services.domain_service import DomainService

logger = logging.getLogger(__name__)


def get_domain_repository() -> DomainRepository:
    return DomainRepository()


def get_search_repository() -> SearchRepository:
    return SearchRepository()


async def get_availability_resolver() -> AsyncIterator[AvailabilityResolver]:
    """
    Per-request resolver; its HTTP session is closed when the request ends
    """
    resolver = create_availability_resolver()
    try:
        yield resolver
    finally:
        await resolver.close()


def get_domain_service(
    resolver: AvailabilityResolver = Depends(get_availability_resolver),
    domain_repo: DomainRepository = Depends(get_domain_repository),
    search_repo: SearchRepository = Depends(get_search_repository)
) -> DomainService:
    """Domain service wired to the request's resolver and repositories"""
    return DomainService(
        resolver=resolver,
        domain_repo=domain_repo,
        search_repo=search_repo
    )
