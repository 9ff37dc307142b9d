"""
Domain API Routes
"""
from decimal import Decimal
from fastapi import APIRouter, Depends, Query
from typing import List, Optional
import logging

from api.dependencies import get_domain_service
from api.schemas.error_schemas import ERROR_RESPONSES
from api.schemas.request_schemas import CheckDomainRequest, DomainFilters, GenerateDomainsRequest
from api.schemas.response_schemas import (
    CheckDomainResponse,
    DomainCandidateResponse,
    DomainListResponse,
    DomainMetricsResponse
)
from config.constants import SortOption
from services.domain_service import DomainService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/generate", response_model=DomainListResponse, responses=ERROR_RESPONSES)
async def generate_domains(
    request: GenerateDomainsRequest,
    service: DomainService = Depends(get_domain_service)
) -> DomainListResponse:
    """Generate, resolve and price domain candidates for a query"""
    result = await service.generate(
        query=request.query,
        filters=request.filters.model_dump(exclude_none=True)
    )
    return DomainListResponse.from_result(result)


@router.post("/check", response_model=CheckDomainResponse, responses=ERROR_RESPONSES)
async def check_domain(
    request: CheckDomainRequest,
    service: DomainService = Depends(get_domain_service)
) -> CheckDomainResponse:
    """Check availability and price of one domain"""
    result = await service.check_domain(request.domain)
    return CheckDomainResponse.from_result(result)


@router.get("/search", response_model=DomainListResponse, responses=ERROR_RESPONSES)
async def search_domains(
    q: Optional[str] = Query(None, max_length=200),
    extensions: Optional[List[str]] = Query(None),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    available_only: bool = Query(False, alias="availableOnly"),
    max_length: Optional[int] = Query(None, alias="maxLength"),
    sort_by: Optional[SortOption] = Query(None, alias="sortBy"),
    service: DomainService = Depends(get_domain_service)
) -> DomainListResponse:
    """Search previously stored candidates"""
    # Accept both ?extensions=.com&extensions=.io and ?extensions=.com,.io
    if extensions:
        extensions = [ext for value in extensions for ext in value.split(",") if ext.strip()]

    filters = DomainFilters(
        extensions=extensions,
        min_price=min_price,
        max_price=max_price,
        available_only=available_only,
        max_length=max_length,
        sort_by=sort_by
    )
    result = await service.search(query=q, filters=filters.model_dump(exclude_none=True))
    return DomainListResponse.from_result(result)


@router.get("/{domain_id}", response_model=DomainCandidateResponse, responses=ERROR_RESPONSES)
async def get_domain(
    domain_id: int,
    service: DomainService = Depends(get_domain_service)
) -> DomainCandidateResponse:
    """Get one stored candidate"""
    row = await service.get_domain(domain_id)
    return DomainCandidateResponse.from_row(row)


@router.get("/{domain_id}/metrics", response_model=DomainMetricsResponse, responses=ERROR_RESPONSES)
async def get_domain_metrics(
    domain_id: int,
    service: DomainService = Depends(get_domain_service)
) -> DomainMetricsResponse:
    """Quality metrics for a stored candidate"""
    metrics = await service.get_domain_metrics(domain_id)
    return DomainMetricsResponse(**metrics)
