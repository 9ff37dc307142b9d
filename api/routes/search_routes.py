"""
Search History Routes
"""
from fastapi import APIRouter, Depends, Query
from typing import List

from api.dependencies import get_domain_service
from api.schemas.error_schemas import ERROR_RESPONSES
from api.schemas.response_schemas import SearchAuditResponse
from config.constants import DEFAULT_RECENT_SEARCHES, MAX_RECENT_SEARCHES
from services.domain_service import DomainService

router = APIRouter()


@router.get("/recent", response_model=List[SearchAuditResponse], responses=ERROR_RESPONSES)
async def recent_searches(
    limit: int = Query(DEFAULT_RECENT_SEARCHES, ge=1, le=MAX_RECENT_SEARCHES),
    service: DomainService = Depends(get_domain_service)
) -> List[SearchAuditResponse]:
    """Most recent generation requests, newest first"""
    rows = await service.recent_searches(limit)
    return [SearchAuditResponse(**row) for row in rows]
