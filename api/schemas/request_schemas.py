"""
Request Schemas
"""
from decimal import Decimal
from pydantic import Field, field_validator
from typing import Optional, List

from api.schemas.base_schema import CamelModel
from config.constants import MAX_QUERY_LENGTH, SortOption


class DomainFilters(CamelModel):
    """Filters for generation and stored search"""
    extensions: Optional[List[str]] = Field(None, max_length=20)
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)
    available_only: bool = False
    max_length: Optional[int] = None
    target_count: Optional[int] = None
    sort_by: Optional[SortOption] = None

    @field_validator('extensions')
    @classmethod
    def validate_extensions(cls, v):
        if v:
            return [ext.strip().lower() for ext in v if ext.strip()]
        return v


# Domain Generation
class GenerateDomainsRequest(CamelModel):
    """Request for generating domain candidates"""
    query: str = Field(..., max_length=MAX_QUERY_LENGTH, description="Business idea or keywords")
    filters: DomainFilters = Field(default_factory=DomainFilters)


# Domain Checking
class CheckDomainRequest(CamelModel):
    """Request for checking one domain"""
    domain: str = Field(..., min_length=1, max_length=300)

    @field_validator('domain')
    @classmethod
    def strip_domain(cls, v):
        return v.strip()
