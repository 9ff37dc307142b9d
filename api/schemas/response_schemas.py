"""
Response Schemas
"""
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

from api.schemas.base_schema import CamelModel


class RegistrarQuoteResponse(CamelModel):
    """One registrar's offer"""
    registrar_name: str
    price: Decimal
    affiliate_link: str
    logo_id: str
    has_affiliate: bool


class DomainCandidateResponse(CamelModel):
    """Stored domain candidate"""
    id: Optional[int] = None
    name: str
    extension: str
    price: Decimal
    is_available: bool
    is_premium: bool = False
    registrar: Optional[str] = None
    best_affiliate_link: Optional[str] = None
    registrar_quotes: Dict[str, RegistrarQuoteResponse] = Field(default_factory=dict)
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    length: int
    availability_source: Optional[str] = None
    checked_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "DomainCandidateResponse":
        """Build from a domains table row"""
        return cls(
            id=row.get("id"),
            name=row["name"],
            extension=row["extension"],
            price=row["price"],
            is_available=row.get("is_available", False),
            is_premium=row.get("is_premium", False),
            registrar=row.get("registrar"),
            best_affiliate_link=row.get("affiliate_link"),
            registrar_quotes=row.get("registrar_pricing") or {},
            description=row.get("description"),
            tags=row.get("tags") or [],
            length=row.get("length") or len(row["name"]),
            availability_source=row.get("availability_source"),
            checked_at=row.get("checked_at")
        )


class DomainListResponse(CamelModel):
    """Candidate list with total count"""
    domains: List[DomainCandidateResponse]
    total: int

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "DomainListResponse":
        return cls(
            domains=[DomainCandidateResponse.from_row(row) for row in result["domains"]],
            total=result["total"]
        )


class CheckDomainResponse(CamelModel):
    """Single-domain availability check"""
    domain: str
    is_available: bool
    registrar: str
    price: Optional[Decimal] = None
    premium: bool = False
    verified: bool = False
    record: Optional[DomainCandidateResponse] = None

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "CheckDomainResponse":
        record = result.get("record")
        return cls(
            domain=result["domain"],
            is_available=result["is_available"],
            registrar=result["registrar"],
            price=result.get("price"),
            premium=result.get("premium", False),
            verified=result.get("verified", False),
            record=DomainCandidateResponse.from_row(record) if record else None
        )


class SearchAuditResponse(CamelModel):
    """Stored generation request"""
    id: Optional[int] = None
    query: str
    filters: Dict[str, Any] = Field(default_factory=dict)
    results_count: int
    created_at: Optional[datetime] = None


class DomainMetricsResponse(CamelModel):
    """Quality scores for a stored domain"""
    domain: str
    length: int
    age: str
    backlinks: str
    seo_score: int = Field(ge=0, le=100)
    brandability: int = Field(ge=0, le=100)
    memorability: int = Field(ge=0, le=100)
    is_typable: bool
    has_hyphens: bool
    has_numbers: bool
    category: str


# Health Check
class HealthStatus(BaseModel):
    """Service health status"""
    service: str
    status: str  # healthy, degraded, unhealthy
    latency_ms: Optional[float] = None
    details: Optional[Dict[str, Any]] = None


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str  # healthy, degraded, unhealthy
    version: str
    environment: str
    services: List[HealthStatus]
    uptime_seconds: float
    timestamp: datetime = Field(default_factory=datetime.now)
