"""
API Schemas Package
"""

# Base schemas
from api.schemas.base_schema import CamelModel

# Request schemas
from api.schemas.request_schemas import (
    DomainFilters,
    GenerateDomainsRequest,
    CheckDomainRequest
)

# Response schemas
from api.schemas.response_schemas import (
    RegistrarQuoteResponse,
    DomainCandidateResponse,
    DomainListResponse,
    CheckDomainResponse,
    SearchAuditResponse,
    DomainMetricsResponse,
    HealthStatus,
    HealthCheckResponse
)

# Error schemas
from api.schemas.error_schemas import (
    ErrorBody,
    ErrorResponse,
    ERROR_RESPONSES
)

__all__ = [
    # Base
    "CamelModel",

    # Requests
    "DomainFilters",
    "GenerateDomainsRequest",
    "CheckDomainRequest",

    # Responses
    "RegistrarQuoteResponse",
    "DomainCandidateResponse",
    "DomainListResponse",
    "CheckDomainResponse",
    "SearchAuditResponse",
    "DomainMetricsResponse",
    "HealthStatus",
    "HealthCheckResponse",

    # Errors
    "ErrorBody",
    "ErrorResponse",
    "ERROR_RESPONSES"
]
