"""
Error Response Schemas
"""
from pydantic import BaseModel
from typing import Optional, Dict, Any


class ErrorBody(BaseModel):
    """Body of every error response"""
    type: str
    message: str
    request_id: Optional[str] = None
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Error envelope rendered by the exception handlers"""
    error: ErrorBody


# Documented on routes via `responses=`
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid query or filters"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    503: {"model": ErrorResponse, "description": "Result store unavailable"}
}
