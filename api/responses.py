"""
Shared API response models.
Documents the error envelope produced by the exception handlers.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field
from datetime import datetime


class ErrorDetail(BaseModel):
    """Detailed error information"""

    code: str = Field(..., description="Error tag, e.g. missing_prompt or gen_failed")
    message: str = Field(..., description="Error message")
    details: Optional[Any] = Field(None, description="Upstream body or validation errors")


class ErrorResponse(BaseModel):
    """Standardized error response"""

    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Error timestamp"
    )


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Missing or rejected access token"},
    500: {"model": ErrorResponse, "description": "Configuration or upstream failure"},
}
