"""API models - Request and response DTOs"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CallbackRequestModel(BaseModel):
    """
    Status callback from the request service.

    Only documents the shape for OpenAPI; the endpoint reads the raw body so
    that malformed callbacks can still be acknowledged.
    """

    model_config = ConfigDict(extra="allow")

    requestId: Optional[str] = Field(None, description="Request service id of the presentation request")
    requestStatus: str = Field(..., description="request_retrieved, presentation_verified or presentation_error")
    state: str = Field(..., description="Correlation id (web session id)")
    subject: Optional[str] = Field(None, description="DID of the holder")
    verifiedCredentialsData: Optional[List[Any]] = Field(None, description="Verified credentials")
    receipt: Optional[Dict[str, Any]] = Field(None, description="Optional receipt")
    error: Optional[Dict[str, Any]] = Field(None, description="Error object for presentation_error")


class StatusResponseModel(BaseModel):
    """Status of a presentation session as seen by a polling client"""

    status: str = Field(..., description="pending, request_retrieved, presentation_verified, presentation_error or unknown")
    message: str = Field(..., description="Human-readable status description")
    payload: Optional[List[Any]] = Field(None, description="Verified credentials as sent by the request service (verified only)")
    subject: Optional[str] = Field(None, description="Holder DID (verified only)")
    email: Optional[str] = Field(None, description="Email claim (verified only)")
    name: Optional[str] = Field(None, description="Name claim (verified only)")
    error: Optional[Dict[str, Any]] = Field(None, description="Request service error (failed only)")


class ErrorResponseModel(BaseModel):
    """Standard error response"""

    error: str = Field(..., description="Error code")
    error_description: str = Field(..., description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
