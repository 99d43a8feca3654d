"""Verification client port - Interface for the Verified ID request service"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from returns.result import Result


class VerificationApiError(Exception):
    """The request service could not be reached or rejected the request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class VerificationClient(ABC):
    """Client for creating presentation requests at the request service"""

    @abstractmethod
    async def create_presentation_request(
        self, payload: Dict[str, Any], access_token: str
    ) -> Result[Dict[str, Any], VerificationApiError]:
        """
        Create a presentation request.

        Args:
            payload: createPresentationRequest body
            access_token: Bearer token for the request service

        Returns:
            Success(response body, e.g. requestId, url, expiry, qrCode) or
            Failure(VerificationApiError)
        """
        pass
