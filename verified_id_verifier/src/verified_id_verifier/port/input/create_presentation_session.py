"""Create presentation session use case - Start a presentation request for a web session"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict

from returns.result import Result

from verified_id_verifier.domain import SessionId


@dataclass(frozen=True)
class CreatePresentationSessionRequest:
    """
    Request to start a presentation session.

    Attributes:
        session_id: Web session the presentation is tracked under
    """

    session_id: SessionId


@dataclass(frozen=True)
class PresentationRequestDescriptor:
    """
    What the holder-facing page needs to show the request.

    Attributes:
        session_id: Web session id, returned as 'id' so the page can poll with it
        response: Request service response (requestId, url, expiry, qrCode...), passed through untouched
    """

    session_id: SessionId
    response: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Request service response with the session id injected as 'id'"""
        return {**self.response, "id": self.session_id.value}


class CreatePresentationSessionError(Exception):
    """Error while starting a presentation session"""

    pass


class AuthError(CreatePresentationSessionError):
    """No access token could be obtained for the request service"""

    pass


class UpstreamError(CreatePresentationSessionError):
    """The request service was unreachable or rejected the request"""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class CreatePresentationSession(ABC):
    """
    Use case: Start a presentation session.

    Flow:
    1. Reset the session's presentation record to PENDING
    2. Obtain an access token
    3. Build the presentation request with the session id as callback state
    4. Create the request at the request service
    5. Return the service's response with the session id attached
    """

    @abstractmethod
    async def execute(
        self, request: CreatePresentationSessionRequest
    ) -> Result[PresentationRequestDescriptor, CreatePresentationSessionError]:
        """
        Execute the create presentation session use case.

        Args:
            request: Create presentation session request

        Returns:
            Success(PresentationRequestDescriptor) or
            Failure(AuthError | UpstreamError)
        """
        pass
