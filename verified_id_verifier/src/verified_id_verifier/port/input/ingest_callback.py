"""Ingest callback use case - Apply a request service status callback to a session"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from verified_id_verifier.domain import SessionStatus


class CallbackOutcome(str, Enum):
    """What happened to a callback. Every outcome is acknowledged to the sender."""

    APPLIED = "applied"
    UNKNOWN_SESSION = "unknown_session"
    UNRECOGNIZED_STATUS = "unrecognized_status"
    STALE = "stale"
    UNAUTHORIZED = "unauthorized"
    MALFORMED = "malformed"
    FAILED = "failed"


@dataclass(frozen=True)
class IngestCallbackRequest:
    """
    Callback as received.

    Attributes:
        body: Decoded JSON body (anything, it is validated by the use case)
        api_key: Value of the api-key header, if sent
    """

    body: Any
    api_key: Optional[str] = None


@dataclass(frozen=True)
class IngestCallbackResponse:
    """
    Result of ingesting a callback.

    Attributes:
        outcome: What was done with the callback
        session_id: Correlation id from the callback, if any
        status: Session status after ingestion, when a record was written
    """

    outcome: CallbackOutcome
    session_id: Optional[str] = None
    status: Optional[SessionStatus] = None


class IngestCallback(ABC):
    """
    Use case: Ingest a callback from the request service.

    Flow:
    1. Check the shared secret and the correlation id
    2. Map requestStatus to the target state
    3. Atomically apply the transition to the session's record
    4. Report the outcome (never a failure: the sender only needs a 2xx)
    """

    @abstractmethod
    async def execute(self, request: IngestCallbackRequest) -> IngestCallbackResponse:
        """
        Execute the ingest callback use case.

        Args:
            request: Ingest callback request

        Returns:
            IngestCallbackResponse describing the outcome
        """
        pass
