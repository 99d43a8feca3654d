"""Get session status use case - Answer a polling client"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from verified_id_verifier.domain import StatusView


@dataclass(frozen=True)
class GetSessionStatusRequest:
    """
    Attributes:
        session_id: Raw id from the polling query; may be missing or blank
    """

    session_id: Optional[str]


class GetSessionStatus(ABC):
    """
    Use case: Report the current status of a presentation session.

    Read-only. A missing session is reported as the "unknown" view rather
    than as an error, so clients can keep polling.
    """

    @abstractmethod
    async def execute(self, request: GetSessionStatusRequest) -> StatusView:
        """
        Execute the get session status use case.

        Args:
            request: Get session status request

        Returns:
            Redacted StatusView
        """
        pass
