"""Value objects for the domain layer"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional


@dataclass(frozen=True)
class SessionId:
    """
    Opaque identifier of the enclosing web session.

    It is issued by the HTTP session layer, never by the core, and is threaded
    through the presentation request as the callback 'state' so that the
    asynchronous callback can be correlated back to the session.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("SessionId cannot be blank")

    def __str__(self) -> str:
        return self.value


class SessionStatus(str, Enum):
    """
    Status of a presentation session.

    Values double as the wire representation returned to polling clients and,
    except for PENDING, match the requestStatus codes sent by the request
    service callback.
    """

    PENDING: Final[str] = "pending"
    RETRIEVED: Final[str] = "request_retrieved"
    VERIFIED: Final[str] = "presentation_verified"
    ERROR: Final[str] = "presentation_error"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Position along the state machine; transitions never decrease it"""
        return _RANKS[self]

    @property
    def is_terminal(self) -> bool:
        return self in (SessionStatus.VERIFIED, SessionStatus.ERROR)

    @staticmethod
    def from_request_status(request_status: Optional[str]) -> Optional["SessionStatus"]:
        """
        Map a callback requestStatus code to the status it drives.

        Returns None for codes that do not drive a transition.
        """
        for status in (SessionStatus.RETRIEVED, SessionStatus.VERIFIED, SessionStatus.ERROR):
            if status.value == request_status:
                return status
        return None


_RANKS = {
    SessionStatus.PENDING: 0,
    SessionStatus.RETRIEVED: 1,
    SessionStatus.VERIFIED: 2,
    SessionStatus.ERROR: 2,
}
