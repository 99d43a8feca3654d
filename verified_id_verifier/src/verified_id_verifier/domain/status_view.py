"""Status view returned to polling clients

The view is a separate type from SessionRecord with no slot for the raw
callback, so the redaction cannot be forgotten by a caller.
"""

import copy
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from verified_id_verifier.domain.presentation_session import SessionRecord
from verified_id_verifier.domain.value_objects import SessionStatus

UNKNOWN_STATUS = "unknown"
UNKNOWN_MESSAGE = "No presentation request found for this session"


@dataclass(frozen=True)
class StatusView:
    """
    Redacted status of a presentation session.

    Attributes:
        status: SessionStatus value, or "unknown" when there is no record
        message: Human readable description
        payload: verifiedCredentialsData (VERIFIED only)
        subject: Holder DID (VERIFIED only)
        email: Derived email claim (VERIFIED only)
        name: Derived name claim (VERIFIED only)
        error: Error reported by the request service (ERROR only)
    """

    status: str
    message: str
    payload: Optional[List[Any]] = None
    subject: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def is_unknown(self) -> bool:
        return self.status == UNKNOWN_STATUS

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, leaving out fields that are not set"""
        return {key: value for key, value in asdict(self).items() if value is not None}


def unknown_status_view() -> StatusView:
    """View for a session that has no presentation record (yet, or any more)"""
    return StatusView(status=UNKNOWN_STATUS, message=UNKNOWN_MESSAGE)


def to_status_view(record: SessionRecord) -> StatusView:
    """
    Build the client facing view of a record.

    VERIFIED exposes the payload, subject and derived claims but never the raw
    callback. ERROR exposes the upstream error. Other states expose only
    status and message. Payload and error are copies; the record keeps its own.
    """
    if record.status is SessionStatus.VERIFIED:
        return StatusView(
            status=str(record.status),
            message=record.message,
            payload=copy.deepcopy(record.payload),
            subject=record.subject,
            email=record.email,
            name=record.name,
        )
    if record.status is SessionStatus.ERROR:
        return StatusView(status=str(record.status), message=record.message, error=copy.deepcopy(record.error))
    return StatusView(status=str(record.status), message=record.message)
