"""Presentation session state machine

A presentation session tracks one request -> scan -> verify -> poll cycle for a
web session. It moves through these states:

1. PENDING - presentation request created, waiting for the wallet
2. RETRIEVED - wallet fetched the request (request_retrieved callback)
3. VERIFIED - wallet presented and the request service verified it (terminal)
4. ERROR - request service reported a failed presentation (terminal)

Records are immutable. Every transition builds a new SessionRecord which the
session store swaps in as a whole, so a reader never sees a VERIFIED record
without its payload. Status never moves backwards; re-delivery of the status
a record is already in rewrites it.
"""

import copy
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from returns.result import Failure, Result, Success

from verified_id_verifier.domain.clock import Clock
from verified_id_verifier.domain.value_objects import SessionId, SessionStatus

PENDING_MESSAGE = "Waiting for QR code to be scanned"
RETRIEVED_MESSAGE = "QR Code is scanned. Waiting for validation..."
VERIFIED_MESSAGE = "Presentation received"
ERROR_MESSAGE = "Presentation failed"


# ======================
# Record
# ======================


@dataclass(frozen=True)
class SessionRecord:
    """
    Status of the presentation session attached to one web session.

    Attributes:
        session_id: Web session the record belongs to
        status: Current state
        message: Human readable description of the state
        updated_at: When the record was written
        payload: verifiedCredentialsData from the callback (VERIFIED only)
        subject: DID of the holder (VERIFIED only)
        email: 'email' claim of the first presented credential (VERIFIED only)
        name: 'name' claim of the first presented credential (VERIFIED only)
        raw_callback: Full callback body, kept for diagnostics (VERIFIED only)
        error: Error object reported by the request service (ERROR only)
    """

    session_id: SessionId
    status: SessionStatus
    message: str
    updated_at: datetime
    payload: Optional[List[Any]] = None
    subject: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    raw_callback: Optional[Dict[str, Any]] = None
    error: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise ValueError("message cannot be blank")
        if self.status is not SessionStatus.VERIFIED:
            verified_only = {
                "payload": self.payload,
                "subject": self.subject,
                "email": self.email,
                "name": self.name,
                "raw_callback": self.raw_callback,
            }
            present = sorted(field for field, value in verified_only.items() if value is not None)
            if present:
                raise ValueError(f"{', '.join(present)} only allowed on a {SessionStatus.VERIFIED} record")
        if self.status is not SessionStatus.ERROR and self.error is not None:
            raise ValueError(f"error only allowed on a {SessionStatus.ERROR} record")


@dataclass(frozen=True)
class DerivedClaims:
    """Claims lifted out of the first presented credential for display"""

    email: Optional[str] = None
    name: Optional[str] = None


# ======================
# Error Types
# ======================


@dataclass(frozen=True)
class PresentationSessionError:
    """Base error type for presentation session operations"""

    message: str = ""


@dataclass(frozen=True)
class InvalidStateTransition(PresentationSessionError):
    """Transition would move the session backwards or out of a terminal state"""

    current_state: str = ""
    attempted_state: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "message",
            f"Cannot transition from {self.current_state} to {self.attempted_state}",
        )


@dataclass(frozen=True)
class ClaimExtractionError(PresentationSessionError):
    """verifiedCredentialsData did not carry the claims needed for display"""

    reason: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "message", f"Cannot extract claims: {self.reason}")


# ======================
# Factory Functions
# ======================


def create_pending(session_id: SessionId, clock: Clock) -> SessionRecord:
    """
    Initial record written when a presentation request is created.

    Creating again for the same session resets it to PENDING.
    """
    return SessionRecord(
        session_id=session_id,
        status=SessionStatus.PENDING,
        message=PENDING_MESSAGE,
        updated_at=clock.now(),
    )


# ======================
# State Transition Functions
# ======================


def mark_as_retrieved(
    current: Optional[SessionRecord],
    session_id: SessionId,
    clock: Clock,
) -> Result[SessionRecord, PresentationSessionError]:
    """
    Transition to RETRIEVED after the wallet fetched the request.

    Any payload from an earlier record is dropped.

    Args:
        current: Record currently stored, None if never initialized
        session_id: Session the record belongs to
        clock: Clock for the update timestamp

    Returns:
        Success with the new record, or Failure(InvalidStateTransition)
    """
    rejected = _check_transition(current, SessionStatus.RETRIEVED)
    if rejected is not None:
        return Failure(rejected)

    return Success(
        SessionRecord(
            session_id=session_id,
            status=SessionStatus.RETRIEVED,
            message=RETRIEVED_MESSAGE,
            updated_at=clock.now(),
        )
    )


def mark_as_verified(
    current: Optional[SessionRecord],
    session_id: SessionId,
    callback: Mapping[str, Any],
    claims: DerivedClaims,
    clock: Clock,
) -> Result[SessionRecord, PresentationSessionError]:
    """
    Transition to VERIFIED with the verified presentation.

    Payload, subject, derived claims and the raw callback are set together
    with the status in a single new record.

    Args:
        current: Record currently stored, None if never initialized
        session_id: Session the record belongs to
        callback: presentation_verified callback body
        claims: Claims derived from the first credential (may be empty)
        clock: Clock for the update timestamp

    Returns:
        Success with the new record, or Failure(InvalidStateTransition)
    """
    rejected = _check_transition(current, SessionStatus.VERIFIED)
    if rejected is not None:
        return Failure(rejected)

    raw_callback = copy.deepcopy(dict(callback))
    payload = raw_callback.get("verifiedCredentialsData")
    subject = raw_callback.get("subject")

    return Success(
        SessionRecord(
            session_id=session_id,
            status=SessionStatus.VERIFIED,
            message=VERIFIED_MESSAGE,
            updated_at=clock.now(),
            payload=copy.deepcopy(payload) if isinstance(payload, list) else None,
            subject=str(subject) if subject is not None else None,
            email=claims.email,
            name=claims.name,
            raw_callback=raw_callback,
        )
    )


def mark_as_failed(
    current: Optional[SessionRecord],
    session_id: SessionId,
    error: Optional[Mapping[str, Any]],
    clock: Clock,
) -> Result[SessionRecord, PresentationSessionError]:
    """
    Transition to ERROR when the request service reports a failed presentation.

    Args:
        current: Record currently stored, None if never initialized
        session_id: Session the record belongs to
        error: 'error' object of the callback ({code, message}), if any
        clock: Clock for the update timestamp

    Returns:
        Success with the new record, or Failure(InvalidStateTransition)
    """
    rejected = _check_transition(current, SessionStatus.ERROR)
    if rejected is not None:
        return Failure(rejected)

    error_dict = copy.deepcopy(dict(error)) if error else None
    message = ERROR_MESSAGE
    if error_dict and error_dict.get("message"):
        message = f"{ERROR_MESSAGE}: {error_dict['message']}"

    return Success(
        SessionRecord(
            session_id=session_id,
            status=SessionStatus.ERROR,
            message=message,
            updated_at=clock.now(),
            error=error_dict,
        )
    )


def _check_transition(
    current: Optional[SessionRecord], target: SessionStatus
) -> Optional[InvalidStateTransition]:
    if current is None or current.status is target:
        return None
    if current.status.is_terminal or target.rank < current.status.rank:
        return InvalidStateTransition(
            current_state=str(current.status),
            attempted_state=str(target),
        )
    return None


# ======================
# Claim Extraction
# ======================


def extract_claims(verified_credentials_data: Any) -> Result[DerivedClaims, ClaimExtractionError]:
    """
    Pull the display claims (email, name) from the first presented credential.

    Fails when there is no first credential or it carries no claims object.
    Individual claims that are missing come back as None.
    """
    if not isinstance(verified_credentials_data, list) or not verified_credentials_data:
        return Failure(ClaimExtractionError(reason="verifiedCredentialsData is missing or empty"))

    first = verified_credentials_data[0]
    claims = first.get("claims") if isinstance(first, dict) else None
    if not isinstance(claims, dict):
        return Failure(ClaimExtractionError(reason="first credential has no claims"))

    return Success(
        DerivedClaims(
            email=_claim_as_str(claims.get("email")),
            name=_claim_as_str(claims.get("name")),
        )
    )


def _claim_as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
