"""Domain layer - presentation session state machine, value objects and configuration"""

from verified_id_verifier.domain.clock import Clock, FixedClock, SystemClock
from verified_id_verifier.domain.presentation_request import build_presentation_request
from verified_id_verifier.domain.presentation_session import (
    ERROR_MESSAGE,
    PENDING_MESSAGE,
    RETRIEVED_MESSAGE,
    VERIFIED_MESSAGE,
    ClaimExtractionError,
    DerivedClaims,
    InvalidStateTransition,
    PresentationSessionError,
    SessionRecord,
    create_pending,
    extract_claims,
    mark_as_failed,
    mark_as_retrieved,
    mark_as_verified,
)
from verified_id_verifier.domain.status_view import (
    UNKNOWN_MESSAGE,
    UNKNOWN_STATUS,
    StatusView,
    to_status_view,
    unknown_status_view,
)
from verified_id_verifier.domain.value_objects import SessionId, SessionStatus
from verified_id_verifier.domain.verifier_config import (
    CALLBACK_API_KEY_HEADER,
    CALLBACK_PATH,
    DEFAULT_REQUEST_ENDPOINT,
    DEFAULT_SCOPE,
    TokenProviderConfig,
    VerifierConfig,
    default_presentation_template,
)

__all__ = [
    # Clock
    "Clock",
    "SystemClock",
    "FixedClock",
    # Value objects
    "SessionId",
    "SessionStatus",
    # Presentation session
    "SessionRecord",
    "DerivedClaims",
    "PresentationSessionError",
    "InvalidStateTransition",
    "ClaimExtractionError",
    "PENDING_MESSAGE",
    "RETRIEVED_MESSAGE",
    "VERIFIED_MESSAGE",
    "ERROR_MESSAGE",
    "create_pending",
    "mark_as_retrieved",
    "mark_as_verified",
    "mark_as_failed",
    "extract_claims",
    # Status view
    "StatusView",
    "UNKNOWN_STATUS",
    "UNKNOWN_MESSAGE",
    "to_status_view",
    "unknown_status_view",
    # Presentation request
    "build_presentation_request",
    # Configuration
    "VerifierConfig",
    "TokenProviderConfig",
    "default_presentation_template",
    "CALLBACK_PATH",
    "CALLBACK_API_KEY_HEADER",
    "DEFAULT_REQUEST_ENDPOINT",
    "DEFAULT_SCOPE",
]
