"""Input ports - Use case interfaces"""

from verified_id_verifier.port.input.create_presentation_session import (
    CreatePresentationSession,
    CreatePresentationSessionRequest,
    PresentationRequestDescriptor,
    CreatePresentationSessionError,
    AuthError,
    UpstreamError,
)
from verified_id_verifier.port.input.ingest_callback import (
    IngestCallback,
    IngestCallbackRequest,
    IngestCallbackResponse,
    CallbackOutcome,
)
from verified_id_verifier.port.input.get_session_status import (
    GetSessionStatus,
    GetSessionStatusRequest,
)

__all__ = [
    # Create Presentation Session
    "CreatePresentationSession",
    "CreatePresentationSessionRequest",
    "PresentationRequestDescriptor",
    "CreatePresentationSessionError",
    "AuthError",
    "UpstreamError",
    # Ingest Callback
    "IngestCallback",
    "IngestCallbackRequest",
    "IngestCallbackResponse",
    "CallbackOutcome",
    # Get Session Status
    "GetSessionStatus",
    "GetSessionStatusRequest",
]
