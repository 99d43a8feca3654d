"""Application layer - Use case implementations

This layer contains the business logic that orchestrates domain objects
and interacts with external services through ports.
"""

from verified_id_verifier.application.create_presentation_session_impl import CreatePresentationSessionImpl
from verified_id_verifier.application.ingest_callback_impl import IngestCallbackImpl
from verified_id_verifier.application.get_session_status_impl import GetSessionStatusImpl

__all__ = [
    "CreatePresentationSessionImpl",
    "IngestCallbackImpl",
    "GetSessionStatusImpl",
]
