"""Output ports - Interfaces for external dependencies"""

from verified_id_verifier.port.output.session_store import (
    SessionStore,
    SessionNotFound,
    Transition,
)
from verified_id_verifier.port.output.token_provider import (
    TokenProvider,
    AccessToken,
    TokenAcquisitionError,
)
from verified_id_verifier.port.output.verification_client import (
    VerificationClient,
    VerificationApiError,
)
from verified_id_verifier.port.output.qrcode_service import (
    QrCodeService,
    QrCodeFormat,
    QrCodeError,
)

__all__ = [
    # Session Store
    "SessionStore",
    "SessionNotFound",
    "Transition",
    # Token Provider
    "TokenProvider",
    "AccessToken",
    "TokenAcquisitionError",
    # Verification Client
    "VerificationClient",
    "VerificationApiError",
    # QR Code Service
    "QrCodeService",
    "QrCodeFormat",
    "QrCodeError",
]
