"""Output adapters - Infrastructure implementations of output ports"""

from verified_id_verifier.adapter.output.persistence import InMemorySessionStore
from verified_id_verifier.adapter.output.token import ClientCredentialsTokenProvider
from verified_id_verifier.adapter.output.verification import VerifiedIdClient
from verified_id_verifier.adapter.output.qrcode import QrCodeServiceImpl

__all__ = [
    "InMemorySessionStore",
    "ClientCredentialsTokenProvider",
    "VerifiedIdClient",
    "QrCodeServiceImpl",
]
