"""Adapter layer - Infrastructure implementations"""

from verified_id_verifier.adapter.output import (
    InMemorySessionStore,
    ClientCredentialsTokenProvider,
    VerifiedIdClient,
    QrCodeServiceImpl,
)

__all__ = [
    "InMemorySessionStore",
    "ClientCredentialsTokenProvider",
    "VerifiedIdClient",
    "QrCodeServiceImpl",
]
