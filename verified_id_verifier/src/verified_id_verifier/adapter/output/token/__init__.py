"""Access token adapters"""

from verified_id_verifier.adapter.output.token.client_credentials_token_provider import (
    ClientCredentialsTokenProvider,
)

__all__ = ["ClientCredentialsTokenProvider"]
