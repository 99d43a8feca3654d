"""Request service adapters"""

from verified_id_verifier.adapter.output.verification.verified_id_client import VerifiedIdClient

__all__ = ["VerifiedIdClient"]
