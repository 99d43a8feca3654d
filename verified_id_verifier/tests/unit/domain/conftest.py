"""Common test fixtures for domain tests"""

from datetime import datetime, timezone

import pytest

from verified_id_verifier.domain import FixedClock, SessionId


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Fixed clock at 2024-01-15 12:00:00 UTC"""
    return FixedClock(datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def session_id() -> SessionId:
    """Sample web session ID"""
    return SessionId(value="sess_123456")


@pytest.fixture
def verified_callback() -> dict:
    """presentation_verified callback as sent by the request service"""
    return {
        "requestId": "799f23ea-5241-45af-99ad-cf8e5018814e",
        "requestStatus": "presentation_verified",
        "state": "sess_123456",
        "subject": "did:web:holder.example.com",
        "verifiedCredentialsData": [
            {
                "issuer": "did:web:issuer.example.com",
                "type": ["VerifiableCredential", "VerifiedEmployee"],
                "claims": {"email": "alice@example.com", "name": "Alice Smith", "jobTitle": "Engineer"},
                "credentialState": {"revocationStatus": "VALID"},
            }
        ],
        "receipt": {"id_token": "eyJ0eXAiOiJKV1QiLCJhbGciOiJSUzI1NiJ9.e30.sig"},
    }
