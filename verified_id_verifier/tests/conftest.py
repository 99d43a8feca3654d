"""Fixtures shared by all test packages"""

from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

import pytest
from returns.result import Failure, Success

from verified_id_verifier.adapter import InMemorySessionStore
from verified_id_verifier.config import create_test_config
from verified_id_verifier.domain import FixedClock, SessionId, VerifierConfig
from verified_id_verifier.port.output import (
    AccessToken,
    TokenAcquisitionError,
    TokenProvider,
    VerificationApiError,
    VerificationClient,
)


@pytest.fixture
def clock() -> FixedClock:
    """Fixed clock at 2024-01-15 12:00:00 UTC"""
    return FixedClock(datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def test_config() -> VerifierConfig:
    return create_test_config()


@pytest.fixture
def sid() -> SessionId:
    return SessionId(value="sess_abc")


class FakeTokenProvider(TokenProvider):
    """Hands out a fixed token, or fails when error is set"""

    def __init__(self, clock: FixedClock, error: Optional[str] = None):
        self.clock = clock
        self.error = error
        self.calls = 0

    async def acquire_token(self):
        self.calls += 1
        if self.error:
            return Failure(TokenAcquisitionError(self.error))
        return Success(AccessToken(token="fake-access-token", expires_at=self.clock.now() + timedelta(hours=1)))


class FakeVerificationClient(VerificationClient):
    """Records presentation requests and answers like the request service"""

    def __init__(self, error: Optional[VerificationApiError] = None):
        self.error = error
        self.requests: List[Dict[str, Any]] = []
        self.tokens: List[str] = []
        self.on_request: Optional[Callable[[Dict[str, Any]], Awaitable[None]]] = None

    async def create_presentation_request(self, payload, access_token):
        self.requests.append(payload)
        self.tokens.append(access_token)
        if self.on_request is not None:
            await self.on_request(payload)
        if self.error is not None:
            return Failure(self.error)
        request_id = f"req-{len(self.requests)}"
        return Success(
            {
                "requestId": request_id,
                "url": f"openid-vc://?request_uri=https://verifiedid.did.msidentity.com/v1.0/presentationRequests/{request_id}",
                "expiry": 1705323600,
            }
        )


@pytest.fixture
def token_provider(clock) -> FakeTokenProvider:
    return FakeTokenProvider(clock)


@pytest.fixture
def verification_client() -> FakeVerificationClient:
    return FakeVerificationClient()


@pytest.fixture
def session_store(clock, test_config) -> InMemorySessionStore:
    return InMemorySessionStore(clock=clock, max_age=timedelta(seconds=test_config.session_max_age_seconds))


def verified_callback_body(state: str) -> Dict[str, Any]:
    return {
        "requestId": "req-1",
        "requestStatus": "presentation_verified",
        "state": state,
        "subject": "did:web:holder.example.com",
        "verifiedCredentialsData": [
            {
                "issuer": "did:web:issuer.example.com",
                "type": ["VerifiableCredential", "VerifiedEmployee"],
                "claims": {"email": "alice@example.com", "name": "Alice Smith"},
            }
        ],
        "receipt": {"id_token": "eyJhbGciOiJSUzI1NiJ9.e30.sig"},
    }


@pytest.fixture
def verified_body():
    """Factory for presentation_verified callback bodies"""
    return verified_callback_body
