"""IngestCallback use case implementation"""

import logging
import secrets
from typing import Any, Mapping, Optional

from returns.result import Failure

from verified_id_verifier.domain import (
    Clock,
    DerivedClaims,
    InvalidStateTransition,
    PresentationSessionError,
    SessionId,
    SessionStatus,
    VerifierConfig,
    extract_claims,
    mark_as_failed,
    mark_as_retrieved,
    mark_as_verified,
)
from verified_id_verifier.port.input import (
    CallbackOutcome,
    IngestCallback,
    IngestCallbackRequest,
    IngestCallbackResponse,
)
from verified_id_verifier.port.output import SessionNotFound, SessionStore

logger = logging.getLogger(__name__)


class IngestCallbackImpl(IngestCallback):
    """
    Implementation of IngestCallback use case.

    Turns request service callbacks into session state transitions. Nothing
    that goes wrong here is reported to the sender; it is logged and the
    callback is acknowledged anyway.
    """

    def __init__(self, store: SessionStore, config: VerifierConfig, clock: Clock):
        self.store = store
        self.config = config
        self.clock = clock

    async def execute(self, request: IngestCallbackRequest) -> IngestCallbackResponse:
        """
        Execute the ingest callback use case.

        Flow:
        1. Check the api-key header against the configured shared secret
        2. Read requestStatus and the correlation id (state)
        3. Map requestStatus to a target state, ignore unrecognized ones
        4. Apply the transition atomically through the session store
        """
        if not self._is_authorized(request.api_key):
            logger.warning("Callback rejected: api-key header missing or wrong")
            return IngestCallbackResponse(outcome=CallbackOutcome.UNAUTHORIZED)

        body = request.body
        if not isinstance(body, Mapping):
            logger.warning("Callback ignored: body is not a JSON object")
            return IngestCallbackResponse(outcome=CallbackOutcome.MALFORMED)

        request_status = body.get("requestStatus")
        state = body.get("state")
        if not isinstance(state, str) or not state.strip():
            logger.warning("Callback %s ignored: no state", request_status)
            return IngestCallbackResponse(outcome=CallbackOutcome.MALFORMED)

        session_id = SessionId(value=state)
        logger.info("callback: %s for session %s", request_status, session_id)

        target = SessionStatus.from_request_status(request_status)
        if target is None:
            logger.info("Callback status %r is not tracked, session %s unchanged", request_status, session_id)
            return IngestCallbackResponse(outcome=CallbackOutcome.UNRECOGNIZED_STATUS, session_id=state)

        result = await self.store.update(session_id, self._transition_for(target, session_id, body))

        if isinstance(result, Failure):
            return self._ignored(result.failure(), session_id)

        record = result.unwrap()
        logger.info("Session %s is now %s", session_id, record.status)
        return IngestCallbackResponse(outcome=CallbackOutcome.APPLIED, session_id=state, status=record.status)

    def _is_authorized(self, api_key: Optional[str]) -> bool:
        expected = self.config.callback_api_key
        if not expected:
            return True
        return api_key is not None and secrets.compare_digest(api_key.encode(), expected.encode())

    def _transition_for(self, target: SessionStatus, session_id: SessionId, body: Mapping[str, Any]):
        if target is SessionStatus.RETRIEVED:
            return lambda current: mark_as_retrieved(current, session_id, self.clock)

        if target is SessionStatus.VERIFIED:
            claims = self._derive_claims(session_id, body)
            return lambda current: mark_as_verified(current, session_id, body, claims, self.clock)

        error = body.get("error")
        return lambda current: mark_as_failed(
            current, session_id, error if isinstance(error, Mapping) else None, self.clock
        )

    def _derive_claims(self, session_id: SessionId, body: Mapping[str, Any]) -> DerivedClaims:
        """Claims for display; a malformed payload still verifies, just without them"""
        claims_result = extract_claims(body.get("verifiedCredentialsData"))
        if isinstance(claims_result, Failure):
            logger.warning(
                "Session %s verified without display claims: %s", session_id, claims_result.failure().message
            )
        return claims_result.value_or(DerivedClaims())

    def _ignored(self, error: Any, session_id: SessionId) -> IngestCallbackResponse:
        if isinstance(error, SessionNotFound):
            logger.info("Callback for unknown session %s ignored", session_id)
            return IngestCallbackResponse(outcome=CallbackOutcome.UNKNOWN_SESSION, session_id=session_id.value)

        if isinstance(error, InvalidStateTransition):
            logger.info("Stale callback for session %s ignored: %s", session_id, error.message)
            return IngestCallbackResponse(outcome=CallbackOutcome.STALE, session_id=session_id.value)

        if isinstance(error, PresentationSessionError):
            logger.error("Callback for session %s not applied: %s", session_id, error.message)
        else:
            logger.error("Callback for session %s not applied: %s", session_id, error)
        return IngestCallbackResponse(outcome=CallbackOutcome.FAILED, session_id=session_id.value)
