"""CreatePresentationSession use case implementation"""

import logging

from returns.result import Failure, Result, Success

from verified_id_verifier.domain import (
    Clock,
    VerifierConfig,
    build_presentation_request,
    create_pending,
)
from verified_id_verifier.port.input import (
    AuthError,
    CreatePresentationSession,
    CreatePresentationSessionError,
    CreatePresentationSessionRequest,
    PresentationRequestDescriptor,
    UpstreamError,
)
from verified_id_verifier.port.output import (
    SessionStore,
    TokenProvider,
    VerificationClient,
)

logger = logging.getLogger(__name__)


class CreatePresentationSessionImpl(CreatePresentationSession):
    """
    Implementation of CreatePresentationSession use case.

    Orchestrates the creation of a presentation request for a web session.
    """

    def __init__(
        self,
        store: SessionStore,
        token_provider: TokenProvider,
        verification_client: VerificationClient,
        config: VerifierConfig,
        clock: Clock,
    ):
        self.store = store
        self.token_provider = token_provider
        self.verification_client = verification_client
        self.config = config
        self.clock = clock

    async def execute(
        self, request: CreatePresentationSessionRequest
    ) -> Result[PresentationRequestDescriptor, CreatePresentationSessionError]:
        """
        Execute the create presentation session use case.

        Flow:
        1. Reset the session's record to PENDING (skipped if there is no live session)
        2. Acquire an access token, AuthError on failure
        3. Build the presentation request payload
        4. Call the request service, UpstreamError on failure
        5. Return the response with the session id attached
        """
        session_id = request.session_id

        # The record is reset before any upstream call, whatever its outcome
        save_result = await self.store.set(session_id, create_pending(session_id, self.clock))
        if isinstance(save_result, Failure):
            logger.warning(
                "Session %s not found, presentation status not initialized: %s",
                session_id,
                save_result.failure(),
            )

        token_result = await self.token_provider.acquire_token()
        if isinstance(token_result, Failure):
            logger.error("Failed to get access token: %s", token_result.failure())
            return Failure(AuthError(f"Could not acquire credentials: {token_result.failure()}"))

        payload = build_presentation_request(self.config, session_id)

        logger.info("Invoking presentation request API for session %s", session_id)
        api_result = await self.verification_client.create_presentation_request(
            payload, token_result.unwrap().token
        )
        if isinstance(api_result, Failure):
            error = api_result.failure()
            logger.error("Presentation request API failed for session %s: %s", session_id, error)
            return Failure(UpstreamError(str(error), status_code=error.status_code))

        return Success(PresentationRequestDescriptor(session_id=session_id, response=api_result.unwrap()))
