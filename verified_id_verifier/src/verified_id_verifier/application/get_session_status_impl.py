"""GetSessionStatus use case implementation"""

import logging

from returns.result import Failure

from verified_id_verifier.domain import (
    SessionId,
    StatusView,
    to_status_view,
    unknown_status_view,
)
from verified_id_verifier.port.input import GetSessionStatus, GetSessionStatusRequest
from verified_id_verifier.port.output import SessionStore

logger = logging.getLogger(__name__)


class GetSessionStatusImpl(GetSessionStatus):
    """
    Implementation of GetSessionStatus use case.

    Never fails: anything that cannot be resolved to a record is reported as
    the unknown view.
    """

    def __init__(self, store: SessionStore):
        self.store = store

    async def execute(self, request: GetSessionStatusRequest) -> StatusView:
        """
        Execute the get session status use case.

        Flow:
        1. Validate the id, blank ids are unknown
        2. Read the record, missing session or record is unknown
        3. Return the redacted view
        """
        if not request.session_id or not request.session_id.strip():
            return unknown_status_view()

        session_id = SessionId(value=request.session_id)
        get_result = await self.store.get(session_id)
        if isinstance(get_result, Failure):
            logger.debug("No session %s: %s", session_id, get_result.failure())
            return unknown_status_view()

        record = get_result.unwrap()
        if record is None:
            return unknown_status_view()

        logger.debug("status: %s, message: %s", record.status, record.message)
        return to_status_view(record)
