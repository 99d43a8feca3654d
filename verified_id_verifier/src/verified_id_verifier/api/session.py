"""Cookie based web sessions

The web session layer owns session ids: it issues them, keeps them in a
cookie and opens the matching session in the session store. The presentation
core only ever receives the id.
"""

import logging
import secrets

from fastapi import Request
from fastapi.responses import Response
from returns.result import Failure

from verified_id_verifier.domain import SessionId, VerifierConfig
from verified_id_verifier.port.output import SessionStore

logger = logging.getLogger(__name__)


def new_session_id() -> SessionId:
    """Generate an unguessable session id"""
    return SessionId(value=secrets.token_urlsafe(32))


async def resolve_web_session(request: Request, store: SessionStore, config: VerifierConfig) -> SessionId:
    """
    Session id of the caller, opening a session in the store.

    The cookie value is only reused while it names a live session, so a
    client cannot pick its own id. The session's expiry is refreshed.
    """
    session_id = None
    raw = request.cookies.get(config.session_cookie_name)
    if raw:
        candidate = SessionId(value=raw)
        if not isinstance(await store.get(candidate), Failure):
            session_id = candidate

    if session_id is None:
        session_id = new_session_id()
        logger.info("Opening new web session")

    open_result = await store.open(session_id)
    if isinstance(open_result, Failure):
        logger.error("Failed to open web session: %s", open_result.failure())

    return session_id


def attach_session_cookie(response: Response, session_id: SessionId, config: VerifierConfig) -> None:
    """Set the session cookie on an outgoing response"""
    response.set_cookie(
        key=config.session_cookie_name,
        value=session_id.value,
        max_age=config.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=config.public_url.startswith("https://"),
    )
