"""In-memory implementation of SessionStore"""

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Dict, Optional

from returns.result import Failure, Result, Success

from verified_id_verifier.domain import Clock, SessionId, SessionRecord
from verified_id_verifier.port.output import SessionNotFound, SessionStore, Transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebSession:
    """
    A web session and its presentation record slot.

    Attributes:
        session_id: Web session identifier
        created_at: When the session was opened
        expires_at: When the session stops being live
        record: Presentation record, None until a presentation is requested
    """

    session_id: str
    created_at: datetime
    expires_at: datetime
    record: Optional[SessionRecord] = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class InMemorySessionStore(SessionStore):
    """
    In-memory implementation of SessionStore.

    Sessions live in a dictionary keyed by session id. Sessions are immutable
    and every write swaps in a new WebSession, so readers always see either
    the old or the new record and never a mix.

    Writers to the same session id serialize on a per-id asyncio.Lock; writers
    to different ids never contend. A registry lock guards the table of
    per-id locks. Writes to missing ids fail before a lock is registered.
    Expired sessions are invisible to readers and writers and are removed
    by purge_expired().
    """

    def __init__(self, clock: Clock, max_age: timedelta):
        """
        Args:
            clock: Clock for creation and expiry checks
            max_age: Lifetime of a web session, refreshed by open()
        """
        self.clock = clock
        self.max_age = max_age
        self._sessions: Dict[str, WebSession] = {}
        self._key_locks: Dict[str, asyncio.Lock] = {}
        self._registry_lock = asyncio.Lock()

    async def _lock_for(self, key: str) -> asyncio.Lock:
        async with self._registry_lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = asyncio.Lock()
                self._key_locks[key] = lock
            return lock

    async def _forget_lock(self, key: str) -> None:
        async with self._registry_lock:
            self._key_locks.pop(key, None)

    async def _drop_orphan_lock(self, key: str) -> None:
        # Only once the session is gone; an expired one is left for purge_expired()
        async with self._registry_lock:
            if key not in self._sessions:
                self._key_locks.pop(key, None)

    def _live_session(self, key: str) -> Optional[WebSession]:
        session = self._sessions.get(key)
        if session is None or session.is_expired(self.clock.now()):
            return None
        return session

    async def open(self, session_id: SessionId) -> Result[None, Exception]:
        """
        Create the session, or refresh the expiry of a live one.

        An expired session under the same id is replaced by an empty one.

        Returns:
            Success(None) or Failure(exception)
        """
        key = session_id.value
        try:
            async with await self._lock_for(key):
                now = self.clock.now()
                session = self._live_session(key)
                if session is None:
                    self._sessions[key] = WebSession(
                        session_id=key, created_at=now, expires_at=now + self.max_age
                    )
                else:
                    self._sessions[key] = replace(session, expires_at=now + self.max_age)
            return Success(None)
        except Exception as e:
            return Failure(e)

    async def get(self, session_id: SessionId) -> Result[Optional[SessionRecord], SessionNotFound]:
        """
        Read the presentation record of a live session.

        Lock free: the stored WebSession is replaced whole on every write.

        Returns:
            Success(record or None) or Failure(SessionNotFound)
        """
        session = self._live_session(session_id.value)
        if session is None:
            return Failure(SessionNotFound(identifier=session_id.value))
        return Success(session.record)

    async def set(self, session_id: SessionId, record: SessionRecord) -> Result[None, SessionNotFound]:
        """
        Replace the presentation record of a live session.

        Returns:
            Success(None) or Failure(SessionNotFound)
        """
        key = session_id.value
        if self._live_session(key) is None:
            return Failure(SessionNotFound(identifier=key))

        async with await self._lock_for(key):
            session = self._live_session(key)
            if session is not None:
                self._sessions[key] = replace(session, record=record)
        if session is None:
            await self._drop_orphan_lock(key)
            return Failure(SessionNotFound(identifier=key))
        return Success(None)

    async def update(self, session_id: SessionId, transition: Transition) -> Result[SessionRecord, Exception]:
        """
        Apply a transition to the record of a live session under its lock.

        Returns:
            Success(new record), Failure(SessionNotFound), or the transition's Failure
        """
        key = session_id.value
        if self._live_session(key) is None:
            return Failure(SessionNotFound(identifier=key))

        try:
            async with await self._lock_for(key):
                session = self._live_session(key)
                result = None if session is None else transition(session.record)
                if isinstance(result, Success):
                    record = result.unwrap()
                    self._sessions[key] = replace(session, record=record)
            if session is None:
                await self._drop_orphan_lock(key)
                return Failure(SessionNotFound(identifier=key))
            if isinstance(result, Failure):
                return result
            return Success(record)
        except Exception as e:
            return Failure(e)

    async def delete(self, session_id: SessionId) -> Result[None, Exception]:
        """
        Drop a session.

        Returns:
            Success(None) or Failure(SessionNotFound)
        """
        key = session_id.value
        async with await self._lock_for(key):
            removed = self._sessions.pop(key, None)
        await self._forget_lock(key)
        if removed is None:
            return Failure(SessionNotFound(identifier=key))
        return Success(None)

    async def purge_expired(self) -> Result[int, Exception]:
        """
        Drop every expired session.

        Returns:
            Success(number of sessions removed) or Failure(exception)
        """
        try:
            now = self.clock.now()
            candidates = [key for key, session in list(self._sessions.items()) if session.is_expired(now)]

            removed = 0
            for key in candidates:
                async with await self._lock_for(key):
                    session = self._sessions.get(key)
                    # open() may have revived the session since the scan
                    if session is None or not session.is_expired(self.clock.now()):
                        continue
                    del self._sessions[key]
                    removed += 1
                await self._forget_lock(key)

            if removed:
                logger.info("Purged %d expired sessions", removed)
            return Success(removed)
        except Exception as e:
            return Failure(e)

    async def count(self) -> Result[int, Exception]:
        """
        Number of live sessions.

        Returns:
            Success(count) or Failure(exception)
        """
        try:
            now = self.clock.now()
            return Success(sum(1 for session in list(self._sessions.values()) if not session.is_expired(now)))
        except Exception as e:
            return Failure(e)

    async def clear(self) -> Result[None, Exception]:
        """
        Drop all sessions (useful for testing).

        Returns:
            Success(None) or Failure(exception)
        """
        try:
            async with self._registry_lock:
                self._sessions.clear()
                self._key_locks.clear()
            return Success(None)
        except Exception as e:
            return Failure(e)
