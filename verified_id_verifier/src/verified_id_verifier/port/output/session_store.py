"""Session store port - Interface for the web session store holding presentation records"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from returns.result import Result

from verified_id_verifier.domain import PresentationSessionError, SessionId, SessionRecord

Transition = Callable[[Optional[SessionRecord]], Result[SessionRecord, PresentationSessionError]]


class SessionNotFound(Exception):
    """Raised when there is no live web session for an id"""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Session not found: {identifier}")


class SessionStore(ABC):
    """
    Store of web sessions, each with one slot for a presentation record.

    The store owns session lifetime and expiry. The core only reads and
    replaces the record slot of sessions that already exist; it never creates
    or destroys sessions itself (open() is for the HTTP session layer).

    Implementations must give read-after-write consistency and must apply
    update() atomically with respect to other writes to the same id, while
    operations on different ids do not wait on each other.
    """

    @abstractmethod
    async def open(self, session_id: SessionId) -> Result[None, Exception]:
        """
        Make sure a live web session exists for the id.

        Args:
            session_id: Web session identifier

        Returns:
            Success(None) or Failure(exception)
        """
        pass

    @abstractmethod
    async def get(self, session_id: SessionId) -> Result[Optional[SessionRecord], SessionNotFound]:
        """
        Read the presentation record of a session.

        Args:
            session_id: Web session identifier

        Returns:
            Success(record), Success(None) if the session exists but has no
            record yet, or Failure(SessionNotFound) if there is no live session
        """
        pass

    @abstractmethod
    async def set(self, session_id: SessionId, record: SessionRecord) -> Result[None, SessionNotFound]:
        """
        Replace the presentation record of a session.

        Args:
            session_id: Web session identifier
            record: New record

        Returns:
            Success(None) or Failure(SessionNotFound)
        """
        pass

    @abstractmethod
    async def update(self, session_id: SessionId, transition: Transition) -> Result[SessionRecord, Exception]:
        """
        Atomically read, transform and replace the presentation record.

        The transition is called with the current record (None if not yet
        initialized) while writes to the same session are held off. Its result
        is stored only if it is a Success.

        Args:
            session_id: Web session identifier
            transition: Function computing the new record

        Returns:
            Success(new record), Failure(SessionNotFound), or the transition's
            Failure unchanged
        """
        pass

    @abstractmethod
    async def delete(self, session_id: SessionId) -> Result[None, Exception]:
        """
        Drop a web session and its record.

        Args:
            session_id: Web session identifier

        Returns:
            Success(None) or Failure(SessionNotFound)
        """
        pass

    @abstractmethod
    async def purge_expired(self) -> Result[int, Exception]:
        """
        Drop all expired web sessions.

        Returns:
            Success(number of sessions removed) or Failure(exception)
        """
        pass

    @abstractmethod
    async def count(self) -> Result[int, Exception]:
        """
        Number of live web sessions.

        Returns:
            Success(count) or Failure(exception)
        """
        pass
