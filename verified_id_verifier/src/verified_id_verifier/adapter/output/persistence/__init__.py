"""Session persistence adapters"""

from verified_id_verifier.adapter.output.persistence.in_memory_session_store import (
    InMemorySessionStore,
    WebSession,
)

__all__ = ["InMemorySessionStore", "WebSession"]
