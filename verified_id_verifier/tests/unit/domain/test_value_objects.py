"""Tests for domain value objects"""

import pytest

from verified_id_verifier.domain import SessionId, SessionStatus


class TestSessionId:
    """Tests for SessionId"""

    def test_valid_session_id(self):
        session_id = SessionId(value="abc123")

        assert session_id.value == "abc123"
        assert str(session_id) == "abc123"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_session_id_rejected(self, value):
        with pytest.raises(ValueError, match="cannot be blank"):
            SessionId(value=value)

    def test_equality_and_hashing(self):
        assert SessionId(value="a") == SessionId(value="a")
        assert len({SessionId(value="a"), SessionId(value="a"), SessionId(value="b")}) == 2

    def test_immutable(self):
        session_id = SessionId(value="a")
        with pytest.raises(AttributeError):
            session_id.value = "b"  # type: ignore[misc]


class TestSessionStatus:
    """Tests for SessionStatus"""

    def test_wire_values(self):
        assert SessionStatus.PENDING.value == "pending"
        assert SessionStatus.RETRIEVED.value == "request_retrieved"
        assert SessionStatus.VERIFIED.value == "presentation_verified"
        assert SessionStatus.ERROR.value == "presentation_error"
        assert str(SessionStatus.VERIFIED) == "presentation_verified"

    def test_ranks_are_ordered(self):
        assert SessionStatus.PENDING.rank < SessionStatus.RETRIEVED.rank
        assert SessionStatus.RETRIEVED.rank < SessionStatus.VERIFIED.rank
        assert SessionStatus.VERIFIED.rank == SessionStatus.ERROR.rank

    def test_terminal_states(self):
        assert SessionStatus.VERIFIED.is_terminal
        assert SessionStatus.ERROR.is_terminal
        assert not SessionStatus.PENDING.is_terminal
        assert not SessionStatus.RETRIEVED.is_terminal

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("request_retrieved", SessionStatus.RETRIEVED),
            ("presentation_verified", SessionStatus.VERIFIED),
            ("presentation_error", SessionStatus.ERROR),
        ],
    )
    def test_from_request_status(self, code, expected):
        assert SessionStatus.from_request_status(code) is expected

    @pytest.mark.parametrize("code", ["pending", "issuance_successful", "", None, "PRESENTATION_VERIFIED"])
    def test_from_request_status_ignores_other_codes(self, code):
        """Callbacks cannot drive a session back to pending or to unknown states"""
        assert SessionStatus.from_request_status(code) is None
