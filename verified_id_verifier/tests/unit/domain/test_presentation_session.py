"""Tests for the presentation session state machine"""

from datetime import timedelta

import pytest
from returns.result import Failure, Success

from verified_id_verifier.domain import (
    ERROR_MESSAGE,
    PENDING_MESSAGE,
    RETRIEVED_MESSAGE,
    VERIFIED_MESSAGE,
    ClaimExtractionError,
    DerivedClaims,
    FixedClock,
    InvalidStateTransition,
    SessionId,
    SessionRecord,
    SessionStatus,
    create_pending,
    extract_claims,
    mark_as_failed,
    mark_as_retrieved,
    mark_as_verified,
)


def _verified(session_id, clock, callback, claims=DerivedClaims()):
    return mark_as_verified(None, session_id, callback, claims, clock).unwrap()


class TestSessionRecord:
    """Tests for SessionRecord invariants"""

    def test_blank_message_rejected(self, session_id, fixed_clock):
        with pytest.raises(ValueError, match="message"):
            SessionRecord(session_id=session_id, status=SessionStatus.PENDING, message=" ", updated_at=fixed_clock.now())

    @pytest.mark.parametrize("status", [SessionStatus.PENDING, SessionStatus.RETRIEVED, SessionStatus.ERROR])
    def test_payload_only_on_verified(self, session_id, fixed_clock, status):
        with pytest.raises(ValueError, match="payload"):
            SessionRecord(
                session_id=session_id,
                status=status,
                message="x",
                updated_at=fixed_clock.now(),
                payload=[{"claims": {}}],
            )

    def test_error_only_on_error_record(self, session_id, fixed_clock):
        with pytest.raises(ValueError, match="error only allowed"):
            SessionRecord(
                session_id=session_id,
                status=SessionStatus.RETRIEVED,
                message="x",
                updated_at=fixed_clock.now(),
                error={"code": "x"},
            )


class TestCreatePending:
    """Tests for create_pending"""

    def test_creates_pending_record(self, session_id, fixed_clock):
        record = create_pending(session_id, fixed_clock)

        assert record.session_id == session_id
        assert record.status is SessionStatus.PENDING
        assert record.message == PENDING_MESSAGE
        assert record.updated_at == fixed_clock.now()
        assert record.payload is None
        assert record.raw_callback is None


class TestMarkAsRetrieved:
    """Tests for the RETRIEVED transition"""

    def test_pending_to_retrieved(self, session_id, fixed_clock):
        pending = create_pending(session_id, fixed_clock)
        fixed_clock.advance(timedelta(seconds=5))

        result = mark_as_retrieved(pending, session_id, fixed_clock)

        assert isinstance(result, Success)
        record = result.unwrap()
        assert record.status is SessionStatus.RETRIEVED
        assert record.message == RETRIEVED_MESSAGE
        assert record.updated_at == pending.updated_at + timedelta(seconds=5)

    def test_uninitialized_record_is_accepted(self, session_id, fixed_clock):
        result = mark_as_retrieved(None, session_id, fixed_clock)

        assert result.unwrap().status is SessionStatus.RETRIEVED

    def test_redelivery_rewrites_record(self, session_id, fixed_clock):
        first = mark_as_retrieved(None, session_id, fixed_clock).unwrap()
        fixed_clock.advance(timedelta(seconds=1))

        second = mark_as_retrieved(first, session_id, fixed_clock).unwrap()

        assert second.status is SessionStatus.RETRIEVED
        assert second.updated_at > first.updated_at

    def test_retrieved_after_verified_is_rejected(self, session_id, fixed_clock, verified_callback):
        verified = _verified(session_id, fixed_clock, verified_callback)

        result = mark_as_retrieved(verified, session_id, fixed_clock)

        assert isinstance(result, Failure)
        error = result.failure()
        assert isinstance(error, InvalidStateTransition)
        assert error.current_state == "presentation_verified"
        assert error.attempted_state == "request_retrieved"
        assert "Cannot transition" in error.message


class TestMarkAsVerified:
    """Tests for the VERIFIED transition"""

    def test_sets_payload_and_claims_together(self, session_id, fixed_clock, verified_callback):
        retrieved = mark_as_retrieved(create_pending(session_id, fixed_clock), session_id, fixed_clock).unwrap()
        claims = DerivedClaims(email="alice@example.com", name="Alice Smith")

        result = mark_as_verified(retrieved, session_id, verified_callback, claims, fixed_clock)

        record = result.unwrap()
        assert record.status is SessionStatus.VERIFIED
        assert record.message == VERIFIED_MESSAGE
        assert record.payload == verified_callback["verifiedCredentialsData"]
        assert record.subject == "did:web:holder.example.com"
        assert record.email == "alice@example.com"
        assert record.name == "Alice Smith"
        assert record.raw_callback == verified_callback

    def test_verified_directly_from_pending(self, session_id, fixed_clock, verified_callback):
        """A lost request_retrieved callback does not block verification"""
        pending = create_pending(session_id, fixed_clock)

        result = mark_as_verified(pending, session_id, verified_callback, DerivedClaims(), fixed_clock)

        assert result.unwrap().status is SessionStatus.VERIFIED

    def test_record_does_not_share_callback_state(self, session_id, fixed_clock, verified_callback):
        record = _verified(session_id, fixed_clock, verified_callback)

        verified_callback["verifiedCredentialsData"][0]["claims"]["email"] = "mallory@example.com"
        verified_callback["subject"] = "did:web:other"

        assert record.payload[0]["claims"]["email"] == "alice@example.com"
        assert record.raw_callback["subject"] == "did:web:holder.example.com"

    def test_missing_payload_is_allowed(self, session_id, fixed_clock):
        callback = {"requestStatus": "presentation_verified", "state": "sess_123456"}

        record = _verified(session_id, fixed_clock, callback)

        assert record.payload is None
        assert record.subject is None

    def test_verified_after_error_is_rejected(self, session_id, fixed_clock, verified_callback):
        failed = mark_as_failed(None, session_id, {"code": "x"}, fixed_clock).unwrap()

        result = mark_as_verified(failed, session_id, verified_callback, DerivedClaims(), fixed_clock)

        assert isinstance(result, Failure)
        assert isinstance(result.failure(), InvalidStateTransition)

    def test_redelivered_verified_rewrites_record(self, session_id, fixed_clock, verified_callback):
        first = _verified(session_id, fixed_clock, verified_callback)
        callback = dict(verified_callback, subject="did:web:second")

        result = mark_as_verified(first, session_id, callback, DerivedClaims(), fixed_clock)

        assert result.unwrap().subject == "did:web:second"


class TestMarkAsFailed:
    """Tests for the ERROR transition"""

    def test_records_upstream_error(self, session_id, fixed_clock):
        pending = create_pending(session_id, fixed_clock)
        error = {"code": "presentation_failed", "message": "Holder declined"}

        record = mark_as_failed(pending, session_id, error, fixed_clock).unwrap()

        assert record.status is SessionStatus.ERROR
        assert record.error == error
        assert record.message == f"{ERROR_MESSAGE}: Holder declined"
        assert record.payload is None

    def test_without_error_object(self, session_id, fixed_clock):
        record = mark_as_failed(None, session_id, None, fixed_clock).unwrap()

        assert record.message == ERROR_MESSAGE
        assert record.error is None

    def test_error_after_verified_is_rejected(self, session_id, fixed_clock, verified_callback):
        verified = _verified(session_id, fixed_clock, verified_callback)

        result = mark_as_failed(verified, session_id, {"code": "x"}, fixed_clock)

        assert isinstance(result, Failure)


class TestExtractClaims:
    """Tests for extract_claims"""

    def test_extracts_email_and_name(self, verified_callback):
        result = extract_claims(verified_callback["verifiedCredentialsData"])

        assert result.unwrap() == DerivedClaims(email="alice@example.com", name="Alice Smith")

    def test_missing_individual_claims_are_none(self):
        result = extract_claims([{"claims": {"email": "bob@example.com"}}])

        assert result.unwrap() == DerivedClaims(email="bob@example.com", name=None)

    def test_non_string_claim_is_stringified(self):
        result = extract_claims([{"claims": {"name": 42}}])

        assert result.unwrap().name == "42"

    @pytest.mark.parametrize("data", [None, [], "nope", {"claims": {}}])
    def test_missing_credentials(self, data):
        result = extract_claims(data)

        assert isinstance(result, Failure)
        assert isinstance(result.failure(), ClaimExtractionError)
        assert result.failure().message.startswith("Cannot extract claims")

    @pytest.mark.parametrize("first", [{}, {"claims": None}, {"claims": ["email"]}, "credential"])
    def test_first_credential_without_claims(self, first):
        result = extract_claims([first])

        assert isinstance(result, Failure)
        assert "no claims" in result.failure().reason


def test_full_lifecycle(fixed_clock: FixedClock, verified_callback):
    """pending -> request_retrieved -> presentation_verified"""
    session_id = SessionId(value="sess_123456")
    record = create_pending(session_id, fixed_clock)
    record = mark_as_retrieved(record, session_id, fixed_clock).unwrap()
    claims = extract_claims(verified_callback["verifiedCredentialsData"]).unwrap()
    record = mark_as_verified(record, session_id, verified_callback, claims, fixed_clock).unwrap()

    assert record.status is SessionStatus.VERIFIED
    assert record.email == "alice@example.com"
    assert isinstance(mark_as_retrieved(record, session_id, fixed_clock), Failure)
