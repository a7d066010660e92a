"""
Unit tests for PhaseReopenPolicy.
"""

import pytest

from app.domain.workflow.interfaces import (
    ActivityType,
    PhaseMetadataState,
    PhaseStatus,
)
from app.domain.workflow.phases import Phase
from app.domain.workflow.reopen import (
    BACKWARD_ONLY_MESSAGE,
    LIMIT_REACHED_MESSAGE,
    LOCKED_MESSAGE,
    PhaseReopenPolicy,
)
from app.infrastructure.exceptions import InvalidPhaseError, PhaseLockedError


@pytest.fixture
def policy():
    return PhaseReopenPolicy(max_reopen_allowed=2)


def completed(phase, reopen_count=0):
    return PhaseMetadataState(
        phase=phase, status=PhaseStatus.COMPLETED, reopen_count=reopen_count
    )


class TestInitialStatuses:
    def test_statuses_around_current(self, policy):
        states = policy.initial_statuses("OFFER_RECEIVED")
        by_phase = {s.phase: s.status for s in states}

        assert len(states) == 10
        assert by_phase["DOCUMENT_COLLECTION"] == PhaseStatus.COMPLETED
        assert by_phase["APPLICATION_SUBMISSION"] == PhaseStatus.COMPLETED
        assert by_phase["OFFER_RECEIVED"] == PhaseStatus.CURRENT
        assert by_phase["INITIAL_PAYMENT"] == PhaseStatus.PENDING
        assert all(s.max_reopen_allowed == 2 for s in states)

    def test_invalid_phase(self, policy):
        with pytest.raises(InvalidPhaseError):
            policy.initial_statuses("NOPE")


class TestReopen:
    def test_successful_reopen(self, policy):
        decision = policy.reopen("INTERVIEW", "OFFER_RECEIVED", completed("OFFER_RECEIVED"))

        assert decision.allowed is True
        assert decision.updated.status == PhaseStatus.CURRENT
        assert decision.updated.reopen_count == 1
        assert decision.updated.final_edit_allowed is True
        assert decision.updated.edits_left == 2
        assert decision.reset_phases == [
            "INITIAL_PAYMENT",
            "INTERVIEW",
            "FINANCIAL_TB_TEST",
            "CAS_VISA",
            "VISA_APPLICATION",
            "ENROLLMENT",
        ]
        assert decision.activity.type == ActivityType.PHASE_REOPEN
        assert decision.activity.metadata["reopenCount"] == 1

    def test_forward_target_rejected(self, policy):
        decision = policy.reopen("OFFER_RECEIVED", "INTERVIEW", completed("INTERVIEW"))

        assert decision.allowed is False
        assert decision.message == BACKWARD_ONLY_MESSAGE

    def test_current_phase_rejected(self, policy):
        state = PhaseMetadataState(phase="INTERVIEW", status=PhaseStatus.CURRENT)

        decision = policy.reopen("INTERVIEW", "INTERVIEW", state)

        assert decision.allowed is False
        assert decision.message == BACKWARD_ONLY_MESSAGE

    def test_pending_phase_rejected(self, policy):
        state = PhaseMetadataState(phase="OFFER_RECEIVED", status=PhaseStatus.PENDING)

        decision = policy.reopen("INTERVIEW", "OFFER_RECEIVED", state)

        assert decision.allowed is False
        assert "has not been started yet" in decision.message

    def test_locked_phase_rejected(self, policy):
        state = PhaseMetadataState(phase="OFFER_RECEIVED", status=PhaseStatus.LOCKED)

        decision = policy.reopen("INTERVIEW", "OFFER_RECEIVED", state)

        assert decision.allowed is False
        assert decision.locked is True
        assert decision.message == LOCKED_MESSAGE
        assert decision.updated is None

    def test_third_attempt_locks(self, policy):
        state = completed("OFFER_RECEIVED")

        first = policy.reopen("INTERVIEW", "OFFER_RECEIVED", state)
        second = policy.reopen(
            "INTERVIEW", "OFFER_RECEIVED",
            PhaseMetadataState(**{**first.updated.__dict__, "status": PhaseStatus.COMPLETED}),
        )
        third = policy.reopen(
            "INTERVIEW", "OFFER_RECEIVED",
            PhaseMetadataState(**{**second.updated.__dict__, "status": PhaseStatus.COMPLETED}),
        )

        assert first.allowed and second.allowed
        assert second.updated.reopen_count == 2
        assert third.allowed is False
        assert third.message == LIMIT_REACHED_MESSAGE
        assert third.updated.status == PhaseStatus.LOCKED
        assert third.updated.final_edit_allowed is False
        assert third.updated.is_locked

    def test_pending_future_phase_never_locked_with_zero_limit(self):
        strict = PhaseReopenPolicy(max_reopen_allowed=0)
        state = PhaseMetadataState(
            phase="INTERVIEW", status=PhaseStatus.PENDING, max_reopen_allowed=0
        )

        decision = strict.reopen("OFFER_RECEIVED", "INTERVIEW", state)

        assert decision.allowed is False
        assert decision.locked is False
        assert decision.updated is None
        strict.ensure_enterable(state)

    def test_forward_target_at_limit_not_locked(self):
        strict = PhaseReopenPolicy(max_reopen_allowed=0)
        state = PhaseMetadataState(
            phase="INTERVIEW", status=PhaseStatus.COMPLETED, max_reopen_allowed=0
        )

        decision = strict.reopen("OFFER_RECEIVED", "INTERVIEW", state)

        assert decision.message == BACKWARD_ONLY_MESSAGE
        assert decision.updated is None

    def test_invalid_target(self, policy):
        with pytest.raises(InvalidPhaseError):
            policy.reopen("INTERVIEW", "BOGUS", completed("BOGUS"))


class TestLocking:
    def test_final_edit_flag_locks(self):
        state = PhaseMetadataState(phase="INTERVIEW", final_edit_allowed=False)

        assert PhaseReopenPolicy.is_locked(state) is True

    def test_ensure_enterable_raises_for_locked(self, policy):
        state = PhaseMetadataState(phase="INTERVIEW", status=PhaseStatus.LOCKED)

        with pytest.raises(PhaseLockedError):
            policy.ensure_enterable(state)

    def test_ensure_enterable_passes_for_pending(self, policy):
        policy.ensure_enterable(PhaseMetadataState(phase="INTERVIEW"))

    def test_advance(self, policy):
        states = policy.initial_statuses("OFFER_RECEIVED")

        advanced = policy.advance(states, Phase.OFFER_RECEIVED, Phase.INITIAL_PAYMENT)
        by_phase = {s.phase: s.status for s in advanced}

        assert by_phase["OFFER_RECEIVED"] == PhaseStatus.COMPLETED
        assert by_phase["INITIAL_PAYMENT"] == PhaseStatus.CURRENT
        assert by_phase["INTERVIEW"] == PhaseStatus.PENDING
