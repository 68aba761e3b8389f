"""Tests for the booking status state machine."""

import pytest

from smartconnect.core.exceptions import AuthorizationError, InvalidStateError
from smartconnect.scheduling.status import (
    BookingParty,
    BookingStatus,
    allowed_targets,
    check_transition,
)

P = BookingStatus.PENDING
C = BookingStatus.CONFIRMED
DONE = BookingStatus.COMPLETED
X = BookingStatus.CANCELLED


class TestAllowedTargets:
    def test_pending(self):
        assert set(allowed_targets(P)) == {C, X}

    def test_confirmed(self):
        assert set(allowed_targets(C)) == {DONE, X}

    def test_terminal_states_have_no_targets(self):
        assert allowed_targets(DONE) == []
        assert allowed_targets(X) == []

    def test_seeker_can_only_cancel(self):
        assert allowed_targets(P, BookingParty.SEEKER) == [X]
        assert allowed_targets(C, BookingParty.SEEKER) == [X]


class TestProviderTransitions:
    @pytest.mark.parametrize("current,target", [(P, C), (P, X), (C, DONE)])
    def test_allowed(self, current, target):
        check_transition(current, target, BookingParty.PROVIDER)

    def test_provider_cannot_cancel_confirmed(self):
        with pytest.raises(AuthorizationError):
            check_transition(C, X, BookingParty.PROVIDER)


class TestSeekerTransitions:
    @pytest.mark.parametrize("current", [P, C])
    def test_seeker_can_cancel(self, current):
        check_transition(current, X, BookingParty.SEEKER)

    def test_seeker_cannot_confirm(self):
        with pytest.raises(AuthorizationError):
            check_transition(P, C, BookingParty.SEEKER)

    def test_seeker_cannot_complete(self):
        with pytest.raises(AuthorizationError):
            check_transition(C, DONE, BookingParty.SEEKER)


class TestInvalidTransitions:
    @pytest.mark.parametrize("terminal", [DONE, X])
    @pytest.mark.parametrize("target", [P, C, DONE, X])
    @pytest.mark.parametrize("party", list(BookingParty))
    def test_terminal_status_is_final(self, terminal, target, party):
        with pytest.raises(InvalidStateError):
            check_transition(terminal, target, party)

    def test_pending_to_completed_skips_confirmation(self):
        with pytest.raises(InvalidStateError):
            check_transition(P, DONE, BookingParty.PROVIDER)

    def test_same_status_is_not_a_transition(self):
        with pytest.raises(InvalidStateError):
            check_transition(P, P, BookingParty.PROVIDER)

    def test_graph_checked_before_authority(self):
        # Not in the graph at all, so the seeker gets InvalidState, not Authorization
        with pytest.raises(InvalidStateError):
            check_transition(P, DONE, BookingParty.SEEKER)
