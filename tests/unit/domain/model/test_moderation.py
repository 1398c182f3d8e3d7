"""Unit tests for the post moderation state machine."""

import pytest

from engage.domain.model import ModerationEvent, transition
from engage.domain.model.moderation import threshold_event
from engage.domain.value import ModerationAction, ModerationStatus

AUTOMATIC = [ModerationEvent.THRESHOLD_REACHED, ModerationEvent.FLAG_RESOLVED]


class TestAutomaticEscalation:
    """Automatic events only move PENDING (or unset) posts."""

    @pytest.mark.parametrize("event", AUTOMATIC)
    @pytest.mark.parametrize("current", [None, ModerationStatus.PENDING])
    def test_pending_or_unset_becomes_flagged(self, current, event):
        assert transition(current, event) == ModerationStatus.FLAGGED

    @pytest.mark.parametrize("event", AUTOMATIC)
    @pytest.mark.parametrize(
        "current",
        [
            ModerationStatus.APPROVED,
            ModerationStatus.REJECTED,
            ModerationStatus.FLAGGED,
            ModerationStatus.UNDER_REVIEW,
        ],
    )
    def test_other_statuses_are_left_alone(self, current, event):
        assert transition(current, event) == current


class TestReviewerDecisions:
    """Reviewer events apply from any status."""

    @pytest.mark.parametrize(
        "action,expected",
        [
            (ModerationAction.APPROVE, ModerationStatus.APPROVED),
            (ModerationAction.REJECT, ModerationStatus.REJECTED),
            (ModerationAction.FLAG, ModerationStatus.FLAGGED),
            (ModerationAction.UNDER_REVIEW, ModerationStatus.UNDER_REVIEW),
        ],
    )
    @pytest.mark.parametrize("current", [None, *ModerationStatus])
    def test_action_sets_target_status(self, current, action, expected):
        event = ModerationEvent.from_action(action)
        assert not event.is_automatic
        assert transition(current, event) == expected


class TestThresholdEvent:
    def test_below_threshold(self):
        assert threshold_event(4, 5) is None

    def test_at_and_above_threshold(self):
        assert threshold_event(5, 5) == ModerationEvent.THRESHOLD_REACHED
        assert threshold_event(6, 5) == ModerationEvent.THRESHOLD_REACHED
