"""Post moderation state machine.

Moderation status moves in two ways:

- Automatic escalation (``THRESHOLD_REACHED``, ``FLAG_RESOLVED``): a post that
  is still PENDING (or has no status yet) becomes FLAGGED. Once a post has left
  PENDING these events change nothing, so escalation fires at most once.
- Reviewer decisions (``APPROVE``, ``REJECT``, ``FLAG``, ``UNDER_REVIEW``):
  always applied, from any status, any number of times.

The transition function is pure so it can be tested without storage.
"""

from enum import Enum
from typing import Optional

from engage.domain.value import ModerationAction, ModerationStatus


class ModerationEvent(str, Enum):
    """Input to the moderation state machine."""

    THRESHOLD_REACHED = "threshold_reached"
    FLAG_RESOLVED = "flag_resolved"
    APPROVE = "approve"
    REJECT = "reject"
    FLAG = "flag"
    UNDER_REVIEW = "under_review"

    @classmethod
    def from_action(cls, action: ModerationAction) -> "ModerationEvent":
        """Map a reviewer action to its event."""
        return _ACTION_EVENTS[action]

    @property
    def is_automatic(self) -> bool:
        return self in _AUTOMATIC_EVENTS


_ACTION_EVENTS: dict[ModerationAction, ModerationEvent] = {
    ModerationAction.APPROVE: ModerationEvent.APPROVE,
    ModerationAction.REJECT: ModerationEvent.REJECT,
    ModerationAction.FLAG: ModerationEvent.FLAG,
    ModerationAction.UNDER_REVIEW: ModerationEvent.UNDER_REVIEW,
}

_AUTOMATIC_EVENTS = frozenset(
    {ModerationEvent.THRESHOLD_REACHED, ModerationEvent.FLAG_RESOLVED}
)

_REVIEWER_TARGETS: dict[ModerationEvent, ModerationStatus] = {
    ModerationEvent.APPROVE: ModerationStatus.APPROVED,
    ModerationEvent.REJECT: ModerationStatus.REJECTED,
    ModerationEvent.FLAG: ModerationStatus.FLAGGED,
    ModerationEvent.UNDER_REVIEW: ModerationStatus.UNDER_REVIEW,
}


def transition(
    current: Optional[ModerationStatus], event: ModerationEvent
) -> ModerationStatus:
    """Compute the moderation status after an event.

    Args:
        current: Current status (None for posts created before moderation)
        event: Event to apply

    Returns:
        The new moderation status (may equal the current one)
    """
    if event.is_automatic:
        if current is None or current == ModerationStatus.PENDING:
            return ModerationStatus.FLAGGED
        return current
    return _REVIEWER_TARGETS[event]


def threshold_event(
    flag_count: int, threshold: int
) -> Optional[ModerationEvent]:
    """Return THRESHOLD_REACHED once a post's report count hits the threshold."""
    if flag_count >= threshold:
        return ModerationEvent.THRESHOLD_REACHED
    return None
