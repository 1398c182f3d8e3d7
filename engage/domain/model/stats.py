"""Aggregate figures over all posts, for the reviewer overview."""

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import ModerationStatus, PostStatus


class PostStats(DomainModel):
    """Post counts and summed engagement counters.

    Posts without a moderation status are counted as PENDING.
    """

    total_posts: int = Field(default=0, ge=0)
    by_status: dict[PostStatus, int] = Field(default_factory=dict)
    by_moderation_status: dict[ModerationStatus, int] = Field(default_factory=dict)
    high_flag_posts: int = Field(default=0, ge=0)  # flag_count >= threshold
    recent_posts: int = Field(default=0, ge=0)  # Created inside the recent window
    totals: dict[str, int] = Field(default_factory=dict)  # POST_COUNTERS -> sum

    def status_count(self, status: PostStatus) -> int:
        return self.by_status.get(status, 0)

    def moderation_count(self, status: ModerationStatus) -> int:
        return self.by_moderation_status.get(status, 0)

    def total(self, counter: str) -> int:
        return self.totals.get(counter, 0)

    def average(self, counter: str) -> float:
        """Mean of a counter per post, to two decimals (0 with no posts)."""
        if not self.total_posts:
            return 0.0
        return round(self.total(counter) / self.total_posts, 2)
