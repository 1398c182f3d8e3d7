"""Moderation and engagement overview for reviewers."""

from datetime import timedelta

import logfire

from engage.config import AnalyticsSettings, ModerationSettings
from engage.domain.model import PostStats
from engage.domain.repository import PostRepository
from engage.domain.value import Handle
from engage.util.time import utcnow

from .base import Service
from .user_service import UserService


class StatsService(Service):
    """Domain service for site-wide post statistics."""

    def __init__(
        self,
        post_repository: PostRepository,
        user_service: UserService,
        moderation_settings: ModerationSettings,
        analytics_settings: AnalyticsSettings,
    ) -> None:
        self.post_repository = post_repository
        self.user_service = user_service
        self.moderation_settings = moderation_settings
        self.analytics_settings = analytics_settings

    async def get_overview(self, reviewer_handle: Handle) -> PostStats:
        """Summarize every post for the moderation dashboard.

        Raises:
            ForbiddenError: If the caller lacks a privileged role
        """
        with logfire.span(
            "stats_service.get_overview", reviewer_handle=reviewer_handle.root
        ):
            await self.user_service.require_reviewer(reviewer_handle)
            recent_since = utcnow() - timedelta(
                days=self.analytics_settings.recent_days
            )
            stats = await self.post_repository.summarize(
                high_flag_count=self.moderation_settings.high_flag_count,
                recent_since=recent_since,
            )
            logfire.info(
                "Overview computed",
                total_posts=stats.total_posts,
                high_flag_posts=stats.high_flag_posts,
            )
            return stats
