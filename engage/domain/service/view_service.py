"""View analytics service."""

from datetime import timedelta
from typing import Optional
from uuid import uuid4

import logfire

from engage.config import AnalyticsSettings
from engage.domain.model import View
from engage.domain.repository import ViewRepository
from engage.domain.value import Handle, PostId, ViewId
from engage.util.time import utcnow

from .base import Service
from .post_service import PostService


class ViewService(Service):
    """Domain service for recording post views."""

    def __init__(
        self,
        view_repository: ViewRepository,
        post_service: PostService,
        analytics_settings: AnalyticsSettings,
    ) -> None:
        """Initialize view service.

        Args:
            view_repository: View repository
            post_service: Post domain service
            analytics_settings: View cool-down configuration
        """
        self.view_repository = view_repository
        self.post_service = post_service
        self.analytics_settings = analytics_settings

    async def record_view(
        self,
        post_id: PostId,
        user_handle: Optional[Handle] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        referrer: Optional[str] = None,
    ) -> bool:
        """Log a view of a post and count it unless the viewer is cooling down.

        A signed-in viewer whose previous view of the same post falls inside
        the cool-down window is logged but not counted. Anonymous views are
        always counted.

        Args:
            post_id: Post ID
            user_handle: Viewer's handle, None for anonymous views
            ip_address: Client IP address
            user_agent: Client user agent
            referrer: Referring URL

        Returns:
            True if the view incremented the post's view count

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span(
            "view_service.record_view",
            post_id=str(post_id),
            user_handle=user_handle.root if user_handle else None,
        ):
            await self.post_service.get_post(post_id)
            now = utcnow()

            counted = True
            if user_handle is not None:
                latest = await self.view_repository.find_latest_by_post_and_user(
                    post_id, user_handle
                )
                window = timedelta(minutes=self.analytics_settings.view_cooldown_minutes)
                if latest and now - latest.viewed_at < window:
                    counted = False

            await self.view_repository.save(
                View(
                    id=ViewId(uuid4()),
                    post_id=post_id,
                    user_handle=user_handle,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    referrer=referrer,
                    viewed_at=now,
                )
            )

            if counted:
                await self.post_service.adjust_counters(post_id, {"view_count": 1})

            logfire.info("View recorded", post_id=str(post_id), counted=counted)
            return counted
