"""Get moderation and engagement overview use case."""

from pydantic import BaseModel

from engage.domain.model import PostStats
from engage.domain.service import StatsService
from engage.domain.value import Handle, ModerationStatus, PostStatus

from ..base import BaseUseCase


class GetOverviewRequest(BaseModel):
    """Get overview request."""

    reviewer_handle: str


class PostsOverview(BaseModel):
    """Post counts by publication status."""

    total: int
    published: int
    draft: int
    scheduled: int
    archived: int
    deleted: int
    recent: int  # Created inside the recent window


class ModerationOverview(BaseModel):
    """Post counts by moderation status."""

    pending: int  # Includes posts with no status
    approved: int
    rejected: int
    flagged: int
    under_review: int
    high_flag: int  # Posts needing attention


class EngagementOverview(BaseModel):
    """Counter totals and per-post averages."""

    total_views: int
    total_likes: int
    total_comments: int
    total_shares: int
    total_bookmarks: int
    total_flags: int
    average_views: float
    average_likes: float
    average_comments: float
    average_shares: float
    average_bookmarks: float


class GetOverviewResponse(BaseModel):
    """Get overview response."""

    posts: PostsOverview
    moderation: ModerationOverview
    engagement: EngagementOverview

    @classmethod
    def from_stats(cls, stats: PostStats) -> "GetOverviewResponse":
        return cls(
            posts=PostsOverview(
                total=stats.total_posts,
                published=stats.status_count(PostStatus.PUBLISHED),
                draft=stats.status_count(PostStatus.DRAFT),
                scheduled=stats.status_count(PostStatus.SCHEDULED),
                archived=stats.status_count(PostStatus.ARCHIVED),
                deleted=stats.status_count(PostStatus.DELETED),
                recent=stats.recent_posts,
            ),
            moderation=ModerationOverview(
                pending=stats.moderation_count(ModerationStatus.PENDING),
                approved=stats.moderation_count(ModerationStatus.APPROVED),
                rejected=stats.moderation_count(ModerationStatus.REJECTED),
                flagged=stats.moderation_count(ModerationStatus.FLAGGED),
                under_review=stats.moderation_count(ModerationStatus.UNDER_REVIEW),
                high_flag=stats.high_flag_posts,
            ),
            engagement=EngagementOverview(
                total_views=stats.total("view_count"),
                total_likes=stats.total("like_count"),
                total_comments=stats.total("comment_count"),
                total_shares=stats.total("share_count"),
                total_bookmarks=stats.total("bookmark_count"),
                total_flags=stats.total("flag_count"),
                average_views=stats.average("view_count"),
                average_likes=stats.average("like_count"),
                average_comments=stats.average("comment_count"),
                average_shares=stats.average("share_count"),
                average_bookmarks=stats.average("bookmark_count"),
            ),
        )


class GetOverviewUseCase(BaseUseCase):
    """Use case for the reviewer dashboard figures."""

    def __init__(self, stats_service: StatsService) -> None:
        """Initialize get overview use case.

        Args:
            stats_service: Overview statistics domain service
        """
        self.stats_service = stats_service

    async def execute(self, request: GetOverviewRequest) -> GetOverviewResponse:
        """Execute get overview flow.

        Raises:
            ForbiddenError: If the caller lacks a privileged role
        """
        stats = await self.stats_service.get_overview(Handle(request.reviewer_handle))
        return GetOverviewResponse.from_stats(stats)
