"""Domain layer DI providers."""

from dishka import Scope, provide

from engage.config import AnalyticsSettings, AuthSettings, ModerationSettings
from engage.domain.repository import (
    CommentFlagRepository,
    CommentRepository,
    FlagRepository,
    PostRepository,
    ReactionRepository,
    ShareRepository,
    UserRepository,
    ViewRepository,
)
from engage.domain.service import (
    CommentService,
    FlagService,
    JWTService,
    PostService,
    ReactionService,
    StatsService,
    UserService,
    ViewService,
)
from engage.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        comment_flag_repository: CommentFlagRepository,
        post_service: PostService,
        user_service: UserService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            comment_flag_repository=comment_flag_repository,
            post_service=post_service,
            user_service=user_service,
        )

    @provide
    def get_reaction_service(
        self,
        reaction_repository: ReactionRepository,
        share_repository: ShareRepository,
        post_service: PostService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> ReactionService:
        """Provide reaction domain service."""
        return ReactionService(
            reaction_repository=reaction_repository,
            share_repository=share_repository,
            post_service=post_service,
            comment_service=comment_service,
            user_service=user_service,
        )

    @provide
    def get_flag_service(
        self,
        flag_repository: FlagRepository,
        post_service: PostService,
        user_service: UserService,
        moderation_settings: ModerationSettings,
    ) -> FlagService:
        """Provide flag and moderation domain service."""
        return FlagService(
            flag_repository=flag_repository,
            post_service=post_service,
            user_service=user_service,
            moderation_settings=moderation_settings,
        )

    @provide
    def get_view_service(
        self,
        view_repository: ViewRepository,
        post_service: PostService,
        analytics_settings: AnalyticsSettings,
    ) -> ViewService:
        """Provide view analytics domain service."""
        return ViewService(
            view_repository=view_repository,
            post_service=post_service,
            analytics_settings=analytics_settings,
        )

    @provide
    def get_stats_service(
        self,
        post_repository: PostRepository,
        user_service: UserService,
        moderation_settings: ModerationSettings,
        analytics_settings: AnalyticsSettings,
    ) -> StatsService:
        """Provide overview statistics domain service."""
        return StatsService(
            post_repository=post_repository,
            user_service=user_service,
            moderation_settings=moderation_settings,
            analytics_settings=analytics_settings,
        )
