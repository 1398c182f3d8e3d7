"""Application layer DI providers."""

from dishka import Scope, provide

from engage.application.usecase.auth import GetCurrentUserUseCase
from engage.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    FlagCommentUseCase,
    GetCommentsUseCase,
    GetRepliesUseCase,
)
from engage.application.usecase.flag import (
    FlagPostUseCase,
    ListFlagsUseCase,
    ModeratePostUseCase,
    ReviewFlagUseCase,
)
from engage.application.usecase.reaction import (
    GetPostInteractionUseCase,
    SharePostUseCase,
    ToggleReactionUseCase,
)
from engage.application.usecase.stats import GetOverviewUseCase
from engage.application.usecase.view import RecordViewUseCase
from engage.domain.service import (
    CommentService,
    FlagService,
    JWTService,
    ReactionService,
    StatsService,
    UserService,
    ViewService,
)
from engage.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # Reaction use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_reaction_use_case(
        self, reaction_service: ReactionService
    ) -> ToggleReactionUseCase:
        """Provide toggle reaction use case."""
        return ToggleReactionUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_share_post_use_case(
        self, reaction_service: ReactionService
    ) -> SharePostUseCase:
        """Provide share post use case."""
        return SharePostUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_post_interaction_use_case(
        self, reaction_service: ReactionService
    ) -> GetPostInteractionUseCase:
        """Provide get post interaction use case."""
        return GetPostInteractionUseCase(reaction_service=reaction_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService, reaction_service: ReactionService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service, reaction_service=reaction_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_replies_use_case(
        self, comment_service: CommentService
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_flag_comment_use_case(
        self, comment_service: CommentService
    ) -> FlagCommentUseCase:
        """Provide flag comment use case."""
        return FlagCommentUseCase(comment_service=comment_service)

    # Flag and moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_flag_post_use_case(self, flag_service: FlagService) -> FlagPostUseCase:
        """Provide flag post use case."""
        return FlagPostUseCase(flag_service=flag_service)

    @provide(scope=Scope.REQUEST)
    def get_review_flag_use_case(self, flag_service: FlagService) -> ReviewFlagUseCase:
        """Provide review flag use case."""
        return ReviewFlagUseCase(flag_service=flag_service)

    @provide(scope=Scope.REQUEST)
    def get_moderate_post_use_case(
        self, flag_service: FlagService
    ) -> ModeratePostUseCase:
        """Provide moderate post use case."""
        return ModeratePostUseCase(flag_service=flag_service)

    @provide(scope=Scope.REQUEST)
    def get_list_flags_use_case(self, flag_service: FlagService) -> ListFlagsUseCase:
        """Provide list flags use case."""
        return ListFlagsUseCase(flag_service=flag_service)

    # View use cases
    @provide(scope=Scope.REQUEST)
    def get_record_view_use_case(self, view_service: ViewService) -> RecordViewUseCase:
        """Provide record view use case."""
        return RecordViewUseCase(view_service=view_service)

    # Overview use cases
    @provide(scope=Scope.REQUEST)
    def get_overview_use_case(self, stats_service: StatsService) -> GetOverviewUseCase:
        """Provide reviewer overview use case."""
        return GetOverviewUseCase(stats_service=stats_service)
