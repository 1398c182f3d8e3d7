"""Abuse report and moderation service."""

from typing import Optional, TypeVar
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from engage.config import ModerationSettings
from engage.domain.error import (
    AlreadyExistsError,
    AlreadyReviewedError,
    InvalidActionError,
    NotFoundError,
)
from engage.domain.model import Flag, ModerationEvent, Page, User
from engage.domain.model.moderation import threshold_event
from engage.domain.repository import FlagRepository
from engage.domain.value import (
    FlagId,
    FlagReason,
    FlagStatus,
    Handle,
    ModerationAction,
    ModerationStatus,
    PostId,
    RefilePolicy,
    ReviewAction,
)
from engage.util.time import utcnow

from .base import Service
from .post_service import PostService
from .user_service import UserService


class FlagService(Service):
    """Domain service for post flags and reviewer moderation.

    Every precondition is checked before the first write, so a rejected call
    leaves no partial state behind.
    """

    def __init__(
        self,
        flag_repository: FlagRepository,
        post_service: PostService,
        user_service: UserService,
        moderation_settings: ModerationSettings,
    ) -> None:
        """Initialize flag service.

        Args:
            flag_repository: Flag repository
            post_service: Post domain service
            user_service: User domain service
            moderation_settings: Threshold and refile policy
        """
        self.flag_repository = flag_repository
        self.post_service = post_service
        self.user_service = user_service
        self.moderation_settings = moderation_settings

    async def file_flag(
        self,
        post_id: PostId,
        reason: FlagReason,
        user_handle: Handle,
        description: Optional[str] = None,
    ) -> Flag:
        """Report a post.

        Increments the post's flag count and escalates a PENDING post to
        FLAGGED once the count reaches the configured threshold.

        Args:
            post_id: Post ID
            reason: Report category
            user_handle: Reporter's handle
            description: Optional free-text detail

        Returns:
            The created flag

        Raises:
            NotFoundError: If the reporter or post does not exist
            AlreadyExistsError: If the refile policy blocks this report
        """
        with logfire.span(
            "flag_service.file_flag",
            post_id=str(post_id),
            user_handle=user_handle.root,
            reason=reason.value,
        ):
            await self.user_service.get_by_handle(user_handle)
            post = await self.post_service.get_post(post_id)

            previous = await self.flag_repository.find_by_post_and_user(
                post_id, user_handle
            )
            if self._refile_blocked(previous):
                logfire.warn(
                    "Duplicate flag",
                    post_id=str(post_id),
                    user_handle=user_handle.root,
                    policy=self.moderation_settings.refile_policy.value,
                )
                raise AlreadyExistsError("You have already flagged this post")

            flag = Flag(
                id=FlagId(uuid4()),
                post_id=post_id,
                user_handle=user_handle,
                reason=reason,
                description=description,
                status=FlagStatus.PENDING,
                created_at=utcnow(),
            )
            try:
                saved = await self.flag_repository.save(flag)
            except IntegrityError:
                logfire.warn(
                    "Duplicate flag attempt",
                    post_id=str(post_id),
                    user_handle=user_handle.root,
                )
                raise AlreadyExistsError("You have already flagged this post")

            await self.post_service.adjust_counters(post_id, {"flag_count": 1})

            flag_count = post.flag_count + 1
            event = threshold_event(flag_count, self.moderation_settings.flag_threshold)
            if event:
                await self.post_service.apply_moderation_event(post, event)

            logfire.info(
                "Post flagged",
                post_id=str(post_id),
                flag_id=str(saved.id),
                flag_count=flag_count,
            )
            return saved

    def _refile_blocked(self, previous: list[Flag]) -> bool:
        if self.moderation_settings.refile_policy == RefilePolicy.ONCE:
            return bool(previous)
        return any(flag.is_pending for flag in previous)

    async def review_flag(
        self,
        flag_id: FlagId,
        action: ReviewAction | str,
        reviewer_handle: Handle,
        notes: Optional[str] = None,
    ) -> Flag:
        """Resolve or dismiss a pending flag.

        Resolving a flag on a post that is still PENDING moderation also
        escalates the post to FLAGGED.

        Args:
            flag_id: Flag ID
            action: RESOLVE or DISMISS
            reviewer_handle: Reviewer's handle
            notes: Moderation notes for an escalated post

        Returns:
            The reviewed flag

        Raises:
            NotFoundError: If the reviewer or flag does not exist
            ForbiddenError: If the reviewer lacks a privileged role
            InvalidActionError: If the action is not recognized
            AlreadyReviewedError: If the flag is no longer PENDING
        """
        with logfire.span(
            "flag_service.review_flag",
            flag_id=str(flag_id),
            reviewer_handle=reviewer_handle.root,
        ):
            await self._require_reviewer(reviewer_handle)
            review_action = _parse(ReviewAction, action)

            flag = await self.flag_repository.find_by_id(flag_id)
            if not flag:
                logfire.warn("Flag not found", flag_id=str(flag_id))
                raise NotFoundError("Flag", str(flag_id))
            if not flag.is_pending:
                logfire.warn(
                    "Flag already reviewed",
                    flag_id=str(flag_id),
                    status=flag.status.value,
                )
                raise AlreadyReviewedError(str(flag_id))

            post = None
            if review_action == ReviewAction.RESOLVE:
                post = await self.post_service.get_post(flag.post_id)

            reviewed = await self.flag_repository.update_review(
                flag_id,
                status=review_action.resulting_status,
                reviewed_at=utcnow(),
                reviewed_by=reviewer_handle,
            )
            if reviewed is None:
                # Lost a race with another reviewer
                logfire.warn("Flag reviewed concurrently", flag_id=str(flag_id))
                raise AlreadyReviewedError(str(flag_id))

            if post is not None:
                await self.post_service.apply_moderation_event(
                    post,
                    ModerationEvent.FLAG_RESOLVED,
                    moderated_by=reviewer_handle,
                    notes=notes or f"Flag resolved: {flag.reason.value}",
                )

            logfire.info(
                "Flag reviewed",
                flag_id=str(flag_id),
                status=reviewed.status.value,
                reviewer_handle=reviewer_handle.root,
            )
            return reviewed

    async def moderate(
        self,
        post_id: PostId,
        action: ModerationAction | str,
        reviewer_handle: Handle,
        notes: Optional[str] = None,
    ) -> ModerationStatus:
        """Apply a reviewer moderation decision to a post.

        Always permitted regardless of the current status. Approving a post
        also resolves every pending flag on it.

        Args:
            post_id: Post ID
            action: APPROVE, REJECT, FLAG or UNDER_REVIEW
            reviewer_handle: Reviewer's handle
            notes: Moderation notes

        Returns:
            The post's new moderation status

        Raises:
            NotFoundError: If the reviewer or post does not exist
            ForbiddenError: If the reviewer lacks a privileged role
            InvalidActionError: If the action is not recognized
        """
        with logfire.span(
            "flag_service.moderate",
            post_id=str(post_id),
            reviewer_handle=reviewer_handle.root,
        ):
            await self._require_reviewer(reviewer_handle)
            moderation_action = _parse(ModerationAction, action)
            post = await self.post_service.get_post(post_id)

            status = await self.post_service.apply_moderation_event(
                post,
                ModerationEvent.from_action(moderation_action),
                moderated_by=reviewer_handle,
                notes=notes,
            )

            if moderation_action == ModerationAction.APPROVE:
                resolved = await self.flag_repository.resolve_pending_for_post(
                    post_id, reviewed_at=utcnow(), reviewed_by=reviewer_handle
                )
                logfire.info(
                    "Pending flags resolved on approval",
                    post_id=str(post_id),
                    count=resolved,
                )

            return status

    async def list_flags(
        self,
        reviewer_handle: Handle,
        status: Optional[FlagStatus] = None,
        post_id: Optional[PostId] = None,
        reason: Optional[FlagReason] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Page[Flag]:
        """List a page of the review queue, newest first.

        Raises:
            ForbiddenError: If the caller lacks a privileged role
        """
        with logfire.span(
            "flag_service.list_flags",
            reviewer_handle=reviewer_handle.root,
            status=status.value if status else None,
            limit=limit,
            offset=offset,
        ):
            await self._require_reviewer(reviewer_handle)
            total = await self.flag_repository.count_all(
                status=status, post_id=post_id, reason=reason
            )
            flags = await self.flag_repository.find_all(
                status=status,
                post_id=post_id,
                reason=reason,
                limit=limit,
                offset=offset,
            )
            logfire.info("Flags listed", count=len(flags), total=total)
            return Page(items=flags, total=total, offset=offset)

    async def _require_reviewer(self, handle: Handle) -> User:
        return await self.user_service.require_reviewer(handle)


ActionT = TypeVar("ActionT", ReviewAction, ModerationAction)


def _parse(enum_cls: type[ActionT], action: ActionT | str) -> ActionT:
    """Coerce a raw action string to its enum, raising InvalidActionError."""
    if isinstance(action, enum_cls):
        return action
    try:
        return enum_cls(str(action).upper())
    except ValueError:
        raise InvalidActionError(str(action))
