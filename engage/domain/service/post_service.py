"""Post domain service."""

from collections.abc import Mapping
from typing import Optional

import logfire

from engage.domain.error import NotFoundError
from engage.domain.model import ModerationEvent, Post, transition
from engage.domain.repository import PostRepository
from engage.domain.value import Handle, ModerationStatus, PostId
from engage.util.time import utcnow

from .base import Service


class PostService(Service):
    """Domain service for post lookups, counters and moderation status."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            The post

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.get_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            return post

    async def adjust_counters(self, post_id: PostId, deltas: Mapping[str, int]) -> None:
        """Apply relative counter deltas and bump updated_at.

        Uses SQL-level arithmetic to avoid lost updates between concurrent
        requests.

        Args:
            post_id: Post ID
            deltas: Counter name to signed delta
        """
        with logfire.span(
            "post_service.adjust_counters", post_id=str(post_id), deltas=dict(deltas)
        ):
            await self.post_repository.adjust_counters(post_id, deltas, utcnow())
            logfire.info("Post counters adjusted", post_id=str(post_id))

    async def apply_moderation_event(
        self,
        post: Post,
        event: ModerationEvent,
        moderated_by: Optional[Handle] = None,
        notes: Optional[str] = None,
    ) -> ModerationStatus:
        """Feed an event into the moderation state machine and persist the result.

        Automatic events only write when they change the status. Reviewer
        events always write so the reviewer and notes are stamped even when
        the status is unchanged.

        Args:
            post: Post as read at the start of the operation
            event: Moderation event
            moderated_by: Reviewer handle (None for automatic events)
            notes: Moderation notes

        Returns:
            The post's moderation status after the event
        """
        with logfire.span(
            "post_service.apply_moderation_event",
            post_id=str(post.id),
            event=event.value,
        ):
            current = post.moderation_status
            new_status = transition(current, event)
            if event.is_automatic and new_status == current:
                logfire.info(
                    "Moderation status unchanged",
                    post_id=str(post.id),
                    status=current.value if current else None,
                )
                return new_status

            await self.post_repository.update_moderation(
                post.id,
                status=new_status,
                moderated_by=moderated_by,
                moderated_at=utcnow(),
                notes=notes,
            )
            logfire.info(
                "Moderation status changed",
                post_id=str(post.id),
                previous=current.value if current else None,
                status=new_status.value,
                event=event.value,
            )
            return new_status
