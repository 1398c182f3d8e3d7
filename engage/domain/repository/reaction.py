"""Reaction and share repository interfaces."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from engage.domain.model.reaction import Reaction, Share
from engage.domain.value import Handle, PostId, ReactionId, ReactionKind


class ReactionRepository(ABC):
    """Repository for toggleable reactions (likes, bookmarks, comment likes).

    Each kind is stored with a unique (target, user) key.
    """

    @abstractmethod
    async def find_by_target_and_user(
        self,
        kind: ReactionKind,
        target_id: UUID,
        user_handle: Handle,
    ) -> Optional[Reaction]:
        """Find a user's reaction of a kind on a target.

        Args:
            kind: Reaction kind
            target_id: Post or comment ID, depending on kind
            user_handle: The reacting user's handle

        Returns:
            The reaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_targets(
        self,
        kind: ReactionKind,
        user_handle: Handle,
        target_ids: Sequence[UUID],
    ) -> List[Reaction]:
        """Find a user's reactions of a kind on multiple targets (batch query).

        Args:
            kind: Reaction kind
            user_handle: The reacting user's handle
            target_ids: Target IDs to check

        Returns:
            Reactions by the user on the given targets
        """
        pass

    @abstractmethod
    async def count_by_target(self, kind: ReactionKind, target_id: UUID) -> int:
        """Count reactions of a kind on a target."""
        pass

    @abstractmethod
    async def save(self, reaction: Reaction) -> Reaction:
        """Insert a reaction.

        Args:
            reaction: The reaction to save

        Returns:
            The saved reaction

        Raises:
            IntegrityError: If the user already holds this reaction (duplicate)
        """
        pass

    @abstractmethod
    async def delete(self, kind: ReactionKind, reaction_id: ReactionId) -> None:
        """Hard-delete a reaction.

        Args:
            kind: Reaction kind
            reaction_id: The reaction ID to delete
        """
        pass


class ShareRepository(ABC):
    """Repository for post shares. Shares are append-only."""

    @abstractmethod
    async def save(self, share: Share) -> Share:
        """Insert a share record."""
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count shares of a post."""
        pass
