"""In-memory reaction and share repositories for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from engage.domain.model.reaction import Reaction, Share
from engage.domain.repository.reaction import ReactionRepository, ShareRepository
from engage.domain.value import Handle, PostId, ReactionId, ReactionKind


class InMemoryReactionRepository(ReactionRepository):
    """In-memory implementation of ReactionRepository for testing."""

    def __init__(self) -> None:
        self._reactions: list[Reaction] = []

    async def find_by_target_and_user(
        self,
        kind: ReactionKind,
        target_id: UUID,
        user_handle: Handle,
    ) -> Optional[Reaction]:
        """Find a user's reaction of a kind on a target."""
        target_uuid = UUID(str(target_id))
        for reaction in self._reactions:
            if (
                reaction.kind == kind
                and reaction.target_id == target_uuid
                and reaction.user_handle == user_handle
            ):
                return reaction
        return None

    async def find_by_user_and_targets(
        self,
        kind: ReactionKind,
        user_handle: Handle,
        target_ids: Sequence[UUID],
    ) -> list[Reaction]:
        """Find a user's reactions on multiple targets (batch query)."""
        if not target_ids:
            return []

        target_uuids = {UUID(str(tid)) for tid in target_ids}
        return [
            r
            for r in self._reactions
            if r.kind == kind
            and r.user_handle == user_handle
            and r.target_id in target_uuids
        ]

    async def count_by_target(self, kind: ReactionKind, target_id: UUID) -> int:
        """Count reactions of a kind on a target."""
        target_uuid = UUID(str(target_id))
        return sum(
            1 for r in self._reactions if r.kind == kind and r.target_id == target_uuid
        )

    async def save(self, reaction: Reaction) -> Reaction:
        """Save a reaction.

        Raises:
            IntegrityError: If the reaction already exists (duplicate)
        """
        existing = await self.find_by_target_and_user(
            reaction.kind, reaction.target_id, reaction.user_handle
        )
        if existing:
            raise IntegrityError("Duplicate reaction", None, Exception())

        self._reactions.append(reaction)
        return reaction

    async def delete(self, kind: ReactionKind, reaction_id: ReactionId) -> None:
        """Delete a reaction by ID."""
        self._reactions = [
            r for r in self._reactions if not (r.kind == kind and r.id == reaction_id)
        ]


class InMemoryShareRepository(ShareRepository):
    """In-memory implementation of ShareRepository for testing."""

    def __init__(self) -> None:
        self._shares: list[Share] = []

    async def save(self, share: Share) -> Share:
        """Save a share."""
        self._shares.append(share)
        return share

    async def count_by_post(self, post_id: PostId) -> int:
        """Count shares of a post."""
        return sum(1 for s in self._shares if s.post_id == post_id)
