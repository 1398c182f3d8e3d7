"""View repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from engage.domain.model.view import View
from engage.domain.value import Handle, PostId


class ViewRepository(ABC):
    """Repository for the append-only view log."""

    @abstractmethod
    async def save(self, view: View) -> View:
        """Append a view record."""
        pass

    @abstractmethod
    async def find_latest_by_post_and_user(
        self, post_id: PostId, user_handle: Handle
    ) -> Optional[View]:
        """Find the most recent view of a post by a user.

        Args:
            post_id: The post ID
            user_handle: The viewer's handle

        Returns:
            The latest view if any, None otherwise
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count logged views of a post, counted or not."""
        pass
