"""In-memory view repository for testing."""

from typing import Optional

from engage.domain.model.view import View
from engage.domain.repository.view import ViewRepository
from engage.domain.value import Handle, PostId


class InMemoryViewRepository(ViewRepository):
    """In-memory implementation of ViewRepository for testing."""

    def __init__(self) -> None:
        self._views: list[View] = []

    async def save(self, view: View) -> View:
        """Append a view."""
        self._views.append(view)
        return view

    async def find_latest_by_post_and_user(
        self, post_id: PostId, user_handle: Handle
    ) -> Optional[View]:
        """Find the most recent view of a post by a user."""
        views = [
            v
            for v in self._views
            if v.post_id == post_id and v.user_handle == user_handle
        ]
        return max(views, key=lambda v: v.viewed_at, default=None)

    async def count_by_post(self, post_id: PostId) -> int:
        """Count logged views of a post."""
        return sum(1 for v in self._views if v.post_id == post_id)
