"""Shared comment response model."""

from datetime import datetime

from pydantic import BaseModel

from engage.domain.model import Comment
from engage.domain.value import CommentStatus


class CommentItem(BaseModel):
    """Comment as returned to clients."""

    comment_id: str
    post_id: str
    author_handle: str
    content: str
    parent_id: str | None
    status: CommentStatus
    like_count: int
    created_at: datetime
    updated_at: datetime
    is_liked: bool = False

    @classmethod
    def from_comment(cls, comment: Comment, is_liked: bool = False) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_handle=comment.author_handle.root,
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            status=comment.status,
            like_count=comment.like_count,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            is_liked=is_liked,
        )
