"""Domain model entities for the interaction and moderation core."""

from engage.domain.model.comment import Comment
from engage.domain.model.flag import CommentFlag, Flag
from engage.domain.model.moderation import ModerationEvent, transition
from engage.domain.model.page import Page
from engage.domain.model.post import Post
from engage.domain.model.reaction import Reaction, Share
from engage.domain.model.stats import PostStats
from engage.domain.model.user import User
from engage.domain.model.view import View

__all__ = [
    "Comment",
    "CommentFlag",
    "Flag",
    "ModerationEvent",
    "Page",
    "Post",
    "PostStats",
    "Reaction",
    "Share",
    "User",
    "View",
    "transition",
]
