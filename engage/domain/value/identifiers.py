"""Strongly typed identifiers for domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
ReactionId = NewType("ReactionId", UUID)
ShareId = NewType("ShareId", UUID)
FlagId = NewType("FlagId", UUID)
CommentFlagId = NewType("CommentFlagId", UUID)
ViewId = NewType("ViewId", UUID)
