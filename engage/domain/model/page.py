"""Offset pages for listing operations."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

ItemT = TypeVar("ItemT")


class Page(BaseModel, Generic[ItemT]):
    """One slice of an ordered listing."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: list[ItemT]
    total: int  # Matching items across all pages
    offset: int = 0

    @property
    def next_offset(self) -> int:
        return self.offset + len(self.items)

    @property
    def is_done(self) -> bool:
        return self.next_offset >= self.total
