"""Cursor pagination shared by listing use cases.

Cursors are opaque to clients. They currently encode the offset of the next
item as a decimal string.
"""

from pydantic import BaseModel, Field

from engage.domain.model import Page

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
CURSOR_PATTERN = r"^\d{1,9}$"


class PageRequest(BaseModel):
    """Paging fields of a listing request."""

    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    cursor: str | None = Field(default=None, pattern=CURSOR_PATTERN)

    @property
    def offset(self) -> int:
        return int(self.cursor) if self.cursor else 0


class PageInfo(BaseModel):
    """Paging fields of a listing response."""

    is_done: bool
    continue_cursor: str | None  # Pass back as ``cursor`` for the next page

    @classmethod
    def from_page(cls, page: Page) -> "PageInfo":
        if page.is_done:
            return cls(is_done=True, continue_cursor=None)
        return cls(is_done=False, continue_cursor=str(page.next_offset))
