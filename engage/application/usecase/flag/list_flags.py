"""List flags use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.domain.service import FlagService
from engage.domain.value import FlagReason, FlagStatus, Handle, PostId

from ..base import BaseUseCase
from ..pagination import PageInfo, PageRequest
from .common import FlagItem


class ListFlagsRequest(PageRequest):
    """List flags request."""

    reviewer_handle: str
    status: FlagStatus | None = None
    post_id: UUID | None = None
    reason: FlagReason | None = None


class ListFlagsResponse(BaseModel):
    """List flags response."""

    flags: list[FlagItem]
    total: int  # Matching flags across all pages
    page: PageInfo


class ListFlagsUseCase(BaseUseCase):
    """Use case for the reviewer flag queue."""

    def __init__(self, flag_service: FlagService) -> None:
        self.flag_service = flag_service

    async def execute(self, request: ListFlagsRequest) -> ListFlagsResponse:
        """Execute list flow, newest first, one page at a time."""
        page = await self.flag_service.list_flags(
            Handle(request.reviewer_handle),
            status=request.status,
            post_id=PostId(request.post_id) if request.post_id else None,
            reason=request.reason,
            limit=request.limit,
            offset=request.offset,
        )
        return ListFlagsResponse(
            flags=[FlagItem.from_flag(flag) for flag in page.items],
            total=page.total,
            page=PageInfo.from_page(page),
        )
