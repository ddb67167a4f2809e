"""Read state use cases."""

from uuid import UUID

from pydantic import BaseModel

from relay.domain.service import ReadLedgerService
from relay.domain.value import EventId, UserId


class MarkReadRequest(BaseModel):
    """Mark read request."""

    event_id: str  # UUID string
    recipient_id: str  # Authenticated user


class MarkReadResponse(BaseModel):
    """Mark read response."""

    event_id: str
    newly_read: bool  # False when the event was already read
    unread_count: int


class MarkAllReadRequest(BaseModel):
    """Mark all read request."""

    recipient_id: str


class MarkAllReadResponse(BaseModel):
    """Mark all read response."""

    marked: int
    unread_count: int


class UnreadCountRequest(BaseModel):
    """Unread count request."""

    recipient_id: str


class UnreadCountResponse(BaseModel):
    """Unread count response."""

    unread_count: int


class MarkReadUseCase:
    """Use case for marking a single event as read."""

    def __init__(self, read_ledger_service: ReadLedgerService) -> None:
        """Initialize mark read use case.

        Args:
            read_ledger_service: Read ledger domain service
        """
        self.read_ledger_service = read_ledger_service

    async def execute(self, request: MarkReadRequest) -> MarkReadResponse:
        """Execute mark read flow.

        Raises:
            NotFoundError: If the event was never delivered to the recipient
        """
        event_id = EventId(UUID(request.event_id))
        recipient_id = UserId(UUID(request.recipient_id))

        newly_read = await self.read_ledger_service.mark_read(event_id, recipient_id)
        unread_count = await self.read_ledger_service.unread_count_for(recipient_id)

        return MarkReadResponse(
            event_id=request.event_id,
            newly_read=newly_read,
            unread_count=unread_count,
        )


class MarkAllReadUseCase:
    """Use case for marking a recipient's whole log as read."""

    def __init__(self, read_ledger_service: ReadLedgerService) -> None:
        self.read_ledger_service = read_ledger_service

    async def execute(self, request: MarkAllReadRequest) -> MarkAllReadResponse:
        recipient_id = UserId(UUID(request.recipient_id))
        marked = await self.read_ledger_service.mark_all_read(recipient_id)
        unread_count = await self.read_ledger_service.unread_count_for(recipient_id)
        return MarkAllReadResponse(marked=marked, unread_count=unread_count)


class GetUnreadCountUseCase:
    """Use case for fetching a recipient's unread badge count."""

    def __init__(self, read_ledger_service: ReadLedgerService) -> None:
        self.read_ledger_service = read_ledger_service

    async def execute(self, request: UnreadCountRequest) -> UnreadCountResponse:
        recipient_id = UserId(UUID(request.recipient_id))
        count = await self.read_ledger_service.unread_count_for(recipient_id)
        return UnreadCountResponse(unread_count=count)
