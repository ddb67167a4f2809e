"""List events use case."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel

from relay.config import FanoutSettings
from relay.domain.model import FanoutEvent
from relay.domain.repository import EventLogRepository
from relay.domain.service import ReadLedgerService
from relay.domain.value import EventCriteria, UserId


class EventItem(BaseModel):
    """Event item in response."""

    event_id: str
    kind: str
    sender_id: str | None
    payload: dict[str, Any]
    created_at: datetime
    is_read: bool

    @classmethod
    def from_domain(cls, event: FanoutEvent, is_read: bool) -> "EventItem":
        return cls(
            event_id=str(event.id),
            kind=event.kind.value,
            sender_id=str(event.sender_id) if event.sender_id else None,
            payload=event.payload,
            created_at=event.created_at,
            is_read=is_read,
        )


class ListEventsRequest(BaseModel):
    """List events request."""

    recipient_id: str  # Authenticated user
    unread_only: bool = False
    since: Optional[datetime] = None
    limit: Optional[int] = None  # Defaults to the configured page size
    offset: int = 0


class ListEventsResponse(BaseModel):
    """List events response."""

    items: list[EventItem]
    unread_count: int
    limit: int
    offset: int


class ListEventsUseCase:
    """Use case for pulling a recipient's event log.

    This is the catch-up path for recipients that were offline when
    events were published.
    """

    def __init__(
        self,
        event_log_repository: EventLogRepository,
        read_ledger_service: ReadLedgerService,
        fanout_settings: FanoutSettings,
    ) -> None:
        self.event_log_repository = event_log_repository
        self.read_ledger_service = read_ledger_service
        self.fanout_settings = fanout_settings

    async def execute(self, request: ListEventsRequest) -> ListEventsResponse:
        """Execute list events flow.

        Args:
            request: Recipient, filters and page

        Returns:
            Events oldest first with their read state
        """
        recipient_id = UserId(UUID(request.recipient_id))
        limit = request.limit or self.fanout_settings.default_page_size
        limit = max(1, min(limit, self.fanout_settings.max_page_size))
        offset = max(0, request.offset)

        events = await self.event_log_repository.find_for_recipient(
            EventCriteria(
                recipient_id=recipient_id,
                unread_only=request.unread_only,
                since=request.since,
                limit=limit,
                offset=offset,
            )
        )

        if request.unread_only:
            read_ids: set = set()
        else:
            read_ids = await self.read_ledger_service.read_event_ids(
                recipient_id, [e.id for e in events]
            )

        unread_count = await self.read_ledger_service.unread_count_for(recipient_id)

        return ListEventsResponse(
            items=[EventItem.from_domain(e, e.id in read_ids) for e in events],
            unread_count=unread_count,
            limit=limit,
            offset=offset,
        )
