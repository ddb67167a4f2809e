"""In-memory event log repository for testing."""

from typing import Optional

from relay.domain.model.event import FanoutEvent
from relay.domain.repository.event_log import EventLogRepository
from relay.domain.value import EventCriteria, EventId, UserId

from .store import InMemoryEventStore


class InMemoryEventLogRepository(EventLogRepository):
    """In-memory implementation of EventLogRepository for testing."""

    def __init__(self, store: InMemoryEventStore | None = None) -> None:
        self.store = store or InMemoryEventStore()

    async def append_event(self, recipient_id: UserId, event: FanoutEvent) -> None:
        """Append an event to a recipient's log (idempotent)."""
        self.store.events.setdefault(event.id, event)
        log = self.store.deliveries.setdefault(recipient_id, [])
        if event.id not in log:
            log.append(event.id)

    async def find_by_id(self, event_id: EventId) -> Optional[FanoutEvent]:
        """Find an event by ID."""
        return self.store.events.get(event_id)

    async def find_for_recipient(self, criteria: EventCriteria) -> list[FanoutEvent]:
        """Find events in a recipient's log, oldest first."""
        events = [
            self.store.events[event_id]
            for event_id in self.store.log_for(criteria.recipient_id)
        ]

        if criteria.since is not None:
            events = [e for e in events if e.created_at > criteria.since]

        if criteria.unread_only:
            events = [
                e for e in events if not self.store.is_read(e.id, criteria.recipient_id)
            ]

        return events[criteria.offset : criteria.offset + criteria.limit]

    async def has_event(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Check whether an event was stored for a recipient."""
        return event_id in self.store.log_for(recipient_id)

    async def count_for_recipient(self, recipient_id: UserId) -> int:
        """Count events stored for a recipient."""
        return len(self.store.log_for(recipient_id))
