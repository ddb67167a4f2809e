"""Shared in-memory storage for the event log and read ledger."""

from dataclasses import dataclass, field

from relay.domain.model.event import FanoutEvent, ReadReceipt
from relay.domain.value import EventId, UserId


@dataclass
class InMemoryEventStore:
    """Backing data for the in-memory event log and read ledger.

    Both repositories share one store so that unread filtering and
    counting can see deliveries and receipts together, like the joined
    tables in PostgreSQL.
    """

    events: dict[EventId, FanoutEvent] = field(default_factory=dict)
    deliveries: dict[UserId, list[EventId]] = field(default_factory=dict)
    receipts: dict[tuple[EventId, UserId], ReadReceipt] = field(default_factory=dict)

    def log_for(self, recipient_id: UserId) -> list[EventId]:
        return self.deliveries.get(recipient_id, [])

    def is_read(self, event_id: EventId, recipient_id: UserId) -> bool:
        return (event_id, recipient_id) in self.receipts
