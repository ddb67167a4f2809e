"""In-memory read ledger repository for testing."""

from typing import Iterable

from relay.domain.model.event import ReadReceipt
from relay.domain.repository.read_ledger import ReadLedgerRepository
from relay.domain.value import EventId, UserId

from .store import InMemoryEventStore


class InMemoryReadLedgerRepository(ReadLedgerRepository):
    """In-memory implementation of ReadLedgerRepository for testing."""

    def __init__(self, store: InMemoryEventStore | None = None) -> None:
        self.store = store or InMemoryEventStore()

    async def insert_if_absent(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Record a read receipt unless one exists."""
        key = (event_id, recipient_id)
        if key in self.store.receipts:
            return False
        self.store.receipts[key] = ReadReceipt(
            event_id=event_id, recipient_id=recipient_id
        )
        return True

    async def is_read(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Check whether a receipt exists."""
        return self.store.is_read(event_id, recipient_id)

    async def find_read(
        self, recipient_id: UserId, event_ids: Iterable[EventId]
    ) -> set[EventId]:
        """Batch check which events a recipient has read."""
        return {eid for eid in event_ids if self.store.is_read(eid, recipient_id)}

    async def count_unread(self, recipient_id: UserId) -> int:
        """Count a recipient's logged events without a receipt."""
        return sum(
            1
            for event_id in self.store.log_for(recipient_id)
            if not self.store.is_read(event_id, recipient_id)
        )
