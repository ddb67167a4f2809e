"""Read ledger repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Set

from relay.domain.value import EventId, UserId


class ReadLedgerRepository(ABC):
    """Per-recipient, per-event read receipts.

    Receipts are insert-only; nothing is ever removed.
    """

    @abstractmethod
    async def insert_if_absent(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Record that a recipient read an event.

        Args:
            event_id: Event ID
            recipient_id: Recipient ID

        Returns:
            True if a receipt was created, False if one already existed
        """
        pass

    @abstractmethod
    async def is_read(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Check whether a receipt exists."""
        pass

    @abstractmethod
    async def find_read(
        self, recipient_id: UserId, event_ids: Iterable[EventId]
    ) -> Set[EventId]:
        """Batch check which of the given events a recipient has read.

        Returns:
            The subset of event_ids with a receipt
        """
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: UserId) -> int:
        """Count events in a recipient's log without a receipt."""
        pass
