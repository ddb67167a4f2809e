"""Event log repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from relay.domain.model.event import FanoutEvent
from relay.domain.value import EventCriteria, EventId, UserId


class EventLogRepository(ABC):
    """Durable per-recipient log of fan-out events.

    Offline recipients catch up by reading their log on the next pull
    or reconnect.
    """

    @abstractmethod
    async def append_event(self, recipient_id: UserId, event: FanoutEvent) -> None:
        """Append an event to a recipient's log.

        The append is durable once this returns. Appends for different
        recipients are independent: a failure for one recipient does not
        undo the others.

        Args:
            recipient_id: Recipient the event is stored for
            event: Event to store

        Raises:
            EventStoreError: If the write failed and may be retried
        """
        pass

    @abstractmethod
    async def find_by_id(self, event_id: EventId) -> Optional[FanoutEvent]:
        """Find an event by ID."""
        pass

    @abstractmethod
    async def find_for_recipient(self, criteria: EventCriteria) -> List[FanoutEvent]:
        """Find events in a recipient's log, oldest first.

        With ``criteria.unread_only`` set, events with a read receipt for
        the recipient are filtered out before paging.

        Args:
            criteria: Recipient, read filter, time bound and page

        Returns:
            Events in the order they were appended
        """
        pass

    @abstractmethod
    async def has_event(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Check whether an event was stored for a recipient."""
        pass

    @abstractmethod
    async def count_for_recipient(self, recipient_id: UserId) -> int:
        """Count events stored for a recipient."""
        pass
