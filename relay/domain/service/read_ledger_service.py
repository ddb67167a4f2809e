"""Read ledger domain service."""

from datetime import datetime
from typing import Iterable

import logfire

from relay.domain.error import NotFoundError
from relay.domain.repository import EventLogRepository, ReadLedgerRepository
from relay.domain.value import EventCriteria, EventId, UserId

from .base import Service
from .realtime import ConnectionRegistry, push_live

MARK_ALL_BATCH_SIZE = 500


class ReadLedgerService(Service):
    """Domain service for per-recipient read state.

    Unlike live delivery, read state is never dropped silently: storage
    errors propagate to the caller. Read receipts pushed back to the
    sender are best-effort, like any live push.
    """

    def __init__(
        self,
        read_ledger_repository: ReadLedgerRepository,
        event_log_repository: EventLogRepository,
        connection_registry: ConnectionRegistry,
        live_send_timeout: float = 2.0,
    ) -> None:
        """Initialize read ledger service.

        Args:
            read_ledger_repository: Read receipt repository
            event_log_repository: Event log, used to validate receipts
            connection_registry: Registry used to notify senders of reads
            live_send_timeout: Seconds to wait on a read receipt push
        """
        self.read_ledger_repository = read_ledger_repository
        self.event_log_repository = event_log_repository
        self.connection_registry = connection_registry
        self.live_send_timeout = live_send_timeout

    async def mark_read(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Mark an event as read by a recipient.

        Idempotent: marking an already read event changes nothing. A newly
        marked event sends a ``read_receipt`` message to the event sender
        if they are connected.

        Args:
            event_id: Event ID
            recipient_id: Recipient ID

        Returns:
            True if newly marked, False if it was already read

        Raises:
            NotFoundError: If the event was never delivered to the recipient
        """
        with logfire.span(
            "read_ledger_service.mark_read",
            event_id=str(event_id),
            recipient_id=str(recipient_id),
        ):
            if not await self.event_log_repository.has_event(event_id, recipient_id):
                logfire.warn(
                    "Event not found for recipient",
                    event_id=str(event_id),
                    recipient_id=str(recipient_id),
                )
                raise NotFoundError("Event", str(event_id))

            created = await self.read_ledger_repository.insert_if_absent(
                event_id, recipient_id
            )
            if created:
                logfire.info(
                    "Event marked read",
                    event_id=str(event_id),
                    recipient_id=str(recipient_id),
                )
                await self._send_read_receipt(event_id, recipient_id)
            return created

    async def _send_read_receipt(self, event_id: EventId, reader_id: UserId) -> None:
        event = await self.event_log_repository.find_by_id(event_id)
        if event is None or event.sender_id is None or event.sender_id == reader_id:
            return

        await push_live(
            self.connection_registry,
            event.sender_id,
            {
                "type": "read_receipt",
                "event_id": str(event_id),
                "reader_id": str(reader_id),
                "read_at": datetime.now().isoformat(),
            },
            self.live_send_timeout,
        )

    async def is_read(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Check whether a recipient has read an event."""
        return await self.read_ledger_repository.is_read(event_id, recipient_id)

    async def unread_count_for(self, recipient_id: UserId) -> int:
        """Count events in a recipient's log that are not yet read."""
        with logfire.span(
            "read_ledger_service.unread_count_for", recipient_id=str(recipient_id)
        ):
            count = await self.read_ledger_repository.count_unread(recipient_id)
            logfire.info("Unread count", recipient_id=str(recipient_id), count=count)
            return count

    async def read_event_ids(
        self, recipient_id: UserId, event_ids: Iterable[EventId]
    ) -> set[EventId]:
        """Batch check which events a recipient has read."""
        return await self.read_ledger_repository.find_read(recipient_id, event_ids)

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every event in a recipient's log as read.

        Args:
            recipient_id: Recipient ID

        Returns:
            Number of events newly marked
        """
        with logfire.span(
            "read_ledger_service.mark_all_read", recipient_id=str(recipient_id)
        ):
            marked = 0
            offset = 0
            while True:
                events = await self.event_log_repository.find_for_recipient(
                    EventCriteria(
                        recipient_id=recipient_id,
                        limit=MARK_ALL_BATCH_SIZE,
                        offset=offset,
                    )
                )
                for event in events:
                    if await self.read_ledger_repository.insert_if_absent(
                        event.id, recipient_id
                    ):
                        marked += 1
                if len(events) < MARK_ALL_BATCH_SIZE:
                    break
                offset += MARK_ALL_BATCH_SIZE

            logfire.info(
                "All events marked read", recipient_id=str(recipient_id), marked=marked
            )
            return marked
