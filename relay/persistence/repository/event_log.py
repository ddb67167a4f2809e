"""PostgreSQL implementation of the event log repository."""

from typing import List, Optional

import logfire
from sqlalchemy import and_, exists, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from relay.domain.error import EventStoreError
from relay.domain.model import FanoutEvent
from relay.domain.repository import EventLogRepository
from relay.domain.value import EventCriteria, EventId, UserId
from relay.persistence.mappers import event_to_dict, row_to_event
from relay.persistence.tables import (
    event_deliveries_table,
    events_table,
    read_receipts_table,
)


class PostgresEventLogRepository(EventLogRepository):
    """PostgreSQL implementation of EventLogRepository.

    The event body is stored once in ``events``; each recipient's log is
    a row in ``event_deliveries``, ordered by its sequence number.

    Appends commit in their own transaction, outside the request session,
    so an event is durable before it is pushed live. Reads go through the
    request session.
    """

    def __init__(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Initialize repository.

        Args:
            session: Request-scoped session used for reads
            session_factory: Factory for the per-append transactions
        """
        self.session = session
        self.session_factory = session_factory

    async def append_event(self, recipient_id: UserId, event: FanoutEvent) -> None:
        """Append an event to a recipient's log and commit it.

        A failed insert or commit only affects this recipient.
        Re-appending the same event is a no-op.
        """
        event_stmt = (
            insert(events_table)
            .values(**event_to_dict(event))
            .on_conflict_do_nothing(index_elements=[events_table.c.id])
        )
        delivery_stmt = (
            insert(event_deliveries_table)
            .values(event_id=event.id, recipient_id=recipient_id)
            .on_conflict_do_nothing(constraint="uq_event_delivery")
        )
        try:
            async with self.session_factory.begin() as session:
                await session.execute(event_stmt)
                await session.execute(delivery_stmt)
        except SQLAlchemyError as e:
            logfire.warn(
                "Event log append failed",
                event_id=str(event.id),
                recipient_id=str(recipient_id),
                error=str(e),
            )
            raise EventStoreError(
                f"Could not store event {event.id}", recipient_id=str(recipient_id)
            ) from e

    async def find_by_id(self, event_id: EventId) -> Optional[FanoutEvent]:
        """Find an event by ID."""
        stmt = select(events_table).where(events_table.c.id == event_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_event(row._asdict()) if row else None

    async def find_for_recipient(self, criteria: EventCriteria) -> List[FanoutEvent]:
        """Find events in a recipient's log, oldest first."""
        stmt = (
            select(events_table)
            .join(
                event_deliveries_table,
                event_deliveries_table.c.event_id == events_table.c.id,
            )
            .where(event_deliveries_table.c.recipient_id == criteria.recipient_id)
        )

        if criteria.since is not None:
            stmt = stmt.where(events_table.c.created_at > criteria.since)

        if criteria.unread_only:
            stmt = stmt.where(
                ~exists().where(
                    and_(
                        read_receipts_table.c.event_id == events_table.c.id,
                        read_receipts_table.c.recipient_id == criteria.recipient_id,
                    )
                )
            )

        stmt = (
            stmt.order_by(event_deliveries_table.c.seq)
            .limit(criteria.limit)
            .offset(criteria.offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_event(row._asdict()) for row in result.fetchall()]

    async def has_event(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Check whether an event was stored for a recipient."""
        stmt = select(
            exists().where(
                and_(
                    event_deliveries_table.c.event_id == event_id,
                    event_deliveries_table.c.recipient_id == recipient_id,
                )
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def count_for_recipient(self, recipient_id: UserId) -> int:
        """Count events stored for a recipient."""
        stmt = (
            select(func.count())
            .select_from(event_deliveries_table)
            .where(event_deliveries_table.c.recipient_id == recipient_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
