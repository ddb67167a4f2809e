"""PostgreSQL implementation of the read ledger repository."""

from typing import Iterable, Set

from sqlalchemy import and_, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from relay.domain.repository import ReadLedgerRepository
from relay.domain.value import EventId, UserId
from relay.persistence.tables import event_deliveries_table, read_receipts_table


class PostgresReadLedgerRepository(ReadLedgerRepository):
    """PostgreSQL implementation of ReadLedgerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert_if_absent(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Record a read receipt unless one exists."""
        stmt = (
            insert(read_receipts_table)
            .values(event_id=event_id, recipient_id=recipient_id)
            .on_conflict_do_nothing(constraint="pk_read_receipts")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def is_read(self, event_id: EventId, recipient_id: UserId) -> bool:
        """Check whether a receipt exists."""
        stmt = select(read_receipts_table.c.event_id).where(
            read_receipts_table.c.event_id == event_id,
            read_receipts_table.c.recipient_id == recipient_id,
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_read(
        self, recipient_id: UserId, event_ids: Iterable[EventId]
    ) -> Set[EventId]:
        """Batch check which events a recipient has read."""
        ids = list(event_ids)
        if not ids:
            return set()

        stmt = select(read_receipts_table.c.event_id).where(
            read_receipts_table.c.recipient_id == recipient_id,
            read_receipts_table.c.event_id.in_(ids),
        )
        result = await self.session.execute(stmt)
        return {EventId(row.event_id) for row in result.fetchall()}

    async def count_unread(self, recipient_id: UserId) -> int:
        """Count a recipient's logged events without a receipt."""
        stmt = (
            select(func.count())
            .select_from(
                event_deliveries_table.outerjoin(
                    read_receipts_table,
                    and_(
                        read_receipts_table.c.event_id
                        == event_deliveries_table.c.event_id,
                        read_receipts_table.c.recipient_id
                        == event_deliveries_table.c.recipient_id,
                    ),
                )
            )
            .where(event_deliveries_table.c.recipient_id == recipient_id)
            .where(read_receipts_table.c.event_id.is_(None))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
