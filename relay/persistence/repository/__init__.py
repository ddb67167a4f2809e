"""PostgreSQL repository implementations."""

from relay.persistence.repository.comment import PostgresCommentRepository
from relay.persistence.repository.event_log import PostgresEventLogRepository
from relay.persistence.repository.read_ledger import PostgresReadLedgerRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresEventLogRepository",
    "PostgresReadLedgerRepository",
]
