"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .event_log import InMemoryEventLogRepository
from .read_ledger import InMemoryReadLedgerRepository
from .store import InMemoryEventStore

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryEventLogRepository",
    "InMemoryEventStore",
    "InMemoryReadLedgerRepository",
]
