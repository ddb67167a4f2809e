"""Repository interfaces for Relay domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from relay.domain.repository.comment import CommentRepository
from relay.domain.repository.event_log import EventLogRepository
from relay.domain.repository.read_ledger import ReadLedgerRepository

__all__ = [
    "CommentRepository",
    "EventLogRepository",
    "ReadLedgerRepository",
]
