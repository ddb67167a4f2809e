"""Domain value objects for Relay."""

from relay.domain.value.identifiers import CommentId, EventId, ThreadId, UserId
from relay.domain.value.types import (
    CommentCriteria,
    DeliveryStatus,
    EventCriteria,
    EventKind,
)

__all__ = [
    # Identifiers
    "UserId",
    "ThreadId",
    "CommentId",
    "EventId",
    # Types
    "EventKind",
    "DeliveryStatus",
    "CommentCriteria",
    "EventCriteria",
]
