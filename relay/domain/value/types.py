"""Domain value objects for Relay.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from relay.domain.value.common import ValueObject
from relay.domain.value.identifiers import CommentId, ThreadId, UserId


class EventKind(str, Enum):
    """Kind of fan-out event.

    Clients route incoming events on this value.
    """

    TASK_ASSIGNED = "task_assigned"
    TASK_STATUS_CHANGED = "task_status_changed"
    TASK_DELETED = "task_deleted"
    TASK_COMMENT_ADDED = "task_comment_added"
    CHAT_MESSAGE = "chat_message"
    COMMENT_ADDED = "comment_added"
    SYSTEM = "system"


class DeliveryStatus(str, Enum):
    """Per-recipient outcome of a publish."""

    DELIVERED_LIVE = "delivered_live"  # Pushed to a live connection and persisted
    QUEUED = "queued"  # Persisted only, picked up on next pull
    FAILED = "failed"  # Persistence failed, caller may retry


class CommentCriteria(ValueObject):
    """Filter for comment queries.

    Translated to a query at the storage boundary, so the domain never
    builds query-language filters itself.
    """

    thread_id: ThreadId
    include_deleted: bool = True
    author_id: UserId | None = None
    parent_id: CommentId | None = None


class EventCriteria(ValueObject):
    """Filter for a recipient's event log.

    Events are always returned oldest first.
    """

    recipient_id: UserId
    unread_only: bool = False
    since: datetime | None = None  # Exclusive lower bound on created_at
    limit: int = Field(default=50, ge=1, le=500)
    offset: int = Field(default=0, ge=0)
