"""Fan-out event entity and read receipts."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from relay.domain.model.common import DomainModel
from relay.domain.value import EventId, EventKind, UserId


class FanoutEvent(DomainModel):
    """An event delivered to one or many recipients.

    Covers task assignment, task status changes, chat messages and
    comment notifications. The payload is opaque to delivery.
    """

    id: EventId
    kind: EventKind
    sender_id: Optional[UserId] = None
    recipient_ids: tuple[UserId, ...] = Field(min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("recipient_ids")
    @classmethod
    def dedupe_recipients(cls, v: tuple[UserId, ...]) -> tuple[UserId, ...]:
        """Drop repeated recipients, keeping first occurrence order."""
        return tuple(dict.fromkeys(v))

    def to_envelope(self) -> dict[str, Any]:
        """Build the message pushed to live connections."""
        return {"type": "event", "event": self.model_dump(mode="json")}


class ReadReceipt(DomainModel):
    """Read ledger entry.

    Presence of a receipt for (event_id, recipient_id) means the
    recipient has read the event.
    """

    event_id: EventId
    recipient_id: UserId
    read_at: datetime = Field(default_factory=datetime.now)
