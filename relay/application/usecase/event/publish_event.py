"""Publish event use case."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from relay.application.usecase.base import BaseUseCase
from relay.domain.model import DeliveryReport, FanoutEvent
from relay.domain.service import FanoutService
from relay.domain.value import EventId, EventKind, UserId


class PublishEventRequest(BaseModel):
    """Publish event request."""

    kind: EventKind
    sender_id: str | None = None  # Authenticated user, None for system events
    recipient_ids: list[str] = Field(min_length=1)  # UUID strings
    payload: dict[str, Any] = Field(default_factory=dict)


class DeliveryErrorItem(BaseModel):
    """Recipient the event could not be stored for."""

    recipient_id: str
    reason: str


class PublishEventResponse(BaseModel):
    """Publish event response."""

    event_id: str
    statuses: dict[str, str]  # recipient ID -> delivery status
    errors: list[DeliveryErrorItem]
    ok: bool

    @classmethod
    def from_report(cls, report: DeliveryReport) -> "PublishEventResponse":
        return cls(
            event_id=str(report.event_id),
            statuses={str(rid): s.value for rid, s in report.statuses.items()},
            errors=[
                DeliveryErrorItem(recipient_id=str(e.recipient_id), reason=e.reason)
                for e in report.errors
            ],
            ok=report.ok,
        )


class PublishEventUseCase(BaseUseCase):
    """Use case for publishing an event to a set of recipients."""

    def __init__(self, fanout_service: FanoutService) -> None:
        """Initialize publish event use case.

        Args:
            fanout_service: Fan-out domain service
        """
        self.fanout_service = fanout_service

    async def execute(self, request: PublishEventRequest) -> PublishEventResponse:
        """Execute publish flow.

        Storage failures for individual recipients are reported in the
        response, never raised.

        Args:
            request: Event kind, sender, recipients and payload

        Returns:
            Per-recipient delivery outcome

        Raises:
            ValueError: If an ID is not a valid UUID
        """
        event = FanoutEvent(
            id=EventId(uuid4()),
            kind=request.kind,
            sender_id=UserId(UUID(request.sender_id)) if request.sender_id else None,
            recipient_ids=tuple(UserId(UUID(rid)) for rid in request.recipient_ids),
            payload=request.payload,
            created_at=datetime.now(),
        )
        report = await self.fanout_service.publish(event)
        return PublishEventResponse.from_report(report)
