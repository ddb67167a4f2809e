"""Event fan-out domain service."""

import asyncio
from typing import Iterable

import logfire

from relay.domain.error import EventStoreError
from relay.domain.model import DeliveryError, DeliveryReport, FanoutEvent
from relay.domain.repository import EventLogRepository
from relay.domain.value import DeliveryStatus, UserId

from .base import Service
from .realtime import ConnectionRegistry, push_live


class FanoutService(Service):
    """Delivers events to many recipients.

    Every recipient gets the event appended to their durable log. Those
    with a live connection also get it pushed immediately. Persistence is
    the delivery guarantee; the push only saves a poll.
    """

    def __init__(
        self,
        event_log_repository: EventLogRepository,
        connection_registry: ConnectionRegistry,
        live_send_timeout: float = 2.0,
    ) -> None:
        """Initialize fan-out service.

        Args:
            event_log_repository: Per-recipient event log
            connection_registry: Registry of live recipient channels
            live_send_timeout: Seconds to wait on a single live send
        """
        self.event_log_repository = event_log_repository
        self.connection_registry = connection_registry
        self.live_send_timeout = live_send_timeout

    async def publish(self, event: FanoutEvent) -> DeliveryReport:
        """Publish an event to all of its recipients.

        Steps:
        1. Append the event to each recipient's log, in recipient order
        2. Push it concurrently to recipients that have a live connection

        Persistence completes for every recipient before any push starts,
        so no recipient is ever pushed an event that was not stored.

        Args:
            event: Event to publish

        Returns:
            Delivery report; persistence failures are listed in
            ``report.errors`` instead of being raised
        """
        return await self.publish_to(event, event.recipient_ids)

    async def publish_to(
        self, event: FanoutEvent, recipient_ids: Iterable[UserId]
    ) -> DeliveryReport:
        """Publish an event to a subset of recipients.

        Used to retry the recipients that failed in an earlier report.

        Args:
            event: Event to publish
            recipient_ids: Recipients to deliver to

        Returns:
            Delivery report for the given recipients
        """
        recipients = list(dict.fromkeys(recipient_ids))
        with logfire.span(
            "fanout_service.publish",
            event_id=str(event.id),
            kind=event.kind.value,
            recipients=len(recipients),
        ):
            statuses: dict[UserId, DeliveryStatus] = {}
            errors: list[DeliveryError] = []

            persisted: list[UserId] = []
            for recipient_id in recipients:
                try:
                    await self.event_log_repository.append_event(recipient_id, event)
                except EventStoreError as e:
                    logfire.error(
                        "Event persistence failed",
                        event_id=str(event.id),
                        recipient_id=str(recipient_id),
                        error=str(e),
                    )
                    statuses[recipient_id] = DeliveryStatus.FAILED
                    errors.append(DeliveryError(recipient_id=recipient_id, reason=str(e)))
                else:
                    persisted.append(recipient_id)

            envelope = event.to_envelope()
            delivered = await asyncio.gather(
                *(
                    push_live(
                        self.connection_registry,
                        rid,
                        envelope,
                        self.live_send_timeout,
                    )
                    for rid in persisted
                )
            )
            for recipient_id, live in zip(persisted, delivered):
                statuses[recipient_id] = (
                    DeliveryStatus.DELIVERED_LIVE if live else DeliveryStatus.QUEUED
                )

            report = DeliveryReport(event_id=event.id, statuses=statuses, errors=errors)
            logfire.info(
                "Event published",
                event_id=str(event.id),
                delivered_live=len(report.recipients_with(DeliveryStatus.DELIVERED_LIVE)),
                queued=len(report.recipients_with(DeliveryStatus.QUEUED)),
                failed=len(errors),
            )
            return report
