"""Delivery report returned by a publish."""

from pydantic import Field

from relay.domain.model.common import DomainModel
from relay.domain.value import DeliveryStatus, EventId, UserId


class DeliveryError(DomainModel):
    """Persistence failure for a single recipient."""

    recipient_id: UserId
    reason: str


class DeliveryReport(DomainModel):
    """Per-recipient outcome of publishing one event.

    Informational only: no retry is scheduled for queued recipients,
    and failed recipients are left for the caller to retry.
    """

    event_id: EventId
    statuses: dict[UserId, DeliveryStatus] = Field(default_factory=dict)
    errors: list[DeliveryError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every recipient's event was persisted."""
        return not self.errors

    @property
    def failed_recipients(self) -> list[UserId]:
        return [error.recipient_id for error in self.errors]

    def recipients_with(self, status: DeliveryStatus) -> list[UserId]:
        return [rid for rid, s in self.statuses.items() if s == status]
