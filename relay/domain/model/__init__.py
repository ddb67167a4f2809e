"""Domain model entities for Relay."""

from relay.domain.model.comment import Comment
from relay.domain.model.delivery import DeliveryError, DeliveryReport
from relay.domain.model.event import FanoutEvent, ReadReceipt

__all__ = [
    "Comment",
    "FanoutEvent",
    "ReadReceipt",
    "DeliveryError",
    "DeliveryReport",
]
