"""Event use cases."""

from .list_events import (
    EventItem,
    ListEventsRequest,
    ListEventsResponse,
    ListEventsUseCase,
)
from .publish_event import (
    DeliveryErrorItem,
    PublishEventRequest,
    PublishEventResponse,
    PublishEventUseCase,
)
from .read_state import (
    GetUnreadCountUseCase,
    MarkAllReadRequest,
    MarkAllReadResponse,
    MarkAllReadUseCase,
    MarkReadRequest,
    MarkReadResponse,
    MarkReadUseCase,
    UnreadCountRequest,
    UnreadCountResponse,
)

__all__ = [
    "DeliveryErrorItem",
    "EventItem",
    "GetUnreadCountUseCase",
    "ListEventsRequest",
    "ListEventsResponse",
    "ListEventsUseCase",
    "MarkAllReadRequest",
    "MarkAllReadResponse",
    "MarkAllReadUseCase",
    "MarkReadRequest",
    "MarkReadResponse",
    "MarkReadUseCase",
    "PublishEventRequest",
    "PublishEventResponse",
    "PublishEventUseCase",
    "UnreadCountRequest",
    "UnreadCountResponse",
]
