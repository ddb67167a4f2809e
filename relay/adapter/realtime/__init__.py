"""Realtime delivery adapters."""

from relay.adapter.error import ChannelClosedError
from relay.adapter.realtime.registry import InMemoryConnectionRegistry
from relay.adapter.realtime.websocket import WebSocketChannel

__all__ = [
    "ChannelClosedError",
    "InMemoryConnectionRegistry",
    "WebSocketChannel",
]
