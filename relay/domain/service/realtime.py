"""Realtime delivery interfaces.

The fan-out service pushes events to live connections through these
interfaces. Implementations live in the adapter layer.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import logfire

from relay.domain.value import UserId


class Channel(ABC):
    """Outbound channel to one connected client."""

    @abstractmethod
    async def send(self, message: dict[str, Any]) -> None:
        """Send a message to the client.

        Args:
            message: JSON-serializable message

        Raises:
            Exception: Any failure; callers treat it as non-fatal
        """
        pass


class ConnectionRegistry(ABC):
    """Map from recipient to their current live channel.

    A recipient has zero or one channel; registering a new channel
    replaces the previous one.
    """

    @abstractmethod
    async def register(self, recipient_id: UserId, channel: Channel) -> None:
        """Register the live channel for a recipient."""
        pass

    @abstractmethod
    async def unregister(
        self, recipient_id: UserId, channel: Channel | None = None
    ) -> bool:
        """Remove a recipient's channel.

        Args:
            recipient_id: Recipient ID
            channel: If given, only remove when it is still the current channel

        Returns:
            True if a channel was removed
        """
        pass

    @abstractmethod
    async def lookup(self, recipient_id: UserId) -> Channel | None:
        """Get the live channel for a recipient, if any."""
        pass

    @abstractmethod
    async def connected_count(self) -> int:
        """Number of recipients with a live channel."""
        pass


async def push_live(
    registry: ConnectionRegistry,
    recipient_id: UserId,
    message: dict[str, Any],
    timeout: float,
) -> bool:
    """Best-effort push of a message to a recipient's live channel.

    A failed or timed out send is logged and its channel dropped from the
    registry; it is never raised.

    Returns:
        True if pushed, False if offline or the send failed
    """
    channel = await registry.lookup(recipient_id)
    if channel is None:
        return False

    try:
        await asyncio.wait_for(channel.send(message), timeout)
    except Exception as e:
        logfire.warn(
            "Live push failed",
            recipient_id=str(recipient_id),
            message_type=message.get("type"),
            error=str(e) or type(e).__name__,
        )
        await registry.unregister(recipient_id, channel)
        return False

    return True
