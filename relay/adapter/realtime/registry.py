"""In-process connection registry."""

import asyncio

import logfire

from relay.domain.service.realtime import Channel, ConnectionRegistry
from relay.domain.value import UserId


class InMemoryConnectionRegistry(ConnectionRegistry):
    """Connection registry held in process memory.

    Shared by every request in the process. All access goes through one
    lock whose critical section is a single dict operation; no I/O is
    awaited while it is held.
    """

    def __init__(self) -> None:
        self._channels: dict[UserId, Channel] = {}
        self._lock = asyncio.Lock()

    async def register(self, recipient_id: UserId, channel: Channel) -> None:
        """Register the live channel for a recipient, replacing any previous one."""
        async with self._lock:
            replaced = self._channels.get(recipient_id)
            self._channels[recipient_id] = channel
        logfire.info(
            "Connection registered",
            recipient_id=str(recipient_id),
            replaced=replaced is not None,
        )

    async def unregister(
        self, recipient_id: UserId, channel: Channel | None = None
    ) -> bool:
        """Remove a recipient's channel.

        A channel that was already replaced by a newer connection is
        left alone, so a late disconnect cannot evict the new socket.
        """
        async with self._lock:
            current = self._channels.get(recipient_id)
            if current is None or (channel is not None and current is not channel):
                return False
            del self._channels[recipient_id]
        logfire.info("Connection unregistered", recipient_id=str(recipient_id))
        return True

    async def lookup(self, recipient_id: UserId) -> Channel | None:
        """Get the live channel for a recipient, if any."""
        async with self._lock:
            return self._channels.get(recipient_id)

    async def connected_count(self) -> int:
        """Number of recipients with a live channel."""
        async with self._lock:
            return len(self._channels)
