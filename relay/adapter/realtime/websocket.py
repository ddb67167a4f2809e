"""WebSocket channel adapter."""

from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from relay.adapter.error import ChannelClosedError
from relay.domain.service.realtime import Channel


class WebSocketChannel(Channel):
    """Channel backed by a FastAPI WebSocket."""

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket

    async def send(self, message: dict[str, Any]) -> None:
        """Send a JSON message over the socket.

        Raises:
            ChannelClosedError: If the socket is no longer connected
        """
        if self.websocket.application_state != WebSocketState.CONNECTED:
            raise ChannelClosedError("WebSocket is not connected")
        await self.websocket.send_json(message)
