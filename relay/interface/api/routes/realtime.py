"""WebSocket route for live event delivery."""

from uuid import UUID

import logfire
from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from relay.adapter.realtime import WebSocketChannel
from relay.config import AuthSettings
from relay.domain.service import ConnectionRegistry, JWTService
from relay.domain.value import UserId

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def event_socket(
    websocket: WebSocket,
    token: str | None = Query(default=None),
) -> None:
    """Hold a live connection for pushing events to a user.

    The token comes from the ``token`` query parameter or the
    ``auth_token`` cookie. A newer connection for the same user replaces
    the older one. Clients may send ``ping`` and get a ``pong`` back;
    other messages are ignored.
    """
    container = websocket.app.state.dishka_container
    registry = await container.get(ConnectionRegistry)
    auth_settings = await container.get(AuthSettings)

    jwt_service = JWTService(auth_settings=auth_settings)
    user_id = jwt_service.get_user_id_from_token(
        token or websocket.cookies.get("auth_token")
    )
    try:
        recipient_id = UserId(UUID(user_id)) if user_id else None
    except ValueError:
        recipient_id = None
    if recipient_id is None:
        logfire.warn("WebSocket rejected - not authenticated")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    channel = WebSocketChannel(websocket)
    await registry.register(recipient_id, channel)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logfire.info("WebSocket disconnected", recipient_id=user_id)
                break
            # Binary frames carry no text and are ignored
            if message.get("text") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        logfire.info("WebSocket disconnected", recipient_id=user_id)
    finally:
        await registry.unregister(recipient_id, channel)
