"""Event routes."""

from datetime import datetime
from typing import Any

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, HTTPException, Query, Response, status
from pydantic import BaseModel, Field

from relay.application.usecase.event import (
    GetUnreadCountUseCase,
    ListEventsRequest,
    ListEventsResponse,
    ListEventsUseCase,
    MarkAllReadRequest,
    MarkAllReadResponse,
    MarkAllReadUseCase,
    MarkReadRequest,
    MarkReadResponse,
    MarkReadUseCase,
    PublishEventRequest,
    PublishEventResponse,
    PublishEventUseCase,
    UnreadCountRequest,
    UnreadCountResponse,
)
from relay.domain.error import NotFoundError
from relay.domain.service import JWTService
from relay.domain.value import EventKind
from relay.interface.api.auth import require_user_id

router = APIRouter(prefix="/events", tags=["events"], route_class=DishkaRoute)


class PublishEventAPIRequest(BaseModel):
    """API request for publishing an event."""

    kind: EventKind
    recipient_ids: list[str] = Field(min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict)


@router.post(
    "",
    response_model=PublishEventResponse,
    status_code=status.HTTP_201_CREATED,
    responses={207: {"model": PublishEventResponse}},
)
async def publish_event(
    request: PublishEventAPIRequest,
    response: Response,
    publish_event_use_case: FromDishka[PublishEventUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> PublishEventResponse:
    """Publish an event to a set of recipients.

    The caller is the sender. Answers 201 when the event was stored for
    every recipient and 207 when some recipients failed; the body lists
    them so the client can tell the user or retry.
    """
    user_id = require_user_id(jwt_service, auth_token, authorization, "publish events")

    try:
        result = await publish_event_use_case.execute(
            PublishEventRequest(
                kind=request.kind,
                sender_id=user_id,
                recipient_ids=request.recipient_ids,
                payload=request.payload,
            )
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not result.ok:
        logfire.warn(
            "Event partially stored",
            event_id=result.event_id,
            failed=len(result.errors),
        )
        response.status_code = status.HTTP_207_MULTI_STATUS
    return result


@router.get("", response_model=ListEventsResponse)
async def list_events(
    list_events_use_case: FromDishka[ListEventsUseCase],
    jwt_service: FromDishka[JWTService],
    unread_only: bool = Query(default=False),
    since: datetime | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListEventsResponse:
    """List the caller's events, oldest first.

    Clients poll this, or call it after reconnecting, to catch up on
    events pushed while they were offline.
    """
    user_id = require_user_id(jwt_service, auth_token, authorization, "list events")

    return await list_events_use_case.execute(
        ListEventsRequest(
            recipient_id=user_id,
            unread_only=unread_only,
            since=since,
            limit=limit,
            offset=offset,
        )
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    get_unread_count_use_case: FromDishka[GetUnreadCountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UnreadCountResponse:
    """Get the caller's unread event count."""
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "read the unread count"
    )
    return await get_unread_count_use_case.execute(
        UnreadCountRequest(recipient_id=user_id)
    )


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    mark_all_read_use_case: FromDishka[MarkAllReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> MarkAllReadResponse:
    """Mark every event in the caller's log as read."""
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "mark events read"
    )
    return await mark_all_read_use_case.execute(
        MarkAllReadRequest(recipient_id=user_id)
    )


@router.post("/{event_id}/read", response_model=MarkReadResponse)
async def mark_read(
    event_id: str,
    mark_read_use_case: FromDishka[MarkReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> MarkReadResponse:
    """Mark one event as read. Repeating the call is harmless."""
    user_id = require_user_id(
        jwt_service, auth_token, authorization, "mark events read"
    )

    try:
        return await mark_read_use_case.execute(
            MarkReadRequest(event_id=event_id, recipient_id=user_id)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
