"""Test data builders."""

from datetime import datetime, timedelta
from uuid import uuid4

from relay.config import AuthSettings
from relay.domain.model import Comment, FanoutEvent
from relay.domain.value import CommentId, EventId, EventKind, ThreadId, UserId
from relay.util.jwt import create_token

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def make_comment(
    thread_id: ThreadId,
    minute: int,
    parent_id: CommentId | None = None,
    comment_id: CommentId | None = None,
    content: str = "A comment",
    author_id: UserId | None = None,
    is_frozen: bool = False,
    is_deleted: bool = False,
) -> Comment:
    """Build a comment created ``minute`` minutes after a fixed base time."""
    created_at = BASE_TIME + timedelta(minutes=minute)
    return Comment(
        id=comment_id or CommentId(uuid4()),
        thread_id=thread_id,
        parent_id=parent_id,
        author_id=author_id or UserId(uuid4()),
        content=content,
        is_frozen=is_frozen,
        is_deleted=is_deleted,
        created_at=created_at,
        updated_at=created_at,
    )


def make_event(
    recipient_ids: list[UserId],
    kind: EventKind = EventKind.TASK_ASSIGNED,
    sender_id: UserId | None = None,
    minute: int = 0,
    payload: dict | None = None,
) -> FanoutEvent:
    """Build an event created ``minute`` minutes after a fixed base time."""
    return FanoutEvent(
        id=EventId(uuid4()),
        kind=kind,
        sender_id=sender_id,
        recipient_ids=tuple(recipient_ids),
        payload=payload or {"task_id": "T1"},
        created_at=BASE_TIME + timedelta(minutes=minute),
    )


def auth_headers(user_id: UserId) -> dict[str, str]:
    """Bearer header carrying a valid token for a user, signed with default settings."""
    return {"Authorization": f"Bearer {user_token(user_id)}"}


def user_token(user_id: UserId) -> str:
    """Valid token for a user, signed with default settings."""
    return create_token(str(user_id), AuthSettings())
