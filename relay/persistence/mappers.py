"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from relay.domain.model import Comment, FanoutEvent
from relay.domain.value import CommentId, EventId, EventKind, ThreadId, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        thread_id=ThreadId(_uuid(row["thread_id"])),
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        author_id=UserId(_uuid(row["author_id"])) if row.get("author_id") else None,
        content=row["content"],
        is_frozen=row["is_frozen"],
        is_deleted=row["is_deleted"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return comment.model_dump()


def row_to_event(row: Dict[str, Any]) -> FanoutEvent:
    """Convert database row to FanoutEvent domain model.

    Args:
        row: Database row as dict

    Returns:
        FanoutEvent domain model
    """
    return FanoutEvent(
        id=EventId(_uuid(row["id"])),
        kind=EventKind(row["kind"]),
        sender_id=UserId(_uuid(row["sender_id"])) if row.get("sender_id") else None,
        recipient_ids=tuple(UserId(_uuid(rid)) for rid in row["recipient_ids"]),
        payload=row.get("payload") or {},
        created_at=row["created_at"],
    )


def event_to_dict(event: FanoutEvent) -> Dict[str, Any]:
    """Convert FanoutEvent domain model to database dict.

    Args:
        event: FanoutEvent domain model

    Returns:
        Dict suitable for database insertion
    """
    data = event.model_dump()
    data["kind"] = event.kind.value
    data["recipient_ids"] = list(event.recipient_ids)
    return data
