"""Comment entity.

Comments are stored flat, one record per comment, with an optional
parent reference. Reply trees are rebuilt on read by the tree builder.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from relay.domain.model.common import DomainModel
from relay.domain.value import CommentId, ThreadId, UserId

MAX_CONTENT_LENGTH = 2000


class Comment(DomainModel):
    """Comment entity.

    Represents a comment in a thread (a post, a task discussion or a chat).

    Threading is managed through:
    - thread_id: Owning thread, never changes
    - parent_id: Direct parent comment (None for top-level)

    A frozen comment keeps its content forever. A deleted comment stays
    queryable so that replies keep their place in the tree.
    """

    id: CommentId
    thread_id: ThreadId
    parent_id: Optional[CommentId] = None
    author_id: Optional[UserId] = None
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    is_frozen: bool = False
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def is_editable(self) -> bool:
        """Check whether the content may still change."""
        return not self.is_frozen and not self.is_deleted
