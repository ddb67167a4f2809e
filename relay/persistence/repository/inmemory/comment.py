"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from relay.domain.model.comment import Comment
from relay.domain.repository.comment import CommentRepository
from relay.domain.value import CommentCriteria, CommentId


def matches(comment: Comment, criteria: CommentCriteria) -> bool:
    """Check a comment against criteria."""
    if comment.thread_id != criteria.thread_id:
        return False
    if not criteria.include_deleted and comment.is_deleted:
        return False
    if criteria.author_id is not None and comment.author_id != criteria.author_id:
        return False
    if criteria.parent_id is not None and comment.parent_id != criteria.parent_id:
        return False
    return True


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find(self, criteria: CommentCriteria) -> list[Comment]:
        """Find comments matching the criteria, in insertion order."""
        return [c for c in self._comments.values() if matches(c, criteria)]

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of an editable comment."""
        comment = self._comments.get(comment_id)
        if comment is None or not comment.is_editable():
            return None
        return self._replace(comment, content=content)

    async def set_frozen(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment as frozen."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        return self._replace(comment, is_frozen=True)

    async def set_deleted(self, comment_id: CommentId) -> Optional[Comment]:
        """Soft delete a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        return self._replace(comment, is_deleted=True)

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment."""
        return self._comments.pop(comment_id, None) is not None

    def _replace(self, comment: Comment, **changes) -> Comment:
        # Comments are immutable, store an updated copy
        updated = comment.model_copy(update={**changes, "updated_at": datetime.now()})
        self._comments[comment.id] = updated
        return updated
