"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from relay.domain.model.comment import Comment
from relay.domain.value import CommentCriteria, CommentId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find(self, criteria: CommentCriteria) -> List[Comment]:
        """Find comments matching the criteria.

        Order is not guaranteed; callers that need reply order build a
        tree from the result.

        Args:
            criteria: Thread and optional author/parent filters

        Returns:
            Matching comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of an editable comment.

        Frozen and deleted comments are left untouched.

        Args:
            comment_id: Comment ID
            content: New content

        Returns:
            Updated comment, or None if missing, frozen or deleted
        """
        pass

    @abstractmethod
    async def set_frozen(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment as frozen.

        Returns:
            Updated comment, or None if not found
        """
        pass

    @abstractmethod
    async def set_deleted(self, comment_id: CommentId) -> Optional[Comment]:
        """Soft delete a comment.

        Returns:
            Updated comment, or None if not found
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment (hard delete).

        Replies are kept and will surface as roots in the tree.

        Returns:
            True if a comment was removed
        """
        pass
