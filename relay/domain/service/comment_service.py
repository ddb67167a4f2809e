"""Comment domain service."""

import logfire
from datetime import datetime
from uuid import uuid4

from relay.domain.error import (
    CommentFrozenError,
    ContentDeletedException,
    InvalidParentError,
    NotFoundError,
)
from relay.domain.model.comment import Comment
from relay.domain.repository import CommentRepository
from relay.domain.value import CommentCriteria, CommentId, ThreadId, UserId

from .base import Service
from .comment_tree import CommentNode, build_tree


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        thread_id: ThreadId,
        content: str,
        author_id: UserId | None = None,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment in a thread or reply to another comment.

        Args:
            thread_id: Thread ID
            content: Comment content
            author_id: Author user ID (None for system comments)
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            InvalidParentError: If parent comment missing or in another thread
        """
        with logfire.span(
            "comment_service.create_comment",
            thread_id=str(thread_id),
            author_id=str(author_id) if author_id else None,
            parent_id=str(parent_id) if parent_id else None,
        ):
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        thread_id=str(thread_id),
                    )
                    raise InvalidParentError("Parent comment not found")
                if parent.thread_id != thread_id:
                    logfire.error(
                        "Parent comment does not belong to thread",
                        parent_id=str(parent_id),
                        parent_thread_id=str(parent.thread_id),
                        target_thread_id=str(thread_id),
                    )
                    raise InvalidParentError(
                        "Parent comment does not belong to this thread"
                    )

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                thread_id=thread_id,
                parent_id=parent_id,
                author_id=author_id,
                content=content,
                is_frozen=False,
                is_deleted=False,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                thread_id=str(thread_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment entity

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def get_thread_comments(
        self, thread_id: ThreadId, include_deleted: bool = True
    ) -> list[Comment]:
        """Get the flat comment records of a thread.

        Args:
            thread_id: Thread ID
            include_deleted: Whether to include soft-deleted comments

        Returns:
            Comments in no particular order
        """
        with logfire.span(
            "comment_service.get_thread_comments",
            thread_id=str(thread_id),
            include_deleted=include_deleted,
        ):
            comments = await self.comment_repository.find(
                CommentCriteria(thread_id=thread_id, include_deleted=include_deleted)
            )
            logfire.info(
                "Comments retrieved for thread",
                thread_id=str(thread_id),
                count=len(comments),
            )
            return comments

    async def get_thread_tree(
        self, thread_id: ThreadId, include_deleted: bool = True
    ) -> list[CommentNode]:
        """Get the reply forest of a thread.

        Deleted comments are included by default so that their replies
        keep their position; the caller decides how to render them.

        Args:
            thread_id: Thread ID
            include_deleted: Whether to include soft-deleted comments

        Returns:
            Root nodes in creation order
        """
        with logfire.span(
            "comment_service.get_thread_tree",
            thread_id=str(thread_id),
            include_deleted=include_deleted,
        ):
            comments = await self.get_thread_comments(thread_id, include_deleted)
            roots = build_tree(comments)
            logfire.info(
                "Comment tree built",
                thread_id=str(thread_id),
                comments=len(comments),
                roots=len(roots),
            )
            return roots

    async def update_content(self, comment_id: CommentId, content: str) -> Comment:
        """Update the content of a comment.

        Args:
            comment_id: Comment ID
            content: New content

        Returns:
            Updated comment

        Raises:
            NotFoundError: If comment not found
            ContentDeletedException: If comment is soft-deleted
            CommentFrozenError: If comment is frozen
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment_id),
            content_length=len(content),
        ):
            comment = await self.get_comment(comment_id)
            self._ensure_editable(comment)

            updated = await self.comment_repository.update_content(
                comment_id, content
            )
            if updated is None:
                # Frozen, deleted or removed since the read above
                current = await self.get_comment(comment_id)
                self._ensure_editable(current)
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment content updated",
                comment_id=str(comment_id),
                thread_id=str(updated.thread_id),
            )
            return updated

    async def freeze(self, comment_id: CommentId) -> Comment:
        """Freeze a comment so its content can no longer change.

        Freezing an already frozen comment is a no-op.

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span("comment_service.freeze", comment_id=str(comment_id)):
            frozen = await self.comment_repository.set_frozen(comment_id)
            if frozen is None:
                logfire.warn("Comment not found for freeze", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            logfire.info("Comment frozen", comment_id=str(comment_id))
            return frozen

    async def soft_delete(self, comment_id: CommentId) -> Comment:
        """Mark a comment as deleted, keeping it for tree reconstruction.

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span("comment_service.soft_delete", comment_id=str(comment_id)):
            deleted = await self.comment_repository.set_deleted(comment_id)
            if deleted is None:
                logfire.warn(
                    "Comment not found for soft delete", comment_id=str(comment_id)
                )
                raise NotFoundError("Comment", str(comment_id))
            logfire.info("Comment soft deleted", comment_id=str(comment_id))
            return deleted

    async def hard_delete(self, comment_id: CommentId) -> None:
        """Remove a comment permanently.

        Replies are not removed; they become roots of the thread's tree.

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span("comment_service.hard_delete", comment_id=str(comment_id)):
            removed = await self.comment_repository.delete(comment_id)
            if not removed:
                logfire.warn(
                    "Comment not found for hard delete", comment_id=str(comment_id)
                )
                raise NotFoundError("Comment", str(comment_id))
            logfire.info("Comment hard deleted", comment_id=str(comment_id))

    @staticmethod
    def _ensure_editable(comment: Comment) -> None:
        if comment.is_deleted:
            logfire.warn("Attempt to edit deleted comment", comment_id=str(comment.id))
            raise ContentDeletedException("comment", str(comment.id))
        if comment.is_frozen:
            logfire.warn("Attempt to edit frozen comment", comment_id=str(comment.id))
            raise CommentFrozenError(str(comment.id))
