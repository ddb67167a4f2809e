"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from relay.domain.error import (
    CommentFrozenError,
    ContentDeletedException,
    InvalidParentError,
    NotFoundError,
)
from relay.domain.repository import CommentRepository
from relay.domain.service import CommentService
from relay.domain.value import CommentId, ThreadId, UserId
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        """Top-level comment has no parent and is saved."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        thread_id = ThreadId(uuid4())
        author_id = UserId(uuid4())

        # Act
        result = await comment_service.create_comment(
            thread_id=thread_id, content="First!", author_id=author_id
        )

        # Assert
        assert result.parent_id is None
        assert result.thread_id == thread_id
        assert result.content == "First!"
        assert not result.is_frozen
        assert not result.is_deleted
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """A reply points at its parent."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread_id = ThreadId(uuid4())
        parent = await comment_service.create_comment(thread_id, "Parent")

        # Act
        reply = await comment_service.create_comment(
            thread_id, "Reply", author_id=UserId(uuid4()), parent_id=parent.id
        )

        # Assert
        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_fails(self, unit_env):
        """Parent must exist."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(InvalidParentError, match="not found"):
            await comment_service.create_comment(
                ThreadId(uuid4()), "Reply", parent_id=CommentId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_reply_across_threads_fails(self, unit_env):
        """Parent must be in the same thread."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        parent = await comment_service.create_comment(ThreadId(uuid4()), "Parent")

        # Act / Assert
        with pytest.raises(InvalidParentError, match="thread"):
            await comment_service.create_comment(
                ThreadId(uuid4()), "Reply", parent_id=parent.id
            )

    @pytest.mark.asyncio
    async def test_content_too_long_fails(self, unit_env):
        """Content is limited to 2000 characters."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValueError):
            await comment_service.create_comment(ThreadId(uuid4()), "x" * 2001)


class TestThreadTree:
    """Tests for get_thread_tree method."""

    @pytest.mark.asyncio
    async def test_tree_reflects_replies(self, unit_env):
        """Replies are nested under their parents."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread_id = ThreadId(uuid4())
        a = await comment_service.create_comment(thread_id, "A")
        b = await comment_service.create_comment(thread_id, "B")
        c = await comment_service.create_comment(thread_id, "C", parent_id=a.id)
        await comment_service.create_comment(ThreadId(uuid4()), "Elsewhere")

        # Act
        roots = await comment_service.get_thread_tree(thread_id)

        # Assert
        assert [r.comment.id for r in roots] == [a.id, b.id]
        assert [r.comment.id for r in roots[0].replies] == [c.id]

    @pytest.mark.asyncio
    async def test_soft_deleted_comment_keeps_replies_attached(self, unit_env):
        """Deleted comments stay in the tree by default."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread_id = ThreadId(uuid4())
        a = await comment_service.create_comment(thread_id, "A")
        reply = await comment_service.create_comment(thread_id, "R", parent_id=a.id)
        await comment_service.soft_delete(a.id)

        # Act
        with_deleted = await comment_service.get_thread_tree(thread_id)
        without_deleted = await comment_service.get_thread_tree(
            thread_id, include_deleted=False
        )

        # Assert
        assert with_deleted[0].comment.is_deleted
        assert [r.comment.id for r in with_deleted[0].replies] == [reply.id]
        assert [r.comment.id for r in without_deleted] == [reply.id]

    @pytest.mark.asyncio
    async def test_hard_delete_promotes_replies(self, unit_env):
        """Replies of a removed comment become roots."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        thread_id = ThreadId(uuid4())
        a = await comment_service.create_comment(thread_id, "A")
        reply = await comment_service.create_comment(thread_id, "R", parent_id=a.id)

        # Act
        await comment_service.hard_delete(a.id)
        roots = await comment_service.get_thread_tree(thread_id)

        # Assert
        assert [r.comment.id for r in roots] == [reply.id]


class TestUpdateContent:
    """Tests for update_content, freeze and delete."""

    @pytest.mark.asyncio
    async def test_update_content(self, unit_env):
        """Editable comment gets new content."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.create_comment(ThreadId(uuid4()), "Old")

        # Act
        updated = await comment_service.update_content(comment.id, "New")

        # Assert
        assert updated.content == "New"
        assert updated.updated_at >= comment.updated_at

    @pytest.mark.asyncio
    async def test_frozen_comment_cannot_change(self, unit_env):
        """Freezing locks content."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.create_comment(ThreadId(uuid4()), "Final")
        frozen = await comment_service.freeze(comment.id)

        # Act / Assert
        assert frozen.is_frozen
        with pytest.raises(CommentFrozenError):
            await comment_service.update_content(comment.id, "Changed")
        assert (await comment_service.get_comment(comment.id)).content == "Final"

    @pytest.mark.asyncio
    async def test_deleted_comment_cannot_change(self, unit_env):
        """Deleted comments reject edits."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.create_comment(ThreadId(uuid4()), "Gone")
        await comment_service.soft_delete(comment.id)

        # Act / Assert
        with pytest.raises(ContentDeletedException):
            await comment_service.update_content(comment.id, "Back")

    @pytest.mark.asyncio
    async def test_missing_comment(self, unit_env):
        """Operations on unknown IDs raise NotFoundError."""
        comment_service = await unit_env.get(CommentService)
        missing = CommentId(uuid4())

        with pytest.raises(NotFoundError):
            await comment_service.get_comment(missing)
        with pytest.raises(NotFoundError):
            await comment_service.update_content(missing, "x")
        with pytest.raises(NotFoundError):
            await comment_service.freeze(missing)
        with pytest.raises(NotFoundError):
            await comment_service.soft_delete(missing)
        with pytest.raises(NotFoundError):
            await comment_service.hard_delete(missing)
