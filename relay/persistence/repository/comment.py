"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from relay.domain.model import Comment
from relay.domain.repository import CommentRepository
from relay.domain.value import CommentCriteria, CommentId
from relay.persistence.mappers import comment_to_dict, row_to_comment
from relay.persistence.tables import comments_table


def criteria_clauses(criteria: CommentCriteria) -> list[Any]:
    """Translate comment criteria into SQL where clauses."""
    clauses = [comments_table.c.thread_id == criteria.thread_id]
    if not criteria.include_deleted:
        clauses.append(comments_table.c.is_deleted.is_(False))
    if criteria.author_id is not None:
        clauses.append(comments_table.c.author_id == criteria.author_id)
    if criteria.parent_id is not None:
        clauses.append(comments_table.c.parent_id == criteria.parent_id)
    return clauses


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find(self, criteria: CommentCriteria) -> List[Comment]:
        """Find comments matching the criteria."""
        stmt = (
            select(comments_table)
            .where(*criteria_clauses(criteria))
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of an editable comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.is_frozen.is_(False))
            .where(comments_table.c.is_deleted.is_(False))
            .values(content=content, updated_at=datetime.now())
            .returning(comments_table)
        )
        return await self._update_returning(stmt)

    async def set_frozen(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment as frozen."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(is_frozen=True, updated_at=datetime.now())
            .returning(comments_table)
        )
        return await self._update_returning(stmt)

    async def set_deleted(self, comment_id: CommentId) -> Optional[Comment]:
        """Soft delete a comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(is_deleted=True, updated_at=datetime.now())
            .returning(comments_table)
        )
        return await self._update_returning(stmt)

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment (hard delete)."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def _update_returning(self, stmt) -> Optional[Comment]:
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None
        await self.session.flush()
        return row_to_comment(row._asdict())
