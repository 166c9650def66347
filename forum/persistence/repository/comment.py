"""PostgreSQL implementation of Comment repository."""

from typing import Dict, List, Optional, Sequence

import logfire
from sqlalchemy import desc, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import ItemNotFoundError
from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, ItemKind, PostId, UserId
from forum.persistence.errors import store_errors
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.tables import comments_table


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
        with store_errors("comment_repository.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID and lock its row until the transaction ends."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .with_for_update()
        )
        with store_errors("comment_repository.find_for_update"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_for_update_many(
        self, comment_ids: Sequence[CommentId]
    ) -> List[Comment]:
        """Find comments by ID and lock their rows in ID order."""
        if not comment_ids:
            return []

        with logfire.span(
            "comment_repository.find_for_update_many", count=len(comment_ids)
        ):
            stmt = (
                select(comments_table)
                .where(comments_table.c.id.in_(comment_ids))
                .order_by(comments_table.c.id)
                .with_for_update()
            )
            with store_errors("comment_repository.find_for_update_many"):
                result = await self.session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, newest first."""
        with logfire.span("comment_repository.find_by_post", post_id=str(post_id)):
            stmt = (
                select(comments_table)
                .where(comments_table.c.post_id == post_id)
                .order_by(desc(comments_table.c.created_at))
            )
            with store_errors("comment_repository.find_by_post"):
                result = await self.session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Count comments per post with one grouped query."""
        if not post_ids:
            return {}

        stmt = (
            select(comments_table.c.post_id, func.count())
            .where(comments_table.c.post_id.in_(post_ids))
            .group_by(comments_table.c.post_id)
        )
        with store_errors("comment_repository.count_by_posts"):
            result = await self.session.execute(stmt)
        return {PostId(row[0]): row[1] for row in result.fetchall()}

    async def find_by_author(self, author_id: UserId) -> List[Comment]:
        """Find all comments by an author, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.author_id == author_id)
            .order_by(desc(comments_table.c.created_at))
        )
        with store_errors("comment_repository.find_by_author"):
            result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        The score column is left untouched on update.
        """
        with logfire.span("comment_repository.save", comment_id=str(comment.id)):
            stmt = insert(comments_table).values(**comment_to_dict(comment))
            stmt = stmt.on_conflict_do_update(
                index_elements=[comments_table.c.id],
                set_={"content": stmt.excluded.content},
            )
            try:
                with store_errors("comment_repository.save"):
                    await self.session.execute(stmt)
                    await self.session.flush()
            except IntegrityError as e:
                # The post or parent comment was deleted by another request
                logfire.warn("Comment foreign key violated", comment_id=str(comment.id))
                if comment.parent_id is not None and "parent_id" in str(e.orig):
                    raise ItemNotFoundError(
                        ItemKind.COMMENT.value, str(comment.parent_id)
                    ) from e
                post_id = str(comment.post_id)
                raise ItemNotFoundError(ItemKind.POST.value, post_id) from e
            return comment

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments by ID."""
        if not comment_ids:
            return 0

        stmt = comments_table.delete().where(comments_table.c.id.in_(comment_ids))
        with store_errors("comment_repository.delete_many"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def increment_score(self, comment_id: CommentId, delta: int) -> int:
        """Atomically add delta to the score and return the new value."""
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(score=comments_table.c.score + delta)
            .returning(comments_table.c.score)
        )
        with store_errors("comment_repository.increment_score"):
            result = await self.session.execute(stmt)
        score = result.scalar_one_or_none()
        if score is None:
            raise ItemNotFoundError(ItemKind.COMMENT.value, str(comment_id))
        return score
