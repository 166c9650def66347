"""PostgreSQL implementation of Post repository."""

from typing import List, Optional, Sequence

import logfire
from sqlalchemy import desc, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import ItemNotFoundError
from forum.domain.model import Post
from forum.domain.repository import PostRepository
from forum.domain.value import ItemKind, PostId, UserId
from forum.persistence.errors import store_errors
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            with store_errors("post_repository.find_by_id"):
                result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> List[Post]:
        """Find several posts by ID."""
        if not post_ids:
            return []

        stmt = select(posts_table).where(posts_table.c.id.in_(post_ids))
        with store_errors("post_repository.find_by_ids"):
            result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def find_for_update(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID and lock its row until the transaction ends."""
        with logfire.span("post_repository.find_for_update", post_id=str(post_id)):
            stmt = (
                select(posts_table).where(posts_table.c.id == post_id).with_for_update()
            )
            with store_errors("post_repository.find_for_update"):
                result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def find_recent(
        self, community: Optional[str] = None, limit: int = 10, offset: int = 0
    ) -> List[Post]:
        """Find posts newest first, optionally within one community."""
        with logfire.span(
            "post_repository.find_recent",
            community=community,
            limit=limit,
            offset=offset,
        ):
            stmt = select(posts_table)
            if community:
                stmt = stmt.where(posts_table.c.community == community)
            stmt = (
                stmt.order_by(desc(posts_table.c.created_at), desc(posts_table.c.id))
                .limit(limit)
                .offset(offset)
            )
            with store_errors("post_repository.find_recent"):
                result = await self.session.execute(stmt)
            return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def count(self, community: Optional[str] = None) -> int:
        """Count posts, optionally within one community."""
        stmt = select(func.count()).select_from(posts_table)
        if community:
            stmt = stmt.where(posts_table.c.community == community)
        with store_errors("post_repository.count"):
            result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_author(self, author_id: UserId) -> List[Post]:
        """Find all posts by an author, newest first."""
        stmt = (
            select(posts_table)
            .where(posts_table.c.author_id == author_id)
            .order_by(desc(posts_table.c.created_at), desc(posts_table.c.id))
        )
        with store_errors("post_repository.find_by_author"):
            result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        The score column is left untouched on update; it only changes
        through increment_score.
        """
        with logfire.span("post_repository.save", post_id=str(post.id)):
            post_dict = post_to_dict(post)
            stmt = insert(posts_table).values(**post_dict)
            stmt = stmt.on_conflict_do_update(
                index_elements=[posts_table.c.id],
                set_={
                    "title": stmt.excluded.title,
                    "content": stmt.excluded.content,
                    "community": stmt.excluded.community,
                },
            )
            with store_errors("post_repository.save"):
                await self.session.execute(stmt)
                await self.session.flush()
            return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post row."""
        stmt = posts_table.delete().where(posts_table.c.id == post_id)
        with store_errors("post_repository.delete"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def increment_score(self, post_id: PostId, delta: int) -> int:
        """Atomically add delta to the score and return the new value."""
        stmt = (
            posts_table.update()
            .where(posts_table.c.id == post_id)
            .values(score=posts_table.c.score + delta)
            .returning(posts_table.c.score)
        )
        with store_errors("post_repository.increment_score"):
            result = await self.session.execute(stmt)
        score = result.scalar_one_or_none()
        if score is None:
            raise ItemNotFoundError(ItemKind.POST.value, str(post_id))
        return score
