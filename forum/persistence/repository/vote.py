"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import DuplicateVoteError
from forum.domain.model import Vote
from forum.domain.repository import VoteRepository
from forum.domain.value import ItemKind, UserId, VoteValue
from forum.persistence.errors import store_errors
from forum.persistence.mappers import row_to_vote, vote_to_dict
from forum.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_item(
        self,
        user_id: UserId,
        item_kind: ItemKind,
        item_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.item_kind == item_kind.value,
                votes_table.c.item_id == item_id,
            )
        )
        with store_errors("vote_repository.find_by_user_and_item"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_items(
        self,
        user_id: UserId,
        item_kind: ItemKind,
        item_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not item_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.item_kind == item_kind.value,
                votes_table.c.item_id.in_(item_ids),
            )
        )
        with store_errors("vote_repository.find_by_user_and_items"):
            result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_item(self, item_kind: ItemKind, item_id: UUID) -> List[Vote]:
        """Find all votes on an item."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.item_kind == item_kind.value,
                votes_table.c.item_id == item_id,
            )
        )
        with store_errors("vote_repository.find_by_item"):
            result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_user(self, user_id: UserId) -> List[Vote]:
        """Find all votes by a user."""
        stmt = select(votes_table).where(votes_table.c.user_id == user_id)
        with store_errors("vote_repository.find_by_user"):
            result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        A unique violation on (user_id, item_kind, item_id) means another
        request inserted a vote for the same slot first.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        try:
            with store_errors("vote_repository.save"):
                await self.session.execute(stmt)
                await self.session.flush()
        except IntegrityError as e:
            logfire.warn("Vote unique constraint violated", key=str(vote.key))
            raise DuplicateVoteError(str(vote.key)) from e
        return vote

    async def update_value(self, vote: Vote, value: VoteValue) -> Vote:
        """Change the value of a vote."""
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote.id)
            .values(value=int(value))
        )
        with store_errors("vote_repository.update_value"):
            await self.session.execute(stmt)
            await self.session.flush()
        return vote.model_copy(update={"value": value})

    async def delete(self, vote: Vote) -> None:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote.id)
        with store_errors("vote_repository.delete"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def delete_by_items(
        self, item_kind: ItemKind, item_ids: Sequence[UUID]
    ) -> int:
        """Delete every vote on the given items."""
        if not item_ids:
            return 0

        stmt = delete(votes_table).where(
            and_(
                votes_table.c.item_kind == item_kind.value,
                votes_table.c.item_id.in_(item_ids),
            )
        )
        with store_errors("vote_repository.delete_by_items"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
