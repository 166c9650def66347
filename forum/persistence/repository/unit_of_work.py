"""PostgreSQL implementation of UnitOfWork."""

import hashlib
from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.repository import UnitOfWork
from forum.domain.value import VoteKey
from forum.persistence.errors import store_errors


def advisory_lock_id(key: VoteKey) -> int:
    """Map a vote slot onto the signed 64-bit keyspace of advisory locks."""
    digest = hashlib.blake2b(str(key).encode(), digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=True)


class PostgresUnitOfWork(UnitOfWork):
    """PostgreSQL implementation of UnitOfWork.

    Scopes are SAVEPOINTs inside the request's session transaction, which
    the session provider commits or rolls back when the request ends.
    Per-slot exclusion uses transaction-level advisory locks, released when
    the outer transaction ends.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work with database session.

        Args:
            session: SQLAlchemy async session shared with the repositories
        """
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Open a SAVEPOINT scope."""
        with store_errors("unit_of_work.transaction"):
            async with self.session.begin_nested():
                yield

    @asynccontextmanager
    async def serialized(self, key: VoteKey) -> AsyncIterator[None]:
        """Open a SAVEPOINT scope holding the advisory lock for a vote slot."""
        lock_id = advisory_lock_id(key)
        with logfire.span("unit_of_work.serialized", key=str(key), lock_id=lock_id):
            with store_errors("unit_of_work.serialized"):
                async with self.session.begin_nested():
                    await self.session.execute(
                        select(func.pg_advisory_xact_lock(lock_id))
                    )
                    yield
