"""In-memory unit of work for testing."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator
from weakref import WeakValueDictionary

from forum.domain.repository.unit_of_work import UnitOfWork
from forum.domain.value import VoteKey

from .journal import undo_scope


class InMemoryUnitOfWork(UnitOfWork):
    """In-memory implementation of UnitOfWork for testing.

    Atomicity comes from the undo journal. Serialization uses one
    asyncio.Lock per vote slot, so the instance must be shared by every
    request that touches the same repositories. A slot's lock lives only
    while some task holds or awaits it.
    """

    def __init__(self) -> None:
        self._locks: WeakValueDictionary[VoteKey, asyncio.Lock] = (
            WeakValueDictionary()
        )

    def _lock_for(self, key: VoteKey) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Open an atomic scope."""
        with undo_scope():
            yield

    @asynccontextmanager
    async def serialized(self, key: VoteKey) -> AsyncIterator[None]:
        """Open an atomic scope exclusive for one vote slot."""
        lock = self._lock_for(key)
        async with lock:
            with undo_scope():
                yield
