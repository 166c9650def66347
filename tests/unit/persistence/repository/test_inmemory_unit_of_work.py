"""Unit tests for the in-memory unit of work and its undo journal."""

import asyncio
import gc
from uuid import uuid4

import pytest

from forum.domain.value import ItemKind, UserId, VoteKey
from forum.persistence.repository.inmemory import (
    InMemoryPostRepository,
    InMemoryUnitOfWork,
)
from tests.conftest import make_post


class Boom(Exception):
    pass


def make_key() -> VoteKey:
    return VoteKey(user_id=UserId(uuid4()), item_kind=ItemKind.POST, item_id=uuid4())


class TestTransaction:
    @pytest.mark.asyncio
    async def test_failed_scope_reverts_mutations(self):
        # Arrange
        uow = InMemoryUnitOfWork()
        post_repo = InMemoryPostRepository()
        kept = await post_repo.save(make_post())

        # Act
        with pytest.raises(Boom):
            async with uow.transaction():
                created = await post_repo.save(make_post())
                await post_repo.increment_score(kept.id, 5)
                await post_repo.delete(kept.id)
                raise Boom()

        # Assert
        assert await post_repo.find_by_id(created.id) is None
        restored = await post_repo.find_by_id(kept.id)
        assert restored is not None
        assert restored.score == 0

    @pytest.mark.asyncio
    async def test_successful_scope_keeps_mutations(self):
        uow = InMemoryUnitOfWork()
        post_repo = InMemoryPostRepository()

        async with uow.transaction():
            post = await post_repo.save(make_post())

        assert await post_repo.find_by_id(post.id) is not None

    @pytest.mark.asyncio
    async def test_outer_failure_reverts_committed_inner_scope(self):
        """An inner scope that succeeded is still undone by its parent."""
        # Arrange
        uow = InMemoryUnitOfWork()
        post_repo = InMemoryPostRepository()

        # Act
        with pytest.raises(Boom):
            async with uow.transaction():
                async with uow.serialized(make_key()):
                    post = await post_repo.save(make_post())
                raise Boom()

        # Assert
        assert await post_repo.find_by_id(post.id) is None

    @pytest.mark.asyncio
    async def test_inner_failure_leaves_outer_mutations(self):
        # Arrange
        uow = InMemoryUnitOfWork()
        post_repo = InMemoryPostRepository()

        # Act
        async with uow.transaction():
            outer = await post_repo.save(make_post())
            with pytest.raises(Boom):
                async with uow.transaction():
                    inner = await post_repo.save(make_post())
                    raise Boom()

        # Assert
        assert await post_repo.find_by_id(outer.id) is not None
        assert await post_repo.find_by_id(inner.id) is None


class TestSerialized:
    @pytest.mark.asyncio
    async def test_same_key_scopes_do_not_overlap(self):
        # Arrange
        uow = InMemoryUnitOfWork()
        key = make_key()
        events: list[str] = []

        async def worker(name: str) -> None:
            async with uow.serialized(key):
                events.append(f"{name}:enter")
                await asyncio.sleep(0)
                events.append(f"{name}:exit")

        # Act
        await asyncio.gather(worker("a"), worker("b"))

        # Assert
        assert events == ["a:enter", "a:exit", "b:enter", "b:exit"]

    @pytest.mark.asyncio
    async def test_different_keys_run_concurrently(self):
        # Arrange
        uow = InMemoryUnitOfWork()
        both_inside = asyncio.Event()
        inside = 0

        async def worker() -> None:
            nonlocal inside
            async with uow.serialized(make_key()):
                inside += 1
                if inside == 2:
                    both_inside.set()
                await asyncio.wait_for(both_inside.wait(), timeout=1)

        # Act & Assert
        await asyncio.gather(worker(), worker())
        assert both_inside.is_set()

    @pytest.mark.asyncio
    async def test_equal_keys_share_a_lock(self):
        """Keys are compared by value, not identity."""
        # Arrange
        uow = InMemoryUnitOfWork()
        user_id, item_id = UserId(uuid4()), uuid4()
        events: list[str] = []

        async def worker(name: str) -> None:
            key = VoteKey(user_id=user_id, item_kind=ItemKind.POST, item_id=item_id)
            async with uow.serialized(key):
                events.append(f"{name}:enter")
                await asyncio.sleep(0)
                events.append(f"{name}:exit")

        # Act
        await asyncio.gather(worker("a"), worker("b"))

        # Assert
        assert events == ["a:enter", "a:exit", "b:enter", "b:exit"]

    @pytest.mark.asyncio
    async def test_locks_are_released_after_use(self):
        """Per-slot locks do not outlive the scopes that use them."""
        # Arrange
        uow = InMemoryUnitOfWork()
        key = make_key()
        held_while_busy: list[bool] = []

        async def worker() -> None:
            async with uow.serialized(key):
                held_while_busy.append(key in uow._locks)
                await asyncio.sleep(0)

        # Act
        await asyncio.gather(worker(), worker())
        for _ in range(50):
            async with uow.serialized(make_key()):
                pass
        gc.collect()

        # Assert
        assert held_while_busy == [True, True]
        assert len(uow._locks) == 0
