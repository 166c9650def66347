"""Integration tests for concurrent requests against PostgreSQL.

Each request runs in its own request container, and so its own session
and transaction, which commits when the container closes. Events hold a
transaction open so the test can check that another one waits on it.

Require a migrated database at DATABASE__URL; run with ``pytest -m integration``.
"""

import asyncio
from uuid import uuid4

import pytest
import pytest_asyncio

from forum.domain.error import ItemNotFoundError
from forum.domain.repository import PostRepository, VoteRepository
from forum.domain.service import ContentService, VoteService
from forum.domain.value import ItemKind, UserId, VoteValue
from tests.di import build_test_container

pytestmark = pytest.mark.integration

# Long enough for a statement that is not blocked to finish
BLOCKED_FOR = 0.3


@pytest_asyncio.fixture
async def pg_container():
    container = build_test_container(unmock={"persistence"})
    yield container
    await container.close()


async def run_request(container, work):
    """Run work in its own request and commit."""
    async with container() as env:
        return await work(env)


async def hold_request(container, work, done: asyncio.Event, release: asyncio.Event):
    """Run work in its own request, then keep the transaction open until released."""
    async with container() as env:
        result = await work(env)
        done.set()
        await release.wait()
    return result


async def still_blocked(task: asyncio.Task) -> bool:
    finished, _ = await asyncio.wait({task}, timeout=BLOCKED_FOR)
    return not finished


async def seed_thread(container):
    """Commit a post with one comment; return (author_id, post, comment)."""
    author_id = UserId(uuid4())

    async def work(env):
        content_service = await env.get(ContentService)
        post = await content_service.create_post(author_id, "Race", "test")
        comment = await content_service.create_comment(
            post.id, UserId(uuid4()), "Child"
        )
        return post, comment

    post, comment = await run_request(container, work)
    return author_id, post, comment


async def votes_on(container, item_kind: ItemKind, item_id):
    async def work(env):
        vote_repo = await env.get(VoteRepository)
        return await vote_repo.find_by_item(item_kind, item_id)

    return await run_request(container, work)


class TestVoteAgainstDelete:
    @pytest.mark.asyncio
    async def test_delete_waits_for_open_vote_on_child_comment(self, pg_container):
        """A vote committed mid-cascade is still removed with the comment."""
        # Arrange
        author_id, post, comment = await seed_thread(pg_container)
        voted, release = asyncio.Event(), asyncio.Event()

        async def vote(env):
            vote_service = await env.get(VoteService)
            return await vote_service.apply_vote(
                UserId(uuid4()), comment.id, ItemKind.COMMENT, 1
            )

        async def delete(env):
            content_service = await env.get(ContentService)
            return await content_service.delete_post(post.id, author_id)

        # Act
        voter = asyncio.create_task(hold_request(pg_container, vote, voted, release))
        try:
            await asyncio.wait_for(voted.wait(), timeout=5)
            deleter = asyncio.create_task(run_request(pg_container, delete))
            blocked = await still_blocked(deleter)
        finally:
            release.set()
        score = await voter
        removed = await deleter

        # Assert
        assert blocked
        assert score == 2
        assert removed == 3
        assert await votes_on(pg_container, ItemKind.COMMENT, comment.id) == []

    @pytest.mark.asyncio
    async def test_vote_on_comment_being_deleted_fails(self, pg_container):
        """A vote that waits on an open cascade finds the comment gone."""
        # Arrange
        author_id, post, comment = await seed_thread(pg_container)
        deleted, release = asyncio.Event(), asyncio.Event()

        async def delete(env):
            content_service = await env.get(ContentService)
            return await content_service.delete_post(post.id, author_id)

        async def vote(env):
            vote_service = await env.get(VoteService)
            return await vote_service.apply_vote(
                UserId(uuid4()), comment.id, ItemKind.COMMENT, 1
            )

        # Act
        deleter = asyncio.create_task(
            hold_request(pg_container, delete, deleted, release)
        )
        try:
            await asyncio.wait_for(deleted.wait(), timeout=5)
            voter = asyncio.create_task(run_request(pg_container, vote))
            blocked = await still_blocked(voter)
        finally:
            release.set()
        removed = await deleter

        # Assert
        assert blocked
        assert removed == 2
        with pytest.raises(ItemNotFoundError):
            await voter
        assert await votes_on(pg_container, ItemKind.COMMENT, comment.id) == []

    @pytest.mark.asyncio
    async def test_comment_delete_waits_for_open_vote_on_reply(self, pg_container):
        # Arrange
        _, post, comment = await seed_thread(pg_container)

        async def add_reply(env):
            content_service = await env.get(ContentService)
            return await content_service.create_comment(
                post.id, UserId(uuid4()), "Reply", parent_id=comment.id
            )

        reply = await run_request(pg_container, add_reply)
        voted, release = asyncio.Event(), asyncio.Event()

        async def vote(env):
            vote_service = await env.get(VoteService)
            return await vote_service.apply_vote(
                UserId(uuid4()), reply.id, ItemKind.COMMENT, -1
            )

        async def delete(env):
            content_service = await env.get(ContentService)
            return await content_service.delete_comment(comment.id, comment.author_id)

        # Act
        voter = asyncio.create_task(hold_request(pg_container, vote, voted, release))
        try:
            await asyncio.wait_for(voted.wait(), timeout=5)
            deleter = asyncio.create_task(run_request(pg_container, delete))
            blocked = await still_blocked(deleter)
        finally:
            release.set()
        await voter
        removed = await deleter

        # Assert
        assert blocked
        assert removed == 3
        assert await votes_on(pg_container, ItemKind.COMMENT, reply.id) == []


class TestSerializedVotes:
    @pytest.mark.asyncio
    async def test_same_slot_waits_for_advisory_lock(self, pg_container):
        """Two sessions voting for one user and item run one after the other."""
        # Arrange
        author_id, post, _ = await seed_thread(pg_container)
        voter_id = UserId(uuid4())
        first_done, release = asyncio.Event(), asyncio.Event()

        def vote_with(value: int):
            async def work(env):
                vote_service = await env.get(VoteService)
                return await vote_service.apply_vote(
                    voter_id, post.id, ItemKind.POST, value
                )

            return work

        # Act
        first = asyncio.create_task(
            hold_request(pg_container, vote_with(1), first_done, release)
        )
        try:
            await asyncio.wait_for(first_done.wait(), timeout=5)
            second = asyncio.create_task(run_request(pg_container, vote_with(-1)))
            blocked = await still_blocked(second)
        finally:
            release.set()
        first_score = await first
        second_score = await second

        # Assert
        assert blocked
        assert first_score == 2
        assert second_score == 0
        votes = await votes_on(pg_container, ItemKind.POST, post.id)
        assert sorted((v.user_id == voter_id, v.value) for v in votes) == [
            (False, VoteValue.UP),
            (True, VoteValue.DOWN),
        ]

        async def read_post(env):
            post_repo = await env.get(PostRepository)
            return await post_repo.find_by_id(post.id)

        stored = await run_request(pg_container, read_post)
        assert stored.score == sum(int(v.value) for v in votes)
        assert author_id in {v.user_id for v in votes}
