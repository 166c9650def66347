"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from forum.domain.error import InvalidVoteTypeError, ItemNotFoundError
from forum.domain.repository import CommentRepository, PostRepository, VoteRepository
from forum.domain.service import VoteService
from forum.domain.value import ItemKind, UserId, VoteValue
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _vote_sum(vote_repo: VoteRepository, kind: ItemKind, item_id) -> int:
    return sum(int(v.value) for v in await vote_repo.find_by_item(kind, item_id))


class TestApplyVote:
    """Tests for apply_vote."""

    @pytest.mark.asyncio
    async def test_upvote_inserts_vote_and_increments_score(self, unit_env):
        """First upvote should create a vote record and add 1 to the score."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        # Act
        score = await vote_service.apply_vote(user_id, post.id, ItemKind.POST, 1)

        # Assert
        assert score == 1
        vote = await vote_repo.find_by_user_and_item(user_id, ItemKind.POST, post.id)
        assert vote is not None
        assert vote.value == VoteValue.UP
        assert (await post_repo.find_by_id(post.id)).score == 1

    @pytest.mark.asyncio
    async def test_votes_from_several_users_track_the_sum(self, unit_env):
        """U1 up, U2 down, U1 down, U1 retract: 1, 0, -2, -1."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        u1, u2 = UserId(uuid4()), UserId(uuid4())

        # Act & Assert
        assert await vote_service.apply_vote(u1, post.id, ItemKind.POST, 1) == 1
        assert await vote_service.apply_vote(u2, post.id, ItemKind.POST, -1) == 0
        assert await vote_service.apply_vote(u1, post.id, ItemKind.POST, -1) == -2
        assert await vote_service.apply_vote(u1, post.id, ItemKind.POST, 0) == -1

        # Only U2's downvote remains
        votes = await vote_repo.find_by_item(ItemKind.POST, post.id)
        assert [(v.user_id, v.value) for v in votes] == [(u2, VoteValue.DOWN)]
        assert (await post_repo.find_by_id(post.id)).score == -1

    @pytest.mark.asyncio
    async def test_repeated_vote_is_idempotent(self, unit_env):
        """Voting the same direction twice should change nothing the second time."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        # Act
        first = await vote_service.apply_vote(user_id, post.id, ItemKind.POST, -1)
        second = await vote_service.apply_vote(user_id, post.id, ItemKind.POST, -1)

        # Assert
        assert first == second == -1
        assert len(await vote_repo.find_by_item(ItemKind.POST, post.id)) == 1

    @pytest.mark.asyncio
    async def test_up_retract_up_matches_single_up(self, unit_env):
        """Retracting and re-casting should land where a single vote does."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        # Act
        await vote_service.apply_vote(user_id, post.id, ItemKind.POST, 1)
        await vote_service.apply_vote(user_id, post.id, ItemKind.POST, 0)
        score = await vote_service.apply_vote(user_id, post.id, ItemKind.POST, 1)

        # Assert
        assert score == 1

    @pytest.mark.asyncio
    async def test_retract_without_vote_returns_current_score(self, unit_env):
        """Retracting a vote that does not exist should be a no-op."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act
        score = await vote_service.apply_vote(
            UserId(uuid4()), post.id, ItemKind.POST, 0
        )

        # Assert
        assert score == 0

    @pytest.mark.asyncio
    async def test_invalid_vote_type_mutates_nothing(self, unit_env):
        """A vote type of 2 should be rejected before touching the stores."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        # Act & Assert
        with pytest.raises(InvalidVoteTypeError):
            await vote_service.apply_vote(user_id, post.id, ItemKind.POST, 2)

        assert await vote_repo.find_by_user(user_id) == []
        assert (await post_repo.find_by_id(post.id)).score == 0

    @pytest.mark.asyncio
    async def test_invalid_vote_type_wins_over_missing_item(self, unit_env):
        """The vote type is validated before the item is looked up."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(InvalidVoteTypeError):
            await vote_service.apply_vote(UserId(uuid4()), uuid4(), ItemKind.POST, 5)

    @pytest.mark.asyncio
    async def test_vote_on_missing_item_raises_not_found(self, unit_env):
        """Voting on an item that does not exist should raise ItemNotFoundError."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        user_id = UserId(uuid4())
        item_id = uuid4()

        # Act & Assert
        with pytest.raises(ItemNotFoundError) as exc_info:
            await vote_service.apply_vote(user_id, item_id, ItemKind.COMMENT, 1)

        assert exc_info.value.item_kind == "comment"
        assert exc_info.value.identifier == str(item_id)
        assert await vote_repo.find_by_user(user_id) == []

    @pytest.mark.asyncio
    async def test_comment_votes_update_comment_score(self, unit_env):
        """Comment votes should go to the comment ledger, not the post's."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        comment = await comment_repo.save(make_comment(post.id))

        # Act
        for _ in range(3):
            await vote_service.apply_vote(
                UserId(uuid4()), comment.id, ItemKind.COMMENT, -1
            )

        # Assert
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.score == -3
        assert stored.score == await _vote_sum(vote_repo, ItemKind.COMMENT, comment.id)
        assert (await post_repo.find_by_id(post.id)).score == 0


class TestSeedAuthorVote:
    """Tests for seed_author_vote."""

    @pytest.mark.asyncio
    async def test_seed_author_vote_records_real_upvote(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act
        score = await vote_service.seed_author_vote(
            post.author_id, ItemKind.POST, post.id
        )

        # Assert
        assert score == 1
        vote = await vote_repo.find_by_user_and_item(
            post.author_id, ItemKind.POST, post.id
        )
        assert vote.value == VoteValue.UP


class TestUserVotes:
    """Tests for the per-user vote lookups."""

    @pytest.mark.asyncio
    async def test_get_user_votes_maps_missing_votes_to_zero(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        up, down, untouched = [await post_repo.save(make_post()) for _ in range(3)]
        user_id = UserId(uuid4())
        await vote_service.apply_vote(user_id, up.id, ItemKind.POST, 1)
        await vote_service.apply_vote(user_id, down.id, ItemKind.POST, -1)

        # Act
        votes = await vote_service.get_user_votes(
            user_id, ItemKind.POST, [up.id, down.id, untouched.id]
        )

        # Assert
        assert votes == {up.id: 1, down.id: -1, untouched.id: 0}

    @pytest.mark.asyncio
    async def test_get_user_votes_with_no_items_returns_empty(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        votes = await vote_service.get_user_votes(UserId(uuid4()), ItemKind.POST, [])

        assert votes == {}

    @pytest.mark.asyncio
    async def test_get_user_vote_and_votes_by_user(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        # Act
        before = await vote_service.get_user_vote(user_id, ItemKind.POST, post.id)
        await vote_service.apply_vote(user_id, post.id, ItemKind.POST, -1)
        after = await vote_service.get_user_vote(user_id, ItemKind.POST, post.id)

        # Assert
        assert (before, after) == (0, -1)
        votes = await vote_service.get_votes_by_user(user_id)
        assert [v.item_id for v in votes] == [post.id]
