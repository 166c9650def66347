"""Unit tests for KarmaService."""

from uuid import uuid4

import pytest

from forum.domain.service import ContentService, KarmaService, VoteService
from forum.domain.value import ItemKind, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_karma_of_unknown_user_is_zero(unit_env):
    karma_service = await unit_env.get(KarmaService)

    assert await karma_service.karma(UserId(uuid4())) == 0


@pytest.mark.asyncio
async def test_karma_sums_post_and_comment_scores(unit_env):
    """Karma is the sum of scores on everything the user wrote."""
    # Arrange
    content_service = await unit_env.get(ContentService)
    vote_service = await unit_env.get(VoteService)
    karma_service = await unit_env.get(KarmaService)
    author_id = UserId(uuid4())

    post = await content_service.create_post(author_id, "Post", "general")
    comment = await content_service.create_comment(post.id, author_id, "Comment")
    for _ in range(2):
        await vote_service.apply_vote(UserId(uuid4()), post.id, ItemKind.POST, 1)
    for _ in range(4):
        await vote_service.apply_vote(
            UserId(uuid4()), comment.id, ItemKind.COMMENT, -1
        )

    # Act
    karma = await karma_service.karma(author_id)

    # Assert
    # post: 1 + 2, comment: 1 - 4
    assert karma == 0


@pytest.mark.asyncio
async def test_casting_votes_does_not_change_voter_karma(unit_env):
    # Arrange
    content_service = await unit_env.get(ContentService)
    vote_service = await unit_env.get(VoteService)
    karma_service = await unit_env.get(KarmaService)
    voter_id = UserId(uuid4())
    post = await content_service.create_post(UserId(uuid4()), "Post", "general")

    # Act
    await vote_service.apply_vote(voter_id, post.id, ItemKind.POST, -1)

    # Assert
    assert await karma_service.karma(voter_id) == 0
