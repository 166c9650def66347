"""Unit tests for CastVoteUseCase."""

from uuid import uuid4

import pytest

from forum.application.usecase.vote.cast_vote import CastVoteRequest, CastVoteUseCase
from forum.domain.error import InvalidVoteTypeError, ItemNotFoundError
from forum.domain.service import ContentService
from forum.domain.value import ItemKind, UserId
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_cast_vote_returns_new_score(unit_env):
    """Casting a vote should return the item's score."""
    # Arrange
    content_service = await unit_env.get(ContentService)
    use_case = await unit_env.get(CastVoteUseCase)
    post = await content_service.create_post(UserId(uuid4()), "Title", "general")

    # Act
    response = await use_case.execute(
        CastVoteRequest(
            item_kind=ItemKind.POST,
            item_id=str(post.id),
            user_id=str(uuid4()),
            vote_type=1,
        )
    )

    # Assert
    assert response.votes == 2


@pytest.mark.asyncio
async def test_cast_vote_on_comment(unit_env):
    # Arrange
    content_service = await unit_env.get(ContentService)
    use_case = await unit_env.get(CastVoteUseCase)
    post = await content_service.create_post(UserId(uuid4()), "Title", "general")
    comment = await content_service.create_comment(post.id, UserId(uuid4()), "Hi")

    # Act
    response = await use_case.execute(
        CastVoteRequest(
            item_kind=ItemKind.COMMENT,
            item_id=str(comment.id),
            user_id=str(uuid4()),
            vote_type=-1,
        )
    )

    # Assert
    assert response.votes == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("vote_type", [2, -2, "1", None, True])
async def test_cast_vote_rejects_invalid_vote_type(unit_env, vote_type):
    # Arrange
    content_service = await unit_env.get(ContentService)
    use_case = await unit_env.get(CastVoteUseCase)
    post = await content_service.create_post(UserId(uuid4()), "Title", "general")

    # Act & Assert
    with pytest.raises(InvalidVoteTypeError):
        await use_case.execute(
            CastVoteRequest(
                item_kind=ItemKind.POST,
                item_id=str(post.id),
                user_id=str(uuid4()),
                vote_type=vote_type,
            )
        )


@pytest.mark.asyncio
async def test_cast_vote_on_missing_item(unit_env):
    use_case = await unit_env.get(CastVoteUseCase)

    with pytest.raises(ItemNotFoundError):
        await use_case.execute(
            CastVoteRequest(
                item_kind=ItemKind.POST,
                item_id=str(uuid4()),
                user_id=str(uuid4()),
                vote_type=0,
            )
        )
