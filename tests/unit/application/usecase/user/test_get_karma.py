"""Unit tests for GetKarmaUseCase."""

from uuid import uuid4

import pytest

from forum.application.usecase.user.get_karma import GetKarmaRequest, GetKarmaUseCase
from forum.domain.service import ContentService, VoteService
from forum.domain.value import ItemKind, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_get_karma(unit_env):
    # Arrange
    content_service = await unit_env.get(ContentService)
    vote_service = await unit_env.get(VoteService)
    use_case = await unit_env.get(GetKarmaUseCase)
    author_id = UserId(uuid4())
    post = await content_service.create_post(author_id, "Title", "general")
    await vote_service.apply_vote(UserId(uuid4()), post.id, ItemKind.POST, 1)

    # Act
    response = await use_case.execute(GetKarmaRequest(user_id=str(author_id)))

    # Assert
    assert response.user_id == str(author_id)
    assert response.karma == 2
