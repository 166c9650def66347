"""Unit tests for CreateCommentUseCase."""

from uuid import uuid4

import pytest

from forum.application.usecase.comment.create_comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from forum.domain.error import ItemNotFoundError
from forum.domain.service import ContentService
from forum.domain.value import UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_create_reply(unit_env):
    """A reply is stored one level below its parent with the author's vote."""
    # Arrange
    content_service = await unit_env.get(ContentService)
    use_case = await unit_env.get(CreateCommentUseCase)
    post = await content_service.create_post(UserId(uuid4()), "Title", "general")
    parent = await content_service.create_comment(post.id, UserId(uuid4()), "Top")
    author_id = str(uuid4())

    # Act
    response = await use_case.execute(
        CreateCommentRequest(
            post_id=str(post.id),
            content="Reply",
            author_id=author_id,
            parent_id=str(parent.id),
        )
    )

    # Assert
    assert response.parent_id == str(parent.id)
    assert response.depth == 1
    assert response.score == 1
    assert response.user_vote == 1
    assert response.author_id == author_id


@pytest.mark.asyncio
async def test_create_comment_on_missing_post(unit_env):
    use_case = await unit_env.get(CreateCommentUseCase)

    with pytest.raises(ItemNotFoundError):
        await use_case.execute(
            CreateCommentRequest(
                post_id=str(uuid4()), content="Hello", author_id=str(uuid4())
            )
        )
