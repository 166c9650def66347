"""Unit tests for PostService."""

from uuid import uuid4

import pytest

from forum.domain.error import ItemNotFoundError
from forum.domain.repository import PostRepository
from forum.domain.service import PostService
from forum.domain.value import PostId, UserId
from tests.conftest import make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestIncrementScore:
    @pytest.mark.asyncio
    async def test_increment_returns_new_score(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(score=3))

        # Act
        up = await post_service.increment_score(post.id, 2)
        down = await post_service.increment_score(post.id, -6)

        # Assert
        assert (up, down) == (5, -1)

    @pytest.mark.asyncio
    async def test_increment_missing_post(self, unit_env):
        post_service = await unit_env.get(PostService)

        with pytest.raises(ItemNotFoundError):
            await post_service.increment_score(PostId(uuid4()), 1)

    @pytest.mark.asyncio
    async def test_save_does_not_overwrite_score(self, unit_env):
        """Re-saving a post keeps the score maintained by votes."""
        # Arrange
        post_service = await unit_env.get(PostService)
        post = await post_service.save_post(make_post())
        await post_service.increment_score(post.id, 4)

        # Act
        saved = await post_service.save_post(post.model_copy(update={"title": "New"}))

        # Assert
        assert saved.title == "New"
        assert saved.score == 4


class TestQueries:
    @pytest.mark.asyncio
    async def test_list_recent_returns_total(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        for _ in range(3):
            await post_repo.save(make_post(community="math"))
        await post_repo.save(make_post(community="art"))

        # Act
        posts, total = await post_service.list_recent(community="math", limit=2)

        # Assert
        assert len(posts) == 2
        assert total == 3

    @pytest.mark.asyncio
    async def test_get_posts_by_author(self, unit_env):
        post_service = await unit_env.get(PostService)
        post_repo = await unit_env.get(PostRepository)
        author_id = UserId(uuid4())
        mine = await post_repo.save(make_post(author_id))
        await post_repo.save(make_post())

        posts = await post_service.get_posts_by_author(author_id)

        assert [p.id for p in posts] == [mine.id]
