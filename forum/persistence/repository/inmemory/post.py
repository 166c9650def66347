"""In-memory post repository for testing."""

from typing import Optional, Sequence

from forum.domain.error import ItemNotFoundError
from forum.domain.model.post import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import ItemKind, PostId, UserId

from .journal import record_undo


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    def _put(self, post: Post) -> None:
        previous = self._posts.get(post.id)
        self._posts[post.id] = post

        def undo() -> None:
            if previous is None:
                self._posts.pop(post.id, None)
            else:
                self._posts[post.id] = previous

        record_undo(undo)

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        """Find several posts by ID."""
        return [self._posts[pid] for pid in post_ids if pid in self._posts]

    async def find_for_update(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Row locks have no meaning here; the caller's scope already makes
        the cascade atomic.
        """
        return self._posts.get(post_id)

    async def find_recent(
        self, community: Optional[str] = None, limit: int = 10, offset: int = 0
    ) -> list[Post]:
        """Find posts newest first, optionally within one community."""
        posts = [
            p
            for p in self._posts.values()
            if community is None or p.community == community
        ]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def count(self, community: Optional[str] = None) -> int:
        """Count posts, optionally within one community."""
        return sum(
            1
            for p in self._posts.values()
            if community is None or p.community == community
        )

    async def find_by_author(self, author_id: UserId) -> list[Post]:
        """Find all posts by an author, newest first."""
        posts = [p for p in self._posts.values() if p.author_id == author_id]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts

    async def save(self, post: Post) -> Post:
        """Save a post (create or update). The stored score is kept on update."""
        existing = self._posts.get(post.id)
        if existing is not None:
            post = post.model_copy(update={"score": existing.score})
        self._put(post)
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post."""
        previous = self._posts.pop(post_id, None)
        if previous is not None:
            record_undo(lambda: self._posts.__setitem__(post_id, previous))

    async def increment_score(self, post_id: PostId, delta: int) -> int:
        """Add delta to the score and return the new value.

        There is no await between the read and the write, so concurrent
        tasks cannot interleave here.
        """
        post = self._posts.get(post_id)
        if post is None:
            raise ItemNotFoundError(ItemKind.POST.value, str(post_id))
        updated = post.model_copy(update={"score": post.score + delta})
        self._put(updated)
        return updated.score
