"""In-memory comment repository for testing."""

from collections import Counter
from typing import Optional, Sequence

from forum.domain.error import ItemNotFoundError
from forum.domain.model.comment import Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId, ItemKind, PostId, UserId

from .journal import record_undo


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _put(self, comment: Comment) -> None:
        previous = self._comments.get(comment.id)
        self._comments[comment.id] = comment

        def undo() -> None:
            if previous is None:
                self._comments.pop(comment.id, None)
            else:
                self._comments[comment.id] = previous

        record_undo(undo)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID (no row locks in memory)."""
        return self._comments.get(comment_id)

    async def find_for_update_many(
        self, comment_ids: Sequence[CommentId]
    ) -> list[Comment]:
        """Find comments by ID (no row locks in memory)."""
        return [self._comments[cid] for cid in comment_ids if cid in self._comments]

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post, newest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Count comments per post."""
        wanted = set(post_ids)
        counts = Counter(c.post_id for c in self._comments.values())
        return {pid: n for pid, n in counts.items() if pid in wanted}

    async def find_by_author(self, author_id: UserId) -> list[Comment]:
        """Find all comments by an author, newest first."""
        comments = [c for c in self._comments.values() if c.author_id == author_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update). The stored score is kept on update."""
        existing = self._comments.get(comment.id)
        if existing is not None:
            comment = comment.model_copy(update={"score": existing.score})
        self._put(comment)
        return comment

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments by ID."""
        removed = {
            cid: self._comments.pop(cid) for cid in comment_ids if cid in self._comments
        }
        if removed:
            record_undo(lambda: self._comments.update(removed))
        return len(removed)

    async def increment_score(self, comment_id: CommentId, delta: int) -> int:
        """Add delta to the score and return the new value."""
        comment = self._comments.get(comment_id)
        if comment is None:
            raise ItemNotFoundError(ItemKind.COMMENT.value, str(comment_id))
        updated = comment.model_copy(update={"score": comment.score + delta})
        self._put(updated)
        return updated.score
