"""Test configuration and fixtures."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.model.comment import Comment
from forum.domain.model.post import Post
from forum.domain.value import CommentId, PostId, UserId

# The API module instruments FastAPI at import time, which needs Logfire
# configured; keep telemetry local and quiet during tests.
logfire.configure(send_to_logfire=False, console=False)


def make_post(
    author_id: UserId | None = None,
    *,
    title: str = "Test Post",
    community: str = "general",
    score: int = 0,
    created_at: datetime | None = None,
) -> Post:
    """Helper function to build a post for tests.

    Posts built here are stored directly through the repository, so they
    carry no author vote unless the test casts one.
    """
    return Post(
        id=PostId(uuid4()),
        author_id=author_id or UserId(uuid4()),
        title=title,
        content="Test content",
        community=community,
        score=score,
        created_at=created_at or datetime.now(),
    )


def make_comment(
    post_id: PostId,
    author_id: UserId | None = None,
    *,
    parent: Comment | None = None,
    content: str = "Test comment",
) -> Comment:
    """Helper function to build a comment (or a reply to ``parent``)."""
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id or UserId(uuid4()),
        content=content,
        parent_id=parent.id if parent else None,
        depth=parent.depth + 1 if parent else 0,
        score=0,
        created_at=datetime.now(),
    )
