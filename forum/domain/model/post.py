"""Post aggregate root.

Posts are the top-level content type. They live in a community and
collect votes and comments.
"""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import ItemKind, PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    The score is a denormalized running total of the post's votes. It is
    persisted as 0 and seeded to 1 by the author's own upvote on creation,
    so it can drop below zero once downvotes outweigh upvotes.
    """

    kind: ClassVar[ItemKind] = ItemKind.POST

    id: PostId
    author_id: UserId
    title: str = Field(min_length=1, max_length=300)
    content: Optional[str] = Field(default=None, max_length=10000)
    community: str = Field(min_length=1, max_length=100)
    score: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
