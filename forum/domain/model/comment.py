"""Comment entity.

Comments are threaded discussions on posts. Replies point at their parent
comment; deleting a comment removes its whole reply subtree.
"""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, ItemKind, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, increments with each reply)
    """

    kind: ClassVar[ItemKind] = ItemKind.COMMENT

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    score: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
