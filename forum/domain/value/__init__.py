"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    CommentId,
    PostId,
    UserId,
    VoteId,
)
from forum.domain.value.types import (
    ItemKind,
    VoteKey,
    VoteType,
    VoteValue,
    parse_vote_type,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    # Types
    "ItemKind",
    "VoteKey",
    "VoteType",
    "VoteValue",
    "parse_vote_type",
]
