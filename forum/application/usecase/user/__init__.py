"""User use cases."""

from .get_karma import GetKarmaRequest, GetKarmaResponse, GetKarmaUseCase
from .list_user_comments import (
    ListUserCommentsRequest,
    ListUserCommentsResponse,
    ListUserCommentsUseCase,
    UserCommentItem,
)
from .list_user_posts import (
    ListUserPostsRequest,
    ListUserPostsResponse,
    ListUserPostsUseCase,
)

__all__ = [
    "GetKarmaRequest",
    "GetKarmaResponse",
    "GetKarmaUseCase",
    "ListUserCommentsRequest",
    "ListUserCommentsResponse",
    "ListUserCommentsUseCase",
    "ListUserPostsRequest",
    "ListUserPostsResponse",
    "ListUserPostsUseCase",
    "UserCommentItem",
]
