"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .content_service import ContentService
from .jwt_service import JWTService
from .karma_service import KarmaService
from .post_service import PostService
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "ContentService",
    "JWTService",
    "KarmaService",
    "PostService",
    "Service",
    "VoteService",
]
