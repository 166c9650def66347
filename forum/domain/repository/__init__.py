"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from forum.domain.repository.comment import CommentRepository
from forum.domain.repository.post import PostRepository
from forum.domain.repository.unit_of_work import UnitOfWork
from forum.domain.repository.vote import VoteRepository

__all__ = [
    "PostRepository",
    "CommentRepository",
    "VoteRepository",
    "UnitOfWork",
]
