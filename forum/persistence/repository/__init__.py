"""PostgreSQL repository implementations."""

from forum.persistence.repository.comment import PostgresCommentRepository
from forum.persistence.repository.post import PostgresPostRepository
from forum.persistence.repository.unit_of_work import PostgresUnitOfWork
from forum.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresUnitOfWork",
]
