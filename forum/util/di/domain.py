"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, VotingSettings
from forum.domain.repository import (
    CommentRepository,
    PostRepository,
    UnitOfWork,
    VoteRepository,
)
from forum.domain.service import (
    CommentService,
    ContentService,
    JWTService,
    KarmaService,
    PostService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
        unit_of_work: UnitOfWork,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_service=post_service,
            comment_service=comment_service,
            unit_of_work=unit_of_work,
            voting_settings=voting_settings,
        )

    @provide
    def get_content_service(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        unit_of_work: UnitOfWork,
    ) -> ContentService:
        """Provide content lifecycle domain service."""
        return ContentService(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_karma_service(
        self, post_service: PostService, comment_service: CommentService
    ) -> KarmaService:
        """Provide karma domain service."""
        return KarmaService(post_service=post_service, comment_service=comment_service)
