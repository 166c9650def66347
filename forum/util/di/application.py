"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
)
from forum.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from forum.application.usecase.user import (
    GetKarmaUseCase,
    ListUserCommentsUseCase,
    ListUserPostsUseCase,
)
from forum.application.usecase.vote import CastVoteUseCase
from forum.domain.service import (
    CommentService,
    ContentService,
    KarmaService,
    PostService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, content_service: ContentService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(content_service=content_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(
        self, content_service: ContentService
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(content_service=content_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, content_service: ContentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(content_service=content_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, content_service: ContentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(content_service=content_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_karma_use_case(self, karma_service: KarmaService) -> GetKarmaUseCase:
        """Provide get karma use case."""
        return GetKarmaUseCase(karma_service=karma_service)

    @provide(scope=Scope.REQUEST)
    def get_list_user_posts_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> ListUserPostsUseCase:
        """Provide list user posts use case."""
        return ListUserPostsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_user_comments_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> ListUserCommentsUseCase:
        """Provide list user comments use case."""
        return ListUserCommentsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )
