"""Content lifecycle domain service.

Creating and deleting posts and comments touches the vote store as well as
the item store: new items receive the author's upvote, and deleted items
take every vote that references them (and their replies) along.
"""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.error import ItemNotFoundError, NotAuthorizedError
from forum.domain.model.comment import Comment
from forum.domain.model.post import Post
from forum.domain.repository import UnitOfWork
from forum.domain.value import CommentId, ItemKind, PostId, UserId

from .base import Service
from .comment_service import CommentService
from .post_service import PostService
from .vote_service import VoteService


class ContentService(Service):
    """Domain service for creating and deleting votable items."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize content service.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
            vote_service: Vote domain service
            unit_of_work: Atomic scopes over the vote and item stores
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.unit_of_work = unit_of_work

    async def create_post(
        self,
        author_id: UserId,
        title: str,
        community: str,
        content: str | None = None,
    ) -> Post:
        """Create a post with the author's upvote.

        The post row and the author's vote are written in one transaction.

        Args:
            author_id: Author user ID
            title: Post title
            community: Community name
            content: Optional post body

        Returns:
            The created post, with a score of 1
        """
        with logfire.span(
            "content_service.create_post",
            author_id=str(author_id),
            community=community,
        ):
            post = Post(
                id=PostId(uuid4()),
                author_id=author_id,
                title=title,
                content=content,
                community=community,
                score=0,
                created_at=datetime.now(),
            )

            async with self.unit_of_work.transaction():
                saved = await self.post_service.save_post(post)
                score = await self.vote_service.seed_author_vote(
                    author_id, ItemKind.POST, saved.id
                )

            logfire.info("Post created", post_id=str(saved.id), score=score)
            return saved.model_copy(update={"score": score})

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment with the author's upvote.

        Args:
            post_id: Post being commented on
            author_id: Author user ID
            content: Comment text
            parent_id: Parent comment ID for replies

        Returns:
            The created comment, with a score of 1

        Raises:
            ItemNotFoundError: If the post does not exist
            ValueError: If the parent comment is missing or on another post
        """
        with logfire.span(
            "content_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
        ):
            async with self.unit_of_work.transaction():
                post = await self.post_service.get_post_by_id(post_id)
                if not post:
                    raise ItemNotFoundError(ItemKind.POST.value, str(post_id))

                saved = await self.comment_service.save_new_comment(
                    post_id=post_id,
                    author_id=author_id,
                    content=content,
                    parent_id=parent_id,
                )
                score = await self.vote_service.seed_author_vote(
                    author_id, ItemKind.COMMENT, saved.id
                )

            return saved.model_copy(update={"score": score})

    async def delete_post(self, post_id: PostId, user_id: UserId) -> int:
        """Delete a post, its comments and every vote on them.

        Runs in one transaction. The post row is locked first, which holds
        back new comments on it, and then every comment row. A concurrent
        vote on any of them either commits before the cascade reads the
        votes or fails with ItemNotFoundError once the rows are gone.

        Args:
            post_id: Post ID
            user_id: User requesting the deletion

        Returns:
            Number of votes removed

        Raises:
            ItemNotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "content_service.delete_post", post_id=str(post_id), user_id=str(user_id)
        ):
            async with self.unit_of_work.transaction():
                post = await self.post_service.lock_post(post_id)
                if not post:
                    raise ItemNotFoundError(ItemKind.POST.value, str(post_id))
                if post.author_id != user_id:
                    logfire.warn(
                        "Unauthorized post deletion attempt",
                        post_id=str(post_id),
                        user_id=str(user_id),
                    )
                    raise NotAuthorizedError("post", str(post_id), str(user_id))

                comments = await self.comment_service.get_comments_for_post(post_id)
                comment_ids = [comment.id for comment in comments]
                await self.comment_service.lock_comments(comment_ids)

                removed = await self.vote_service.delete_item_votes(
                    ItemKind.COMMENT, comment_ids
                )
                await self.comment_service.delete_comments(comment_ids)
                removed += await self.vote_service.delete_item_votes(
                    ItemKind.POST, [post_id]
                )
                await self.post_service.delete_post(post_id)

            logfire.info(
                "Post deleted with cascade",
                post_id=str(post_id),
                comments=len(comment_ids),
                votes=removed,
            )
            return removed

    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> int:
        """Delete a comment, its replies and every vote on them.

        Locks the parent post so no reply can be added while the thread is
        collected, then the comment and each reply, the same way
        delete_post does.

        Args:
            comment_id: Comment ID
            user_id: User requesting the deletion

        Returns:
            Number of votes removed

        Raises:
            ItemNotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "content_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            async with self.unit_of_work.transaction():
                found = await self.comment_service.get_comment_by_id(comment_id)
                if not found:
                    raise ItemNotFoundError(ItemKind.COMMENT.value, str(comment_id))
                await self.post_service.lock_post(found.post_id)
                comment = await self.comment_service.lock_comment(comment_id)
                if not comment:
                    raise ItemNotFoundError(ItemKind.COMMENT.value, str(comment_id))
                if comment.author_id != user_id:
                    logfire.warn(
                        "Unauthorized comment deletion attempt",
                        comment_id=str(comment_id),
                        user_id=str(user_id),
                    )
                    raise NotAuthorizedError(
                        "comment", str(comment_id), str(user_id)
                    )

                replies = await self.comment_service.get_thread(comment)
                reply_ids = [reply.id for reply in replies]
                await self.comment_service.lock_comments(reply_ids)

                removed = await self.vote_service.delete_item_votes(
                    ItemKind.COMMENT, reply_ids
                )
                await self.comment_service.delete_comments(reply_ids)
                removed += await self.vote_service.delete_item_votes(
                    ItemKind.COMMENT, [comment_id]
                )
                await self.comment_service.delete_comments([comment_id])

            logfire.info(
                "Comment deleted with cascade",
                comment_id=str(comment_id),
                replies=len(reply_ids),
                votes=removed,
            )
            return removed
