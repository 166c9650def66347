"""Post routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from forum.domain.service import JWTService

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=300)
    community: str = Field(min_length=1, max_length=100)
    content: str | None = Field(default=None, max_length=10000)


@router.post(
    "", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED
)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication. The post starts with the author's upvote.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created post details

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to create posts",
        )

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                title=request.title,
                community=request.community,
                content=request.content,
                author_id=user_id,
            )
        )
    except ValueError as e:
        logfire.warn("Post creation validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    community: str | None = None,
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List posts, newest first.

    Args:
        list_posts_use_case: List posts use case from DI
        jwt_service: JWT service for optional authentication (injected)
        community: Only list posts in this community
        limit: Page size
        offset: Number of posts to skip
        auth_token: JWT token from cookie (optional)

    Returns:
        Page of posts with ``has_more``
    """
    return await list_posts_use_case.execute(
        ListPostsRequest(
            community=community,
            limit=limit,
            offset=offset,
            user_id=jwt_service.get_user_id_from_token(auth_token),
        )
    )


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPostResponse:
    """Get a single post.

    Raises:
        HTTPException: If post not found
    """
    result = await get_post_use_case.execute(
        GetPostRequest(
            post_id=str(post_id),
            user_id=jwt_service.get_user_id_from_token(auth_token),
        )
    )
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return result


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePostResponse:
    """Delete a post with its comments and every vote on them.

    Requires authentication; only the author may delete.

    Raises:
        HTTPException: If not authenticated
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to delete posts",
        )

    return await delete_post_use_case.execute(
        DeletePostRequest(post_id=str(post_id), user_id=user_id)
    )
