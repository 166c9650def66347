"""User routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from forum.application.usecase.user import (
    GetKarmaRequest,
    GetKarmaResponse,
    GetKarmaUseCase,
    ListUserCommentsRequest,
    ListUserCommentsResponse,
    ListUserCommentsUseCase,
    ListUserPostsRequest,
    ListUserPostsResponse,
    ListUserPostsUseCase,
)
from forum.domain.service import JWTService

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}/karma", response_model=GetKarmaResponse)
async def get_karma(
    user_id: UUID,
    get_karma_use_case: FromDishka[GetKarmaUseCase],
) -> GetKarmaResponse:
    """Get a user's karma: the summed scores of their posts and comments."""
    return await get_karma_use_case.execute(GetKarmaRequest(user_id=str(user_id)))


@router.get("/{user_id}/posts", response_model=ListUserPostsResponse)
async def list_user_posts(
    user_id: UUID,
    list_user_posts_use_case: FromDishka[ListUserPostsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListUserPostsResponse:
    """List the posts a user wrote, newest first.

    Args:
        user_id: Author whose posts are listed
        list_user_posts_use_case: List user posts use case from DI
        jwt_service: JWT service for optional authentication (injected)
        auth_token: JWT token from cookie (optional)

    Returns:
        The user's posts with comment counts
    """
    return await list_user_posts_use_case.execute(
        ListUserPostsRequest(
            user_id=str(user_id),
            viewer_id=jwt_service.get_user_id_from_token(auth_token),
        )
    )


@router.get("/{user_id}/comments", response_model=ListUserCommentsResponse)
async def list_user_comments(
    user_id: UUID,
    list_user_comments_use_case: FromDishka[ListUserCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListUserCommentsResponse:
    """List the comments a user wrote, newest first, with their posts' titles."""
    return await list_user_comments_use_case.execute(
        ListUserCommentsRequest(
            user_id=str(user_id),
            viewer_id=jwt_service.get_user_id_from_token(auth_token),
        )
    )
