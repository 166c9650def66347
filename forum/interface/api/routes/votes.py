"""Vote routes."""

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from forum.domain.service import JWTService
from forum.domain.value import ItemKind

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for casting a vote.

    The vote type is accepted as any JSON value here, and a missing one
    arrives as None; the domain rejects anything other than -1, 0 and 1
    with a 400.
    """

    model_config = ConfigDict(populate_by_name=True)

    vote_type: Any = Field(default=None, alias="voteType")


async def _cast_vote(
    item_kind: ItemKind,
    item_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> CastVoteResponse:
    # Verify authentication and get user ID
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to vote",
        )

    return await cast_vote_use_case.execute(
        CastVoteRequest(
            item_kind=item_kind,
            item_id=str(item_id),
            user_id=user_id,
            vote_type=request.vote_type,
        )
    )


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def vote_on_post(
    post_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Set the caller's vote on a post.

    Requires authentication. ``voteType`` is 1 (up), -1 (down) or 0
    (retract). Repeating the current vote changes nothing.

    Returns:
        The post's new score as ``votes``

    Raises:
        HTTPException: If not authenticated
    """
    return await _cast_vote(
        ItemKind.POST, post_id, request, cast_vote_use_case, jwt_service, auth_token
    )


@router.post("/comments/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_on_comment(
    comment_id: UUID,
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Set the caller's vote on a comment.

    Requires authentication.

    Returns:
        The comment's new score as ``votes``

    Raises:
        HTTPException: If not authenticated
    """
    return await _cast_vote(
        ItemKind.COMMENT,
        comment_id,
        request,
        cast_vote_use_case,
        jwt_service,
        auth_token,
    )
