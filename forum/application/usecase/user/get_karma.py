"""Get karma use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import KarmaService
from forum.domain.value import UserId


class GetKarmaRequest(BaseModel):
    """Get karma request."""

    user_id: str  # UUID string


class GetKarmaResponse(BaseModel):
    """Get karma response."""

    user_id: str
    karma: int


class GetKarmaUseCase(BaseUseCase):
    """Use case for reading a user's karma."""

    def __init__(self, karma_service: KarmaService) -> None:
        """Initialize get karma use case.

        Args:
            karma_service: Karma domain service
        """
        self.karma_service = karma_service

    async def execute(self, request: GetKarmaRequest) -> GetKarmaResponse:
        """Execute get karma flow.

        Users with no posts or comments have a karma of 0.
        """
        karma = await self.karma_service.karma(UserId(UUID(request.user_id)))
        return GetKarmaResponse(user_id=request.user_id, karma=karma)
