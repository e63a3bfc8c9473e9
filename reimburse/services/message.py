"""Message board service — append-only organization feed."""


from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.config import settings
from reimburse.core.exceptions import ValidationError
from reimburse.core.pagination import PaginationParams
from reimburse.domain.message import Message
from reimburse.repositories.message import MessageRepository
from reimburse.services.authorization import Authorizer

class MessageService:
    def __init__(self, session: AsyncSession):
        self._repo = MessageRepository(session)
        self._auth = Authorizer(session)

    async def list_messages(
        self, organization_id: str, user_id: str, pagination: PaginationParams
    ) -> tuple[list[Message], int]:
        await self._auth.require(organization_id, user_id)
        return await self._repo.list(
            organization_id,
            offset=pagination.offset,
            limit=pagination.limit,
            order_by="created_at",
            order="desc",
        )

    async def post_message(self, organization_id: str, content: str, user_id: str) -> Message:
        await self._auth.require(organization_id, user_id)
        if not content.strip():
            raise ValidationError("Message cannot be empty")
        if len(content) > settings.message_max_length:
            raise ValidationError(
                f"Message must be at most {settings.message_max_length} characters"
            )
        return await self._repo.create(
            organization_id=organization_id, user_id=user_id, content=content
        )
