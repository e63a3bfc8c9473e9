"""User service — identity lookups for the authentication boundary."""


from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.exceptions import ConflictError, UnauthorizedError
from reimburse.domain.user import User
from reimburse.repositories.user import UserRepository
from reimburse.schemas.user import UserCreate

class UserService:
    def __init__(self, session: AsyncSession):
        self._repo = UserRepository(session)

    async def register(self, data: UserCreate) -> User:
        if await self._repo.get_by_email(data.email):
            raise ConflictError("A user with this email already exists")
        return await self._repo.create(**data.model_dump())

    async def authenticate(self, user_id: str | None) -> User:
        if not user_id:
            raise UnauthorizedError()
        user = await self._repo.get_by_id(user_id)
        if user is None:
            raise UnauthorizedError("Unknown user")
        return user
