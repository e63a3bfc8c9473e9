"""Shared router dependencies: DB session and the authenticated caller."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.config import settings
from reimburse.db.base import get_db
from reimburse.domain.user import User
from reimburse.services.user import UserService


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the caller from the identity header set by the auth proxy."""
    user = await UserService(session).authenticate(request.headers.get(settings.user_id_header))
    request.state.user_id = user.id
    return user
