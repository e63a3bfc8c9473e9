"""User registration and identity endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.response import DataResponse
from reimburse.db.base import get_db
from reimburse.domain.user import User
from reimburse.routers.deps import get_current_user
from reimburse.schemas.user import UserCreate, UserOut
from reimburse.services.user import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=DataResponse[UserOut], status_code=status.HTTP_201_CREATED)
async def register_user(
    body: UserCreate,
    session: AsyncSession = Depends(get_db),
):
    user = await UserService(session).register(body)
    return {"data": UserOut.model_validate(user)}


@router.get("/me", response_model=DataResponse[UserOut])
async def current_user(user: User = Depends(get_current_user)):
    return {"data": UserOut.model_validate(user)}
