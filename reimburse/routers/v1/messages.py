"""Organization message board endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.pagination import PaginationParams
from reimburse.core.response import DataResponse, ListResponse, paginated
from reimburse.db.base import get_db
from reimburse.domain.user import User
from reimburse.routers.deps import get_current_user
from reimburse.schemas.message import MessageCreate, MessageOut
from reimburse.services.message import MessageService

router = APIRouter(prefix="/organizations/{organization_id}/messages", tags=["Messages"])


@router.get("", response_model=ListResponse[MessageOut])
async def list_messages(
    organization_id: str,
    pagination: PaginationParams = Depends(),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Newest messages first (paginated)."""
    items, total = await MessageService(session).list_messages(organization_id, user.id, pagination)
    return paginated([MessageOut.model_validate(m) for m in items], total, pagination)


@router.post("", response_model=DataResponse[MessageOut], status_code=status.HTTP_201_CREATED)
async def post_message(
    organization_id: str,
    body: MessageCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    message = await MessageService(session).post_message(organization_id, body.content, user.id)
    return {"data": MessageOut.model_validate(message)}
