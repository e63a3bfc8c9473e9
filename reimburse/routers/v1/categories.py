"""Expense category endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.response import DataResponse
from reimburse.db.base import get_db
from reimburse.domain.user import User
from reimburse.routers.deps import get_current_user
from reimburse.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from reimburse.schemas.common import SuccessOut
from reimburse.services.category import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=DataResponse[list[CategoryOut]])
async def list_categories(
    organization_id: str = Query(alias="organizationId"),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Categories of one organization, ordered by name."""
    items = await CategoryService(session).list_categories(organization_id, user.id)
    return {"data": [CategoryOut.model_validate(c) for c in items]}


@router.post("", response_model=DataResponse[CategoryOut], status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    category = await CategoryService(session).create_category(body, user.id)
    return {"data": CategoryOut.model_validate(category)}


@router.get("/{category_id}", response_model=DataResponse[CategoryOut])
async def get_category(
    category_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    category = await CategoryService(session).get_category(category_id, user.id)
    return {"data": CategoryOut.model_validate(category)}


@router.put("/{category_id}", response_model=DataResponse[CategoryOut])
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    category = await CategoryService(session).update_category(category_id, body, user.id)
    return {"data": CategoryOut.model_validate(category)}


@router.delete("/{category_id}", response_model=DataResponse[SuccessOut])
async def delete_category(
    category_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    await CategoryService(session).delete_category(category_id, user.id)
    return {"data": SuccessOut()}
