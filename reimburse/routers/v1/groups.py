"""Group endpoints — tree maintenance, membership, hierarchy view."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.response import DataResponse
from reimburse.db.base import get_db
from reimburse.domain.user import User
from reimburse.routers.deps import get_current_user
from reimburse.schemas.common import SuccessOut
from reimburse.schemas.group import (
    GroupCreate,
    GroupDetailOut,
    GroupMemberAdd,
    GroupMembershipOut,
    GroupNode,
    GroupOut,
    GroupUpdate,
)
from reimburse.schemas.user import UserOut
from reimburse.services.group import GroupService

router = APIRouter(prefix="/groups", tags=["Groups"])


@router.get("", response_model=DataResponse[list[GroupOut]])
async def list_groups(
    organization_id: str = Query(alias="organizationId"),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    items = await GroupService(session).list_groups(organization_id, user.id)
    return {"data": [GroupOut.model_validate(g) for g in items]}


@router.get("/hierarchy", response_model=DataResponse[list[GroupNode]])
async def get_hierarchy(
    organization_id: str = Query(alias="organizationId"),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Root groups with their descendants nested under ``children``."""
    forest = await GroupService(session).get_hierarchy(organization_id, user.id)
    return {"data": [GroupNode.model_validate(node) for node in forest]}


@router.post("", response_model=DataResponse[GroupOut], status_code=status.HTTP_201_CREATED)
async def create_group(
    body: GroupCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    group = await GroupService(session).create_group(body, user.id)
    return {"data": GroupOut.model_validate(group)}


@router.get("/{group_id}", response_model=DataResponse[GroupDetailOut])
async def get_group(
    group_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    group, members, children = await GroupService(session).get_group(group_id, user.id)
    out = GroupDetailOut(
        **GroupOut.model_validate(group).model_dump(),
        members=[UserOut.model_validate(u) for u in members],
        child_groups=[GroupOut.model_validate(c) for c in children],
    )
    return {"data": out}


@router.put("/{group_id}", response_model=DataResponse[GroupOut])
async def update_group(
    group_id: str,
    body: GroupUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    group = await GroupService(session).update_group(group_id, body, user.id)
    return {"data": GroupOut.model_validate(group)}


@router.delete("/{group_id}", response_model=DataResponse[SuccessOut])
async def delete_group(
    group_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    await GroupService(session).delete_group(group_id, user.id)
    return {"data": SuccessOut()}


@router.post(
    "/{group_id}/members",
    response_model=DataResponse[GroupMembershipOut],
    status_code=status.HTTP_201_CREATED,
)
async def add_group_member(
    group_id: str,
    body: GroupMemberAdd,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    membership = await GroupService(session).add_member(group_id, body.user_id, user.id)
    return {"data": GroupMembershipOut.model_validate(membership)}


@router.delete("/{group_id}/members/{member_user_id}", response_model=DataResponse[SuccessOut])
async def remove_group_member(
    group_id: str,
    member_user_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    await GroupService(session).remove_member(group_id, member_user_id, user.id)
    return {"data": SuccessOut()}
