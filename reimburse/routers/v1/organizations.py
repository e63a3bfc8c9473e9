"""Organization and membership endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.response import DataResponse
from reimburse.db.base import get_db
from reimburse.domain.user import User
from reimburse.routers.deps import get_current_user
from reimburse.schemas.common import SuccessOut
from reimburse.schemas.organization import (
    InviteUser,
    MemberOut,
    MemberRoleUpdate,
    MembershipOut,
    OrganizationCreate,
    OrganizationDetailOut,
    OrganizationOut,
    OrganizationUpdate,
)
from reimburse.schemas.user import UserOut
from reimburse.services.organization import OrganizationService

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.post("", response_model=DataResponse[OrganizationDetailOut], status_code=status.HTTP_201_CREATED)
async def create_organization(
    body: OrganizationCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Create an organization; the caller becomes its first admin."""
    org, memberships = await OrganizationService(session).create_organization(body.name, user.id)
    out = OrganizationDetailOut(
        **OrganizationOut.model_validate(org).model_dump(),
        memberships=[MembershipOut.model_validate(m) for m in memberships],
    )
    return {"data": out}


@router.get("", response_model=DataResponse[list[OrganizationOut]])
async def list_organizations(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Organizations the caller belongs to."""
    orgs = await OrganizationService(session).list_organizations(user.id)
    return {"data": [OrganizationOut.model_validate(o) for o in orgs]}


@router.get("/{organization_id}", response_model=DataResponse[OrganizationOut])
async def get_organization(
    organization_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    org = await OrganizationService(session).get_organization(organization_id, user.id)
    return {"data": OrganizationOut.model_validate(org)}


@router.put("/{organization_id}", response_model=DataResponse[OrganizationOut])
async def update_organization(
    organization_id: str,
    body: OrganizationUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    org = await OrganizationService(session).update_organization(organization_id, body.name, user.id)
    return {"data": OrganizationOut.model_validate(org)}


@router.get("/{organization_id}/members", response_model=DataResponse[list[MemberOut]])
async def list_members(
    organization_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    rows = await OrganizationService(session).list_members(organization_id, user.id)
    return {
        "data": [
            MemberOut(
                **MembershipOut.model_validate(m).model_dump(),
                user=UserOut.model_validate(u),
            )
            for m, u in rows
        ]
    }


@router.post(
    "/{organization_id}/members",
    response_model=DataResponse[MembershipOut],
    status_code=status.HTTP_201_CREATED,
)
async def invite_user(
    organization_id: str,
    body: InviteUser,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Add an existing user, looked up by email, to the organization."""
    membership = await OrganizationService(session).invite_user(
        organization_id, body.email, body.role, user.id
    )
    return {"data": MembershipOut.model_validate(membership)}


@router.put("/{organization_id}/members/{member_user_id}", response_model=DataResponse[MembershipOut])
async def update_member_role(
    organization_id: str,
    member_user_id: str,
    body: MemberRoleUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    membership = await OrganizationService(session).update_member_role(
        organization_id, member_user_id, body.role, user.id
    )
    return {"data": MembershipOut.model_validate(membership)}


@router.delete("/{organization_id}/members/{member_user_id}", response_model=DataResponse[SuccessOut])
async def remove_member(
    organization_id: str,
    member_user_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    await OrganizationService(session).remove_member(organization_id, member_user_id, user.id)
    return {"data": SuccessOut()}
