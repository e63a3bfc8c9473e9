"""Spending policy endpoints, including the resolution debugger."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.response import DataResponse
from reimburse.db.base import get_db
from reimburse.domain.user import User
from reimburse.routers.deps import get_current_user
from reimburse.schemas.common import SuccessOut
from reimburse.schemas.policy import PolicyCreate, PolicyOut, PolicyResolutionOut, PolicyUpdate
from reimburse.services.policy import PolicyService

router = APIRouter(prefix="/policies", tags=["Policies"])


def _out(policy) -> PolicyOut | None:
    return PolicyOut.model_validate(policy) if policy is not None else None


@router.get("", response_model=DataResponse[list[PolicyOut]])
async def list_policies(
    organization_id: str = Query(alias="organizationId"),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    items = await PolicyService(session).list_policies(organization_id, user.id)
    return {"data": [PolicyOut.model_validate(p) for p in items]}


@router.get("/resolve", response_model=DataResponse[PolicyResolutionOut])
async def resolve_policy(
    organization_id: str = Query(alias="organizationId"),
    target_user_id: str = Query(alias="userId"),
    category_id: str = Query(alias="categoryId"),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Show which policy governs a member's expenses in a category, and why."""
    resolution = await PolicyService(session).resolve(
        organization_id, target_user_id, category_id, user.id
    )
    return {
        "data": PolicyResolutionOut(
            user_specific_policy=_out(resolution.user_specific_policy),
            organization_policy=_out(resolution.organization_policy),
            selected_policy=_out(resolution.selected_policy),
            reason=resolution.reason,
        )
    }


@router.post("", response_model=DataResponse[PolicyOut], status_code=status.HTTP_201_CREATED)
async def create_policy(
    body: PolicyCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    policy = await PolicyService(session).create_policy(body, user.id)
    return {"data": PolicyOut.model_validate(policy)}


@router.get("/{policy_id}", response_model=DataResponse[PolicyOut])
async def get_policy(
    policy_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    policy = await PolicyService(session).get_policy(policy_id, user.id)
    return {"data": PolicyOut.model_validate(policy)}


@router.put("/{policy_id}", response_model=DataResponse[PolicyOut])
async def update_policy(
    policy_id: str,
    body: PolicyUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    policy = await PolicyService(session).update_policy(policy_id, body, user.id)
    return {"data": PolicyOut.model_validate(policy)}


@router.delete("/{policy_id}", response_model=DataResponse[SuccessOut])
async def delete_policy(
    policy_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    await PolicyService(session).delete_policy(policy_id, user.id)
    return {"data": SuccessOut()}
