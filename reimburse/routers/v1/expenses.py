"""Expense endpoints — submission (auto-adjudicated), listings, review queue."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.response import DataResponse
from reimburse.db.base import get_db
from reimburse.domain.user import User
from reimburse.routers.deps import get_current_user
from reimburse.schemas.expense import ExpenseDetailOut, ExpenseOut, ExpenseSubmit, SubmissionOut
from reimburse.services.expense import ExpenseService

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.post("", response_model=DataResponse[SubmissionOut], status_code=status.HTTP_201_CREATED)
async def submit_expense(
    body: ExpenseSubmit,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Submit an expense. The response says whether it was approved, rejected or queued."""
    result = await ExpenseService(session).submit(
        organization_id=body.organization_id,
        category_id=body.category_id,
        amount=body.amount,
        expense_date=body.date,
        description=body.description,
        user_id=user.id,
    )
    return {
        "data": SubmissionOut(
            expense=ExpenseOut.model_validate(result.expense), message=result.message
        )
    }


@router.get("", response_model=DataResponse[list[ExpenseOut]])
async def list_expenses(
    organization_id: str = Query(alias="organizationId"),
    filter_user_id: Optional[str] = Query(default=None, alias="userId", description="Only this submitter"),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Expenses of one organization, newest first."""
    items = await ExpenseService(session).list_expenses(organization_id, user.id, filter_user_id)
    return {"data": [ExpenseOut.model_validate(e) for e in items]}


@router.get("/review-queue", response_model=DataResponse[list[ExpenseOut]])
async def list_for_review(
    organization_id: str = Query(alias="organizationId"),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    """Expenses awaiting manual review, oldest first."""
    items = await ExpenseService(session).list_for_review(organization_id, user.id)
    return {"data": [ExpenseOut.model_validate(e) for e in items]}


@router.get("/{expense_id}", response_model=DataResponse[ExpenseDetailOut])
async def get_expense(
    expense_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    expense = await ExpenseService(session).get_expense(expense_id, user.id)
    return {"data": ExpenseDetailOut.model_validate(expense)}
