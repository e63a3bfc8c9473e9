"""Expense service — submission and auto-adjudication.

A submission is decided exactly once, when it is created:

  no applicable policy             -> SUBMITTED (manual review)
  amount  > policy.max_amount      -> REJECTED  (even if the policy auto-approves)
  amount <= limit, auto_approve    -> APPROVED
  amount <= limit, no auto_approve -> SUBMITTED

The expense and its first review entry are flushed together, so the session
either persists both or neither.
"""


import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.exceptions import NotFoundError, ValidationError
from reimburse.domain.expense import DESCRIPTION_MAX_LENGTH, Expense, ExpenseReview, ExpenseStatus
from reimburse.domain.policy import Policy
from reimburse.repositories.category import CategoryRepository
from reimburse.repositories.expense import ExpenseRepository
from reimburse.services.authorization import Authorizer
from reimburse.services.policy_resolver import PolicyResolver

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Decision:
    status: ExpenseStatus
    comment: str
    message: str

@dataclass(frozen=True)
class SubmissionResult:
    expense: Expense
    message: str

def decide(amount: int, policy: Policy | None) -> Decision:
    """Map an amount and the applicable policy to a status, audit comment and outcome message."""
    if policy is None:
        return Decision(
            ExpenseStatus.SUBMITTED,
            "No policy found - defaulting to manual review",
            "Expense submitted for review (no policy found)",
        )
    if amount > policy.max_amount:
        return Decision(
            ExpenseStatus.REJECTED,
            f"Amount exceeds policy limit of {policy.max_amount}",
            f"Expense auto-rejected: amount exceeds limit of {policy.max_amount}",
        )
    if policy.auto_approve:
        return Decision(ExpenseStatus.APPROVED, "Auto-approved by policy", "Expense auto-approved")
    return Decision(ExpenseStatus.SUBMITTED, "Awaiting manual review", "Expense submitted for review")

class ExpenseService:
    def __init__(self, session: AsyncSession):
        self._repo = ExpenseRepository(session)
        self._categories = CategoryRepository(session)
        self._resolver = PolicyResolver(session)
        self._auth = Authorizer(session)

    async def submit(
        self,
        organization_id: str,
        category_id: str,
        amount: int,
        expense_date: date,
        description: str,
        user_id: str,
    ) -> SubmissionResult:
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        if not description or not description.strip():
            raise ValidationError("Description is required")
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
            )
        if expense_date > date.today():
            raise ValidationError("Expense date cannot be in the future")

        await self._auth.require(organization_id, user_id)

        category = await self._categories.get_in_organization(organization_id, category_id)
        if category is None:
            raise NotFoundError("Category", message="Category not found in this organization")

        resolution = await self._resolver.resolve(organization_id, user_id, category_id)
        policy = resolution.selected_policy
        decision = decide(amount, policy)

        expense = await self._repo.create(
            organization_id=organization_id,
            user_id=user_id,
            category_id=category_id,
            amount=amount,
            date=expense_date,
            description=description,
            status=decision.status,
            reviews=[
                ExpenseReview(
                    reviewer_id=user_id,
                    status=decision.status,
                    comment=decision.comment,
                )
            ],
        )
        logger.info(
            "Expense %s in organization %s adjudicated %s (policy=%s, amount=%d)",
            expense.id,
            organization_id,
            decision.status.value,
            policy.id if policy else None,
            amount,
        )
        return SubmissionResult(expense=expense, message=decision.message)

    async def list_expenses(
        self, organization_id: str, user_id: str, filter_user_id: str | None = None
    ) -> list[Expense]:
        """All expenses of the organization, newest first."""
        await self._auth.require(organization_id, user_id)
        items, _ = await self._repo.list(
            organization_id,
            order_by="created_at",
            order="desc",
            filters={"user_id": filter_user_id} if filter_user_id else None,
        )
        return items

    async def list_for_review(self, organization_id: str, user_id: str) -> list[Expense]:
        """The manual review queue: SUBMITTED expenses, oldest first."""
        await self._auth.require(organization_id, user_id)
        items, _ = await self._repo.list(
            organization_id,
            order_by="created_at",
            order="asc",
            filters={"status": ExpenseStatus.SUBMITTED},
        )
        return items

    async def get_expense(self, expense_id: str, user_id: str) -> Expense:
        expense = await self._repo.get_with_reviews(expense_id)
        if expense is None:
            raise NotFoundError("Expense", message="Expense not found")
        await self._auth.require(expense.organization_id, user_id)
        return expense
