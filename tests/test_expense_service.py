"""
Tests for ExpenseService — submission, auto-adjudication and listings.

Validates:
- Each adjudication outcome and its audit entry
- Precondition failures leave nothing behind
- Tenant isolation for category references
- List / review-queue ordering and filtering
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from reimburse.core.exceptions import NotFoundError, NotMemberError, ValidationError
from reimburse.domain.expense import Expense, ExpenseReview, ExpenseStatus
from reimburse.services.expense import ExpenseService


async def _submit(session, org, category, user, amount, description="Test expense"):
    return await ExpenseService(session).submit(
        organization_id=org.id,
        category_id=category.id,
        amount=amount,
        expense_date=date.today(),
        description=description,
        user_id=user.id,
    )


async def _count(session, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


# =============================================================================
# Submission outcomes
# =============================================================================


class TestSubmit:
    async def test_auto_rejects_over_policy_limit(self, session, factory, org, admin):
        category = await factory.category(org, name="Travel")
        await factory.policy(org, category, max_amount=50000, auto_approve=False)

        result = await _submit(session, org, category, admin, 75000, "Over limit expense")

        assert result.expense.status == ExpenseStatus.REJECTED
        assert "auto-rejected" in result.message
        assert "50000" in result.message
        assert len(result.expense.reviews) == 1
        assert result.expense.reviews[0].status == ExpenseStatus.REJECTED
        assert "exceeds policy limit" in result.expense.reviews[0].comment

    async def test_auto_approves_compliant_expense(self, session, factory, org, admin):
        category = await factory.category(org, name="Meals")
        await factory.policy(org, category, max_amount=50000, auto_approve=True)

        result = await _submit(session, org, category, admin, 30000)

        assert result.expense.status == ExpenseStatus.APPROVED
        assert result.message == "Expense auto-approved"
        assert result.expense.reviews[0].comment == "Auto-approved by policy"

    async def test_manual_review_when_auto_approve_disabled(self, session, factory, org, admin):
        category = await factory.category(org, name="Office")
        await factory.policy(org, category, max_amount=100000, auto_approve=False)

        result = await _submit(session, org, category, admin, 50000)

        assert result.expense.status == ExpenseStatus.SUBMITTED
        assert result.message == "Expense submitted for review"
        assert result.expense.reviews[0].comment == "Awaiting manual review"

    async def test_manual_review_when_no_policy(self, session, factory, org, admin):
        category = await factory.category(org, name="Other")

        result = await _submit(session, org, category, admin, 10000)

        assert result.expense.status == ExpenseStatus.SUBMITTED
        assert "no policy found" in result.message
        assert "No policy found" in result.expense.reviews[0].comment

    async def test_user_policy_overrides_organization_policy(self, session, factory, org, admin):
        category = await factory.category(org)
        await factory.policy(org, category, max_amount=50000, auto_approve=True)
        await factory.policy(org, category, user=admin, max_amount=100000, auto_approve=False)

        result = await _submit(session, org, category, admin, 75000)

        assert result.expense.status == ExpenseStatus.SUBMITTED
        assert result.message == "Expense submitted for review"

    async def test_every_expense_gets_one_matching_review(self, session, factory, org, admin):
        category = await factory.category(org)
        await factory.policy(org, category, max_amount=50000, auto_approve=True)

        for amount in (100, 50000, 50001):
            result = await _submit(session, org, category, admin, amount)
            reviews = (
                await session.execute(
                    select(ExpenseReview).where(ExpenseReview.expense_id == result.expense.id)
                )
            ).scalars().all()
            assert len(reviews) == 1
            assert reviews[0].status == result.expense.status
            assert reviews[0].reviewer_id == admin.id

    async def test_amount_is_stored_exactly(self, session, factory, org, admin):
        category = await factory.category(org)

        result = await _submit(session, org, category, admin, 1999)

        assert result.expense.amount == 1999
        assert isinstance(result.expense.amount, int)


# =============================================================================
# Preconditions
# =============================================================================


class TestSubmitPreconditions:
    @pytest.mark.parametrize("amount", [0, -100])
    async def test_rejects_non_positive_amount(self, session, factory, org, admin, amount):
        category = await factory.category(org)

        with pytest.raises(ValidationError, match="greater than zero"):
            await _submit(session, org, category, admin, amount)
        assert await _count(session, Expense) == 0

    @pytest.mark.parametrize("description", ["", "   ", "x" * 501])
    async def test_rejects_invalid_description(self, session, factory, org, admin, description):
        category = await factory.category(org)

        with pytest.raises(ValidationError):
            await _submit(session, org, category, admin, 100, description)
        assert await _count(session, Expense) == 0

    async def test_rejects_future_date(self, session, factory, org, admin):
        category = await factory.category(org)

        with pytest.raises(ValidationError, match="future"):
            await ExpenseService(session).submit(
                organization_id=org.id,
                category_id=category.id,
                amount=100,
                expense_date=date.today() + timedelta(days=1),
                description="Tomorrow",
                user_id=admin.id,
            )

    async def test_rejects_unknown_category(self, session, factory, org, admin):
        with pytest.raises(NotFoundError, match="Category not found"):
            await ExpenseService(session).submit(
                organization_id=org.id,
                category_id="invalid-category-id",
                amount=10000,
                expense_date=date.today(),
                description="Invalid category",
                user_id=admin.id,
            )

    async def test_rejects_non_member(self, session, factory, org):
        outsider = await factory.user()
        category = await factory.category(org)

        with pytest.raises(NotMemberError, match="not a member"):
            await _submit(session, org, category, outsider, 10000)

    async def test_rejects_category_from_other_organization(self, session, factory, org, admin):
        other_org = await factory.organization(admin, name="Org 2")
        foreign_category = await factory.category(other_org)
        await factory.policy(other_org, foreign_category, max_amount=999999, auto_approve=True)

        with pytest.raises(NotFoundError, match="Category not found"):
            await _submit(session, org, foreign_category, admin, 10000)
        assert await _count(session, Expense) == 0

    async def test_membership_is_checked_before_category(self, session, factory, org):
        outsider = await factory.user()

        with pytest.raises(NotMemberError):
            await ExpenseService(session).submit(
                organization_id=org.id,
                category_id="does-not-exist",
                amount=100,
                expense_date=date.today(),
                description="x",
                user_id=outsider.id,
            )


# =============================================================================
# Listings
# =============================================================================


def _at(minutes: int) -> datetime:
    return datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)


class TestListings:
    async def test_list_returns_all_expenses_newest_first(self, session, factory, org, admin):
        member = await factory.user()
        await factory.member(org, member)
        category = await factory.category(org)
        first = await factory.expense(org, admin, category, created_at=_at(1))
        second = await factory.expense(org, member, category, created_at=_at(2))

        items = await ExpenseService(session).list_expenses(org.id, admin.id)

        assert [e.id for e in items] == [second.id, first.id]

    async def test_list_filters_by_submitter(self, session, factory, org, admin):
        member = await factory.user()
        await factory.member(org, member)
        category = await factory.category(org)
        await factory.expense(org, admin, category)
        mine = await factory.expense(org, member, category)

        items = await ExpenseService(session).list_expenses(org.id, admin.id, member.id)

        assert [e.id for e in items] == [mine.id]

    async def test_list_excludes_other_organizations(self, session, factory, org, admin):
        other_org = await factory.organization(admin, name="Other")
        category = await factory.category(other_org)
        await factory.expense(other_org, admin, category)

        assert await ExpenseService(session).list_expenses(org.id, admin.id) == []

    async def test_list_requires_membership(self, session, factory, org):
        outsider = await factory.user()

        with pytest.raises(NotMemberError):
            await ExpenseService(session).list_expenses(org.id, outsider.id)

    async def test_review_queue_is_submitted_only_oldest_first(self, session, factory, org, admin):
        category = await factory.category(org)
        newer = await factory.expense(org, admin, category, created_at=_at(3))
        await factory.expense(org, admin, category, status=ExpenseStatus.APPROVED, created_at=_at(2))
        await factory.expense(org, admin, category, status=ExpenseStatus.REJECTED, created_at=_at(4))
        older = await factory.expense(org, admin, category, created_at=_at(1))

        items = await ExpenseService(session).list_for_review(org.id, admin.id)

        assert [e.id for e in items] == [older.id, newer.id]

    async def test_get_expense_returns_reviews(self, session, factory, org, admin):
        category = await factory.category(org)
        result = await _submit(session, org, category, admin, 500)

        expense = await ExpenseService(session).get_expense(result.expense.id, admin.id)

        assert expense.id == result.expense.id
        assert [r.status for r in expense.reviews] == [ExpenseStatus.SUBMITTED]

    async def test_get_expense_not_found(self, session, admin):
        with pytest.raises(NotFoundError, match="Expense not found"):
            await ExpenseService(session).get_expense("missing", admin.id)

    async def test_get_expense_requires_membership_in_owning_org(self, session, factory, org, admin):
        outsider = await factory.user()
        category = await factory.category(org)
        expense = await factory.expense(org, admin, category)

        with pytest.raises(NotMemberError):
            await ExpenseService(session).get_expense(expense.id, outsider.id)
