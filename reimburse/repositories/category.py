"""Expense category repository."""

from sqlalchemy import exists, select

from reimburse.domain.category import ExpenseCategory
from reimburse.domain.expense import Expense
from reimburse.domain.policy import Policy
from reimburse.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[ExpenseCategory]):
    model = ExpenseCategory

    async def name_taken(
        self, organization_id: str, name: str, exclude_id: str | None = None
    ) -> bool:
        q = self._scoped_query(organization_id).where(ExpenseCategory.name == name)
        if exclude_id is not None:
            q = q.where(ExpenseCategory.id != exclude_id)
        return (await self._session.execute(q)).scalars().first() is not None

    async def is_referenced(self, category_id: str) -> bool:
        """True when any expense or policy points at the category."""
        q = select(
            exists().where(Expense.category_id == category_id)
            | exists().where(Policy.category_id == category_id)
        )
        return bool((await self._session.execute(q)).scalar())
