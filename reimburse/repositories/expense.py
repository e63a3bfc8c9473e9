"""Expense repository."""

from sqlalchemy import select

from reimburse.domain.expense import Expense
from reimburse.repositories.base import BaseRepository


class ExpenseRepository(BaseRepository[Expense]):
    model = Expense

    async def get_with_reviews(self, expense_id: str) -> Expense | None:
        # populate_existing: an expense created earlier in this session must
        # come back with its current review collection.
        result = await self._session.execute(
            select(Expense)
            .where(Expense.id == expense_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()
