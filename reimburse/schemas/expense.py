"""Expense Pydantic schemas."""


from datetime import date, datetime

from pydantic import Field

from reimburse.domain.expense import DESCRIPTION_MAX_LENGTH, ExpenseStatus
from reimburse.schemas.common import CamelModel

class ExpenseSubmit(CamelModel):
    organization_id: str
    category_id: str
    amount: int = Field(gt=0, description="Amount in minor currency units (cents).")
    date: date
    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)

class ExpenseReviewOut(CamelModel):
    id: str
    expense_id: str
    reviewer_id: str
    status: ExpenseStatus
    comment: str | None = None
    created_at: datetime

class ExpenseOut(CamelModel):
    id: str
    organization_id: str
    user_id: str
    category_id: str
    amount: int
    date: date
    description: str
    status: ExpenseStatus
    created_at: datetime

class ExpenseDetailOut(ExpenseOut):
    reviews: list[ExpenseReviewOut] = []

class SubmissionOut(CamelModel):
    expense: ExpenseOut
    message: str
