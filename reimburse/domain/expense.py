"""SQLAlchemy ORM models for Expenses and their review audit trail."""

from __future__ import annotations

import enum
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import Date, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reimburse.db.base import Base
from reimburse.domain.mixins import CreatedAtMixin, TenantMixin

DESCRIPTION_MAX_LENGTH = 500


class ExpenseStatus(str, enum.Enum):
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Expense(Base, TenantMixin, CreatedAtMixin):
    """One submitted expense. Its status is decided once, at submission."""

    __tablename__ = "expenses"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("expense_categories.id"), nullable=False, index=True
    )
    # Minor currency units (cents)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(String(DESCRIPTION_MAX_LENGTH), nullable=False)
    status: Mapped[ExpenseStatus] = mapped_column(
        Enum(ExpenseStatus, native_enum=False, length=20), nullable=False, index=True
    )

    reviews: Mapped[List["ExpenseReview"]] = relationship(
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="ExpenseReview.created_at",
    )


class ExpenseReview(Base, CreatedAtMixin):
    """Immutable audit entry recording a status decision (never updated or deleted)."""

    __tablename__ = "expense_reviews"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    expense_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reviewer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    status: Mapped[ExpenseStatus] = mapped_column(
        Enum(ExpenseStatus, native_enum=False, length=20), nullable=False
    )
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
