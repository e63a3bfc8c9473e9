"""SQLAlchemy ORM model for expense categories."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from reimburse.db.base import Base
from reimburse.domain.mixins import TenantMixin, TimestampMixin

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class ExpenseCategory(Base, TenantMixin, TimestampMixin):
    __tablename__ = "expense_categories"
    __table_args__ = (
        UniqueConstraint("organization_id", "name", name="uq_category_org_name"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True
    )
