"""SQLAlchemy ORM model for spending policies, and the policy scope variant.

A policy caps a single expense amount for one category. It is either
organization-wide or narrowed to one user; in storage the organization-wide
case is ``user_id IS NULL``, but callers should reason about ``Policy.scope``
instead of testing the column for ``None``.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy import Boolean, Enum, ForeignKey, Index, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from reimburse.db.base import Base
from reimburse.domain.mixins import TenantMixin, TimestampMixin


class PolicyPeriod(str, enum.Enum):
    # Informational only; limits apply per expense, not per period total.
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


@dataclass(frozen=True)
class OrganizationScope:
    """Applies to every member of the organization."""


@dataclass(frozen=True)
class UserScope:
    """Applies to one member, overriding the organization-wide policy."""

    user_id: str


PolicyScope = Union[OrganizationScope, UserScope]


class Policy(Base, TenantMixin, TimestampMixin):
    __tablename__ = "policies"
    __table_args__ = (
        UniqueConstraint(
            "organization_id", "category_id", "user_id", name="uq_policy_org_category_user"
        ),
        # NULLs never collide in a unique constraint, so the organization-wide
        # slot needs its own partial index.
        Index(
            "uq_policy_org_category_orgwide",
            "organization_id",
            "category_id",
            unique=True,
            sqlite_where=text("user_id IS NULL"),
            postgresql_where=text("user_id IS NULL"),
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("expense_categories.id"), nullable=False, index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    # Minor currency units (cents)
    max_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    period: Mapped[PolicyPeriod] = mapped_column(
        Enum(PolicyPeriod, native_enum=False, length=20),
        default=PolicyPeriod.MONTHLY,
        nullable=False,
    )
    auto_approve: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    @property
    def scope(self) -> PolicyScope:
        if self.user_id is None:
            return OrganizationScope()
        return UserScope(self.user_id)


def scope_user_id(scope: PolicyScope) -> str | None:
    """Column value for *scope*."""
    if isinstance(scope, UserScope):
        return scope.user_id
    return None
