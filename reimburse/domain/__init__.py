"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  user.py          — Users mirrored from the authentication layer
  organization.py  — Organizations (root aggregate) and Memberships
  category.py      — Expense categories, name unique per organization
  policy.py        — Spending policies and their scope variant
  expense.py       — Expenses and the append-only ExpenseReview audit trail
  group.py         — Group tree and GroupMemberships
  message.py       — Organization message board
  mixins.py        — Shared TimestampMixin, TenantMixin
"""

from reimburse.domain.category import ExpenseCategory
from reimburse.domain.expense import Expense, ExpenseReview, ExpenseStatus
from reimburse.domain.group import Group, GroupMembership
from reimburse.domain.message import Message
from reimburse.domain.organization import Membership, Organization, Role
from reimburse.domain.policy import (
    OrganizationScope,
    Policy,
    PolicyPeriod,
    PolicyScope,
    UserScope,
)
from reimburse.domain.user import User

__all__ = [
    "Expense",
    "ExpenseCategory",
    "ExpenseReview",
    "ExpenseStatus",
    "Group",
    "GroupMembership",
    "Membership",
    "Message",
    "Organization",
    "OrganizationScope",
    "Policy",
    "PolicyPeriod",
    "PolicyScope",
    "Role",
    "User",
    "UserScope",
]
