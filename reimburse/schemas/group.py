"""Group Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from reimburse.domain.group import NAME_MAX_LENGTH
from reimburse.schemas.common import CamelModel
from reimburse.schemas.user import UserOut


class GroupCreate(CamelModel):
    organization_id: str
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = None
    parent_group_id: str | None = None


class GroupUpdate(CamelModel):
    """Omitted fields are left unchanged; ``parentGroupId: null`` makes the group a root."""

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = None
    parent_group_id: str | None = None


class GroupMemberAdd(CamelModel):
    user_id: str


class GroupMembershipOut(CamelModel):
    id: str
    group_id: str
    user_id: str
    created_at: datetime


class GroupOut(CamelModel):
    id: str
    organization_id: str
    name: str
    description: str | None = None
    parent_group_id: str | None = None
    created_at: datetime
    updated_at: datetime


class GroupDetailOut(GroupOut):
    members: list[UserOut] = []
    child_groups: list[GroupOut] = []


class GroupNode(GroupOut):
    """One node of the hierarchy forest."""

    members: list[UserOut] = []
    children: list[GroupNode] = []
