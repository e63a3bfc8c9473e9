"""Group service — the per-organization group tree and its members."""


import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.exceptions import ConflictError, NotFoundError, ValidationError
from reimburse.domain.group import Group, GroupMembership
from reimburse.domain.organization import Role
from reimburse.domain.user import User
from reimburse.repositories.group import GroupMembershipRepository, GroupRepository
from reimburse.repositories.organization import MembershipRepository
from reimburse.schemas.group import GroupCreate, GroupUpdate
from reimburse.services.authorization import Authorizer

logger = logging.getLogger(__name__)

_BAD_PARENT = "Parent group not found or belongs to different organization"

def creates_cycle(group_id: str, parent_id: str, arena: dict[str, Group]) -> bool:
    """True if making *parent_id* the parent of *group_id* would close a loop.

    Walks up from the proposed parent. The walk ends at a root, at a parent id
    that is not in *arena*, or at a group already visited (a loop already
    present in stored data), and never takes more steps than there are groups.
    """
    visited: set[str] = set()
    current: str | None = parent_id
    for _ in range(len(arena) + 1):
        if current is None:
            return False
        if current == group_id:
            return True
        if current in visited:
            return False
        visited.add(current)
        node = arena.get(current)
        if node is None:
            return False
        current = node.parent_group_id
    return False

def build_forest(groups: list[Group], members: dict[str, list[User]]) -> list[dict[str, Any]]:
    """Nest *groups* under their parents.

    Groups whose parent is missing from *groups* are promoted to roots. A parent
    loop already present in stored data is broken at the first looped group
    reached from input order, which becomes a root. Input order is preserved
    among siblings.
    """
    nodes = {
        g.id: {
            "id": g.id,
            "organization_id": g.organization_id,
            "name": g.name,
            "description": g.description,
            "parent_group_id": g.parent_group_id,
            "created_at": g.created_at,
            "updated_at": g.updated_at,
            "members": members.get(g.id, []),
            "children": [],
        }
        for g in groups
    }
    roots: list[dict[str, Any]] = []
    for g in groups:
        parent = nodes.get(g.parent_group_id) if g.parent_group_id else None
        if parent is not None and g.parent_group_id != g.id:
            parent["children"].append(nodes[g.id])
        else:
            roots.append(nodes[g.id])

    reached: set[str] = set()

    def mark(node: dict[str, Any]) -> None:
        stack = [node]
        while stack:
            current = stack.pop()
            if current["id"] in reached:
                continue
            reached.add(current["id"])
            stack.extend(current["children"])

    for root in roots:
        mark(root)
    for g in groups:
        if g.id in reached:
            continue
        # Unreachable from every root, so a parent loop lies above; break it
        # at the first group the upward walk revisits
        seen: set[str] = set()
        current = g.id
        while current not in seen:
            seen.add(current)
            current = nodes[current]["parent_group_id"]
        node = nodes[current]
        parent = nodes[node["parent_group_id"]]
        parent["children"] = [c for c in parent["children"] if c is not node]
        logger.warning("Group %s sits in a parent loop; showing it as a root", current)
        roots.append(node)
        mark(node)
    return roots

class GroupService:
    def __init__(self, session: AsyncSession):
        self._repo = GroupRepository(session)
        self._members = GroupMembershipRepository(session)
        self._org_members = MembershipRepository(session)
        self._auth = Authorizer(session)

    async def _get_or_404(self, group_id: str) -> Group:
        group = await self._repo.get_by_id(group_id)
        if not group:
            raise NotFoundError("Group", message="Group not found")
        return group

    async def _require_parent(self, organization_id: str, parent_id: str) -> Group:
        parent = await self._repo.get_in_organization(organization_id, parent_id)
        if parent is None:
            raise NotFoundError("Group", message=_BAD_PARENT)
        return parent

    async def create_group(self, data: GroupCreate, user_id: str) -> Group:
        await self._auth.require(
            data.organization_id, user_id, Role.ADMIN, "Only admins can create groups"
        )
        if data.parent_group_id:
            await self._require_parent(data.organization_id, data.parent_group_id)
        return await self._repo.create(**data.model_dump())

    async def list_groups(self, organization_id: str, user_id: str) -> list[Group]:
        await self._auth.require(organization_id, user_id)
        items, _ = await self._repo.list(organization_id, order_by="name", order="asc")
        return items

    async def get_group(self, group_id: str, user_id: str) -> tuple[Group, list[User], list[Group]]:
        """Return the group, its members and its direct children."""
        group = await self._get_or_404(group_id)
        await self._auth.require(group.organization_id, user_id)
        members = await self._members.members_by_group([group.id])
        children = await self._repo.list_children(group.id)
        return group, members.get(group.id, []), children

    async def update_group(self, group_id: str, data: GroupUpdate, user_id: str) -> Group:
        group = await self._get_or_404(group_id)
        await self._auth.require(
            group.organization_id, user_id, Role.ADMIN, "Only admins can update groups"
        )

        changes = data.model_dump(exclude_unset=True)
        parent_id = changes.get("parent_group_id")
        if parent_id is not None:
            if parent_id == group.id:
                raise ValidationError("A group cannot be its own parent")
            await self._require_parent(group.organization_id, parent_id)
            arena = await self._repo.arena(group.organization_id)
            if creates_cycle(group.id, parent_id, arena):
                logger.info("Rejected re-parenting group %s under %s: cycle", group.id, parent_id)
                raise ValidationError("Cannot create circular hierarchy")

        if "name" in changes and changes["name"] is None:
            changes.pop("name")
        return await self._repo.update(group, **changes)

    async def delete_group(self, group_id: str, user_id: str) -> None:
        group = await self._get_or_404(group_id)
        await self._auth.require(
            group.organization_id, user_id, Role.ADMIN, "Only admins can delete groups"
        )
        await self._repo.detach_children(group.id)
        await self._members.delete_for_group(group.id)
        await self._repo.delete(group)

    async def add_member(self, group_id: str, member_user_id: str, user_id: str) -> GroupMembership:
        group = await self._get_or_404(group_id)
        await self._auth.require(
            group.organization_id, user_id, Role.ADMIN, "Only admins can add members to groups"
        )
        if await self._org_members.get_membership(group.organization_id, member_user_id) is None:
            raise ValidationError("User is not a member of this organization")
        if await self._members.get_membership(group.id, member_user_id):
            raise ConflictError("User is already a member of this group")
        return await self._members.create(group_id=group.id, user_id=member_user_id)

    async def remove_member(self, group_id: str, member_user_id: str, user_id: str) -> None:
        group = await self._get_or_404(group_id)
        await self._auth.require(
            group.organization_id,
            user_id,
            Role.ADMIN,
            "Only admins can remove members from groups",
        )
        membership = await self._members.get_membership(group.id, member_user_id)
        if membership is None:
            raise NotFoundError("Group member", message="Group member not found")
        await self._members.delete(membership)

    async def get_hierarchy(self, organization_id: str, user_id: str) -> list[dict[str, Any]]:
        await self._auth.require(organization_id, user_id)
        groups, _ = await self._repo.list(organization_id, order_by="name", order="asc")
        members = await self._members.members_by_group([g.id for g in groups])
        return build_forest(groups, members)
