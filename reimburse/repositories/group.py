"""Group and group-membership repositories."""

from sqlalchemy import delete, select, update

from reimburse.domain.group import Group, GroupMembership
from reimburse.domain.user import User
from reimburse.repositories.base import BaseRepository


class GroupRepository(BaseRepository[Group]):
    model = Group

    async def arena(self, organization_id: str) -> dict[str, Group]:
        """All groups of the organization keyed by id."""
        items, _ = await self.list(organization_id, order_by="name", order="asc")
        return {g.id: g for g in items}

    async def detach_children(self, group_id: str) -> None:
        await self._session.execute(
            update(Group).where(Group.parent_group_id == group_id).values(parent_group_id=None)
        )

    async def list_children(self, group_id: str) -> list[Group]:
        result = await self._session.execute(
            select(Group).where(Group.parent_group_id == group_id).order_by(Group.name.asc())
        )
        return list(result.scalars().all())


class GroupMembershipRepository(BaseRepository[GroupMembership]):
    model = GroupMembership

    async def get_membership(self, group_id: str, user_id: str) -> GroupMembership | None:
        result = await self._session.execute(
            select(GroupMembership)
            .where(GroupMembership.group_id == group_id)
            .where(GroupMembership.user_id == user_id)
        )
        return result.scalars().first()

    async def members_by_group(self, group_ids: list[str]) -> dict[str, list[User]]:
        """Map each group id to its member users (groups without members are absent)."""
        if not group_ids:
            return {}
        result = await self._session.execute(
            select(GroupMembership.group_id, User)
            .join(User, User.id == GroupMembership.user_id)
            .where(GroupMembership.group_id.in_(group_ids))
            .order_by(GroupMembership.created_at.asc())
        )
        members: dict[str, list[User]] = {}
        for group_id, user in result.all():
            members.setdefault(group_id, []).append(user)
        return members

    async def delete_for_group(self, group_id: str) -> None:
        await self._session.execute(
            delete(GroupMembership).where(GroupMembership.group_id == group_id)
        )

    async def delete_for_user_in_organization(self, organization_id: str, user_id: str) -> None:
        group_ids = select(Group.id).where(Group.organization_id == organization_id)
        await self._session.execute(
            delete(GroupMembership)
            .where(GroupMembership.user_id == user_id)
            .where(GroupMembership.group_id.in_(group_ids))
        )
