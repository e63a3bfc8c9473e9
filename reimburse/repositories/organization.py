"""Organization and membership repositories.

``MembershipRepository`` is the membership directory: the single source of
truth for "which role does this user hold in this organization".
"""

from sqlalchemy import select

from reimburse.domain.organization import Membership, Organization, Role
from reimburse.domain.user import User
from reimburse.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    model = Organization

    async def list_for_user(self, user_id: str) -> list[Organization]:
        result = await self._session.execute(
            select(Organization)
            .join(Membership, Membership.organization_id == Organization.id)
            .where(Membership.user_id == user_id)
            .order_by(Organization.created_at.asc())
        )
        return list(result.scalars().all())


class MembershipRepository(BaseRepository[Membership]):
    model = Membership

    async def get_membership(self, organization_id: str, user_id: str) -> Membership | None:
        result = await self._session.execute(
            select(Membership)
            .where(Membership.organization_id == organization_id)
            .where(Membership.user_id == user_id)
        )
        return result.scalars().first()

    async def role_of(self, organization_id: str, user_id: str) -> Role | None:
        """The caller's role in the organization, or None without a membership."""
        membership = await self.get_membership(organization_id, user_id)
        return membership.role if membership else None

    async def list_members(self, organization_id: str) -> list[tuple[Membership, User]]:
        result = await self._session.execute(
            select(Membership, User)
            .join(User, User.id == Membership.user_id)
            .where(Membership.organization_id == organization_id)
            .order_by(Membership.created_at.asc())
        )
        return [(m, u) for m, u in result.all()]
