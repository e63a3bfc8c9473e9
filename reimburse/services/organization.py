"""Organization service — organizations and their member directory."""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.exceptions import ConflictError, NotFoundError, ValidationError
from reimburse.domain.organization import Membership, Organization, Role
from reimburse.domain.user import User
from reimburse.repositories.group import GroupMembershipRepository
from reimburse.repositories.organization import MembershipRepository, OrganizationRepository
from reimburse.repositories.user import UserRepository
from reimburse.services.authorization import Authorizer

logger = logging.getLogger(__name__)

class OrganizationService:
    def __init__(self, session: AsyncSession):
        self._repo = OrganizationRepository(session)
        self._memberships = MembershipRepository(session)
        self._group_members = GroupMembershipRepository(session)
        self._users = UserRepository(session)
        self._auth = Authorizer(session)

    async def create_organization(self, name: str, user_id: str) -> tuple[Organization, list[Membership]]:
        """Create an organization with the caller as its first admin."""
        org = await self._repo.create(name=name)
        membership = await self._memberships.create(
            organization_id=org.id, user_id=user_id, role=Role.ADMIN
        )
        logger.info("User %s created organization %s", user_id, org.id)
        return org, [membership]

    async def list_organizations(self, user_id: str) -> list[Organization]:
        return await self._repo.list_for_user(user_id)

    async def get_organization(self, organization_id: str, user_id: str) -> Organization:
        org = await self._repo.get_by_id(organization_id)
        if not org:
            raise NotFoundError("Organization", message="Organization not found")
        await self._auth.require(org.id, user_id)
        return org

    async def update_organization(self, organization_id: str, name: str, user_id: str) -> Organization:
        await self._auth.require(
            organization_id, user_id, Role.ADMIN, "Only admins can update organization details"
        )
        org = await self._repo.get_by_id(organization_id)
        if not org:
            raise NotFoundError("Organization", message="Organization not found")
        return await self._repo.update(org, name=name)

    async def invite_user(
        self, organization_id: str, email: str, role: Role, user_id: str
    ) -> Membership:
        await self._auth.require(
            organization_id, user_id, Role.ADMIN, "Only admins can invite users"
        )
        invitee = await self._users.get_by_email(email)
        if invitee is None:
            raise NotFoundError("User", message="User not found with this email")
        if await self._memberships.get_membership(organization_id, invitee.id):
            raise ConflictError("User is already a member of this organization")
        return await self._memberships.create(
            organization_id=organization_id, user_id=invitee.id, role=role
        )

    async def list_members(self, organization_id: str, user_id: str) -> list[tuple[Membership, User]]:
        await self._auth.require(organization_id, user_id)
        return await self._memberships.list_members(organization_id)

    async def _get_member_or_404(self, organization_id: str, member_user_id: str) -> Membership:
        membership = await self._memberships.get_membership(organization_id, member_user_id)
        if membership is None:
            raise NotFoundError("Member", message="Member not found")
        return membership

    async def remove_member(self, organization_id: str, member_user_id: str, user_id: str) -> None:
        await self._auth.require(
            organization_id, user_id, Role.ADMIN, "Only admins can remove members"
        )
        if member_user_id == user_id:
            raise ValidationError("You cannot remove yourself from the organization")
        membership = await self._get_member_or_404(organization_id, member_user_id)
        await self._group_members.delete_for_user_in_organization(organization_id, member_user_id)
        await self._memberships.delete(membership)
        logger.info("User %s removed %s from organization %s", user_id, member_user_id, organization_id)

    async def update_member_role(
        self, organization_id: str, member_user_id: str, role: Role, user_id: str
    ) -> Membership:
        await self._auth.require(
            organization_id, user_id, Role.ADMIN, "Only admins can change member roles"
        )
        if member_user_id == user_id:
            raise ValidationError("You cannot change your own role")
        membership = await self._get_member_or_404(organization_id, member_user_id)
        return await self._memberships.update(membership, role=role)
