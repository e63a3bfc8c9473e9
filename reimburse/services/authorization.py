"""Organization authorization guard.

Every organization-scoped operation calls :meth:`Authorizer.require` before it
touches any other data. The guard fails closed: a caller without a membership
is rejected whatever role was asked for.
"""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.exceptions import ForbiddenError, NotMemberError
from reimburse.domain.organization import Role
from reimburse.repositories.organization import MembershipRepository

logger = logging.getLogger(__name__)

class Authorizer:
    def __init__(self, session: AsyncSession):
        self._memberships = MembershipRepository(session)

    async def require(
        self,
        organization_id: str,
        user_id: str,
        required: Role = Role.MEMBER,
        denied_message: str | None = None,
    ) -> Role:
        """Return the caller's role or raise.

        The role comes from :meth:`MembershipRepository.role_of`. With
        ``required=Role.MEMBER`` a missing membership raises
        :class:`NotMemberError`. With ``required=Role.ADMIN`` both a missing
        membership and a plain membership raise :class:`ForbiddenError` carrying
        *denied_message*, so admin-only actions never reveal whether the caller
        belongs to the organization.
        """
        role = await self._memberships.role_of(organization_id, user_id)

        if required is Role.ADMIN:
            if role != Role.ADMIN:
                logger.info(
                    "Denied admin action for user %s in organization %s", user_id, organization_id
                )
                raise ForbiddenError(denied_message or "Only admins can perform this action")
            return role

        if role is None:
            logger.info("User %s is not a member of organization %s", user_id, organization_id)
            raise NotMemberError()
        return role
