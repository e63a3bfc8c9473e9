"""Policy resolution: which spending policy governs a (user, category) pair.

A user-specific policy always wins over the organization-wide one for the same
category, whatever their limits or auto-approve flags. Finding neither is a
normal outcome; the caller decides what "no policy" means.
"""


from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.domain.policy import OrganizationScope, Policy, UserScope
from reimburse.repositories.policy import PolicyRepository

@dataclass(frozen=True)
class PolicyResolution:
    user_specific_policy: Policy | None
    organization_policy: Policy | None

    @property
    def selected_policy(self) -> Policy | None:
        if self.user_specific_policy is not None:
            return self.user_specific_policy
        return self.organization_policy

    @property
    def reason(self) -> str:
        if self.user_specific_policy is not None:
            if self.organization_policy is not None:
                return "User-specific policy overrides the organization policy"
            return "User-specific policy applies"
        if self.organization_policy is not None:
            return "Organization policy applies (no user-specific policy)"
        return "No policy found for this user and category"

class PolicyResolver:
    def __init__(self, session: AsyncSession):
        self._repo = PolicyRepository(session)

    async def resolve(
        self, organization_id: str, user_id: str, category_id: str
    ) -> PolicyResolution:
        """Look up both candidate policies.

        The category must already be known to belong to the organization.
        """
        user_policy = await self._repo.find_for_scope(
            organization_id, category_id, UserScope(user_id)
        )
        org_policy = await self._repo.find_for_scope(
            organization_id, category_id, OrganizationScope()
        )
        return PolicyResolution(user_specific_policy=user_policy, organization_policy=org_policy)
