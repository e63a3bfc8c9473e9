"""Policy service — spending policy CRUD and the resolution debugger."""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.exceptions import ConflictError, NotFoundError, ValidationError
from reimburse.domain.organization import Role
from reimburse.domain.policy import OrganizationScope, Policy, PolicyScope, UserScope
from reimburse.repositories.category import CategoryRepository
from reimburse.repositories.organization import MembershipRepository
from reimburse.repositories.policy import PolicyRepository
from reimburse.schemas.policy import PolicyCreate, PolicyUpdate
from reimburse.services.authorization import Authorizer
from reimburse.services.policy_resolver import PolicyResolution, PolicyResolver

logger = logging.getLogger(__name__)

class PolicyService:
    def __init__(self, session: AsyncSession):
        self._repo = PolicyRepository(session)
        self._categories = CategoryRepository(session)
        self._memberships = MembershipRepository(session)
        self._resolver = PolicyResolver(session)
        self._auth = Authorizer(session)

    async def _get_or_404(self, policy_id: str) -> Policy:
        policy = await self._repo.get_by_id(policy_id)
        if not policy:
            raise NotFoundError("Policy", message="Policy not found")
        return policy

    async def _require_category(self, organization_id: str, category_id: str) -> None:
        if await self._categories.get_in_organization(organization_id, category_id) is None:
            raise NotFoundError("Category", message="Category not found in this organization")

    async def list_policies(self, organization_id: str, user_id: str) -> list[Policy]:
        await self._auth.require(organization_id, user_id)
        items, _ = await self._repo.list(organization_id, order_by="created_at", order="asc")
        return items

    async def get_policy(self, policy_id: str, user_id: str) -> Policy:
        policy = await self._get_or_404(policy_id)
        await self._auth.require(policy.organization_id, user_id)
        return policy

    async def create_policy(self, data: PolicyCreate, user_id: str) -> Policy:
        await self._auth.require(
            data.organization_id, user_id, Role.ADMIN, "Only admins can create policies"
        )
        await self._require_category(data.organization_id, data.category_id)

        scope: PolicyScope = OrganizationScope()
        if data.user_id is not None:
            if await self._memberships.get_membership(data.organization_id, data.user_id) is None:
                raise ValidationError("User is not a member of this organization")
            scope = UserScope(data.user_id)

        if await self._repo.find_for_scope(data.organization_id, data.category_id, scope):
            raise ConflictError("A policy already exists for this category and scope")

        policy = await self._repo.create(**data.model_dump())
        logger.info(
            "Created policy %s (category=%s, scope=%s, max_amount=%d, auto_approve=%s)",
            policy.id, policy.category_id, policy.scope, policy.max_amount, policy.auto_approve,
        )
        return policy

    async def update_policy(self, policy_id: str, data: PolicyUpdate, user_id: str) -> Policy:
        policy = await self._get_or_404(policy_id)
        await self._auth.require(
            policy.organization_id, user_id, Role.ADMIN, "Only admins can update policies"
        )
        return await self._repo.update(
            policy, **data.model_dump(exclude_none=True, exclude_unset=True)
        )

    async def delete_policy(self, policy_id: str, user_id: str) -> None:
        policy = await self._get_or_404(policy_id)
        await self._auth.require(
            policy.organization_id, user_id, Role.ADMIN, "Only admins can delete policies"
        )
        await self._repo.delete(policy)

    async def resolve(
        self, organization_id: str, target_user_id: str, category_id: str, user_id: str
    ) -> PolicyResolution:
        """Explain which policy would govern *target_user_id*'s expenses in a category."""
        await self._auth.require(organization_id, user_id)
        await self._require_category(organization_id, category_id)
        return await self._resolver.resolve(organization_id, target_user_id, category_id)
