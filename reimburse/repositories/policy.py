"""Policy repository — the two lookups behind policy resolution."""

from reimburse.domain.policy import Policy, PolicyScope, scope_user_id
from reimburse.repositories.base import BaseRepository


class PolicyRepository(BaseRepository[Policy]):
    model = Policy

    async def find_for_scope(
        self, organization_id: str, category_id: str, scope: PolicyScope
    ) -> Policy | None:
        """Return the policy occupying *scope* for the category, if any.

        At most one row can match: (organization, category, user) is unique and
        the organization-wide slot has its own partial unique index.
        """
        user_id = scope_user_id(scope)
        q = self._scoped_query(organization_id).where(Policy.category_id == category_id)
        if user_id is None:
            q = q.where(Policy.user_id.is_(None))
        else:
            q = q.where(Policy.user_id == user_id)
        result = await self._session.execute(q)
        return result.scalars().first()
