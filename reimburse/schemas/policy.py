"""Policy Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field

from reimburse.domain.policy import PolicyPeriod
from reimburse.schemas.common import CamelModel

class PolicyCreate(CamelModel):
    organization_id: str
    category_id: str
    user_id: str | None = Field(
        default=None,
        description="Narrow the policy to one member; omit for an organization-wide policy.",
    )
    max_amount: int = Field(gt=0, description="Limit per expense, in minor currency units.")
    period: PolicyPeriod = PolicyPeriod.MONTHLY
    auto_approve: bool = False

class PolicyUpdate(CamelModel):
    max_amount: int | None = Field(default=None, gt=0)
    period: PolicyPeriod | None = None
    auto_approve: bool | None = None

class PolicyOut(CamelModel):
    id: str
    organization_id: str
    category_id: str
    user_id: str | None = None
    max_amount: int
    period: PolicyPeriod
    auto_approve: bool
    created_at: datetime
    updated_at: datetime

class PolicyResolutionOut(CamelModel):
    """Both candidate policies and the one that governs the (user, category) pair."""

    user_specific_policy: PolicyOut | None = None
    organization_policy: PolicyOut | None = None
    selected_policy: PolicyOut | None = None
    reason: str
