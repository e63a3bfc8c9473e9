"""Organization and membership Pydantic schemas."""


from datetime import datetime

from pydantic import EmailStr, Field

from reimburse.domain.organization import Role
from reimburse.schemas.common import CamelModel
from reimburse.schemas.user import UserOut

class OrganizationCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)

class OrganizationUpdate(CamelModel):
    name: str = Field(min_length=1, max_length=255)

class MembershipOut(CamelModel):
    id: str
    organization_id: str
    user_id: str
    role: Role
    created_at: datetime

class MemberOut(MembershipOut):
    user: UserOut

class OrganizationOut(CamelModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime

class OrganizationDetailOut(OrganizationOut):
    memberships: list[MembershipOut] = []

class InviteUser(CamelModel):
    email: EmailStr
    role: Role = Role.MEMBER

class MemberRoleUpdate(CamelModel):
    role: Role
