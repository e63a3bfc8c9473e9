"""Expense category Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from reimburse.domain.category import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH
from reimburse.schemas.common import CamelModel

class CategoryCreate(CamelModel):
    organization_id: str
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

class CategoryUpdate(CamelModel):
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

class CategoryOut(CamelModel):
    id: str
    organization_id: str
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime
