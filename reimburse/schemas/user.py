"""User Pydantic schemas."""


from datetime import datetime

from pydantic import EmailStr, Field

from reimburse.schemas.common import CamelModel

class UserCreate(CamelModel):
    email: EmailStr
    name: str | None = Field(default=None, max_length=255)

class UserOut(CamelModel):
    id: str
    email: str
    name: str | None = None
    created_at: datetime
