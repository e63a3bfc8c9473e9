"""Message board Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from reimburse.schemas.common import CamelModel
from reimburse.schemas.user import UserOut

class MessageCreate(CamelModel):
    content: str = Field(min_length=1)

class MessageOut(CamelModel):
    id: str
    organization_id: str
    user_id: str
    content: str
    author: UserOut
    created_at: datetime
