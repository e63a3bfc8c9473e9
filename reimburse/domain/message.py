"""SQLAlchemy ORM model for the organization message board."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reimburse.db.base import Base
from reimburse.domain.mixins import CreatedAtMixin, TenantMixin

if TYPE_CHECKING:
    from reimburse.domain.user import User


class Message(Base, TenantMixin, CreatedAtMixin):
    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped[User] = relationship(lazy="selectin")
