"""Offset pagination for feed-style list endpoints."""


import math

from fastapi import Query
from pydantic import BaseModel

from reimburse.core.config import settings


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=50`."""

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        limit: int = Query(
            default=settings.messages_page_limit, ge=1, le=200, description="Items per page"
        ),
    ):
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> PageMeta:
        # An empty result still reports one (empty) page
        return PageMeta(
            total=total,
            page=self.page,
            limit=self.limit,
            pages=max(1, math.ceil(total / self.limit)),
        )
