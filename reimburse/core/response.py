"""`{data: ...}` response envelopes shared by every v1 endpoint."""


from typing import Generic, TypeVar

from pydantic import BaseModel

from reimburse.core.pagination import PageMeta, PaginationParams

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Paginated list: `{data: [...], meta: {total, page, limit, pages}}`."""

    data: list[T]
    meta: PageMeta


def paginated(items: list, total: int, params: PaginationParams) -> dict:
    return {"data": items, "meta": params.meta(total)}
