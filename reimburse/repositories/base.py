"""Generic async repository with pagination and organization scoping."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Lookups by primary key are unscoped so services can discover which
    organization a row belongs to and authorize against it. Anything that
    lists rows, or resolves an id on behalf of a given organization, goes
    through ``organization_id``.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _scoped_query(self, organization_id: str):
        """Return a SELECT filtered to one organization."""
        return select(self.model).where(self.model.organization_id == organization_id)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: str) -> ModelT | None:
        return await self._session.get(self.model, entity_id)

    async def get_in_organization(self, organization_id: str, entity_id: str) -> ModelT | None:
        """Return the row only if it belongs to *organization_id*."""
        result = await self._session.execute(
            self._scoped_query(organization_id).where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def list(
        self,
        organization_id: str,
        *,
        offset: int = 0,
        limit: int | None = None,
        order_by: str = "created_at",
        order: str = "desc",
        filters: dict[str, Any] | None = None,
    ) -> tuple[list[ModelT], int]:
        """Return (items, total_count) with pagination and optional column filters."""
        q = self._scoped_query(organization_id)

        # Apply simple equality filters
        if filters:
            for col_name, value in filters.items():
                if value is not None and hasattr(self.model, col_name):
                    q = q.where(getattr(self.model, col_name) == value)

        # Count
        count_q = select(func.count()).select_from(q.subquery())
        total = (await self._session.execute(count_q)).scalar_one()

        # Order + paginate
        col = getattr(self.model, order_by, None)
        if col is not None:
            q = q.order_by(col.desc() if order == "desc" else col.asc())
        if offset:
            q = q.offset(offset)
        if limit is not None:
            q = q.limit(limit)

        items = (await self._session.execute(q)).scalars().all()
        return list(items), total

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id + defaults
        await self._session.refresh(instance)
        return instance

    async def update(self, instance: ModelT, **kwargs: Any) -> ModelT:
        kwargs.pop("id", None)
        kwargs.pop("organization_id", None)
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    async def delete(self, instance: ModelT) -> None:
        await self._session.delete(instance)
        await self._session.flush()
