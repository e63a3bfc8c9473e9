"""Category service — organization-scoped expense categories.

Rule: No SQLAlchemy queries / no FastAPI here. Repositories do the DB work,
business rule violations raise AppException subclasses.
"""


from sqlalchemy.ext.asyncio import AsyncSession

from reimburse.core.exceptions import ConflictError, NotFoundError
from reimburse.domain.category import ExpenseCategory
from reimburse.domain.organization import Role
from reimburse.repositories.category import CategoryRepository
from reimburse.schemas.category import CategoryCreate, CategoryUpdate
from reimburse.services.authorization import Authorizer

_DUPLICATE_NAME = "Category name already exists in this organization"

class CategoryService:
    def __init__(self, session: AsyncSession):
        self._repo = CategoryRepository(session)
        self._auth = Authorizer(session)

    async def _get_or_404(self, category_id: str) -> ExpenseCategory:
        category = await self._repo.get_by_id(category_id)
        if not category:
            raise NotFoundError("Category", message="Category not found")
        return category

    async def list_categories(self, organization_id: str, user_id: str) -> list[ExpenseCategory]:
        await self._auth.require(organization_id, user_id)
        items, _ = await self._repo.list(organization_id, order_by="name", order="asc")
        return items

    async def get_category(self, category_id: str, user_id: str) -> ExpenseCategory:
        category = await self._get_or_404(category_id)
        await self._auth.require(category.organization_id, user_id)
        return category

    async def create_category(self, data: CategoryCreate, user_id: str) -> ExpenseCategory:
        await self._auth.require(
            data.organization_id, user_id, Role.ADMIN, "Only admins can create categories"
        )
        if await self._repo.name_taken(data.organization_id, data.name):
            raise ConflictError(_DUPLICATE_NAME)
        return await self._repo.create(**data.model_dump())

    async def update_category(
        self, category_id: str, data: CategoryUpdate, user_id: str
    ) -> ExpenseCategory:
        category = await self._get_or_404(category_id)
        await self._auth.require(
            category.organization_id, user_id, Role.ADMIN, "Only admins can update categories"
        )
        if await self._repo.name_taken(category.organization_id, data.name, exclude_id=category.id):
            raise ConflictError(_DUPLICATE_NAME)
        return await self._repo.update(category, name=data.name, description=data.description)

    async def delete_category(self, category_id: str, user_id: str) -> None:
        category = await self._get_or_404(category_id)
        await self._auth.require(
            category.organization_id, user_id, Role.ADMIN, "Only admins can delete categories"
        )
        if await self._repo.is_referenced(category.id):
            raise ConflictError("Category is in use by expenses or policies")
        await self._repo.delete(category)
