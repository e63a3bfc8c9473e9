"""Tests for CategoryService."""

from __future__ import annotations

import pytest

from reimburse.core.exceptions import ConflictError, ForbiddenError, NotFoundError, NotMemberError
from reimburse.schemas.category import CategoryCreate, CategoryUpdate
from reimburse.services.category import CategoryService


class TestCategoryService:
    async def test_list_is_ordered_by_name_and_scoped(self, session, factory, org, admin):
        other_org = await factory.organization(admin, name="Other")
        await factory.category(org, name="Travel")
        await factory.category(org, name="Meals")
        await factory.category(other_org, name="Equipment")

        items = await CategoryService(session).list_categories(org.id, admin.id)

        assert [c.name for c in items] == ["Meals", "Travel"]

    async def test_list_requires_membership(self, session, factory, org):
        outsider = await factory.user()

        with pytest.raises(NotMemberError, match="not a member"):
            await CategoryService(session).list_categories(org.id, outsider.id)

    async def test_get_requires_membership_in_owning_org(self, session, factory, org):
        outsider = await factory.user()
        category = await factory.category(org)

        with pytest.raises(NotMemberError):
            await CategoryService(session).get_category(category.id, outsider.id)

    async def test_get_missing(self, session, admin):
        with pytest.raises(NotFoundError, match="Category not found"):
            await CategoryService(session).get_category("missing", admin.id)

    async def test_admin_creates(self, session, org, admin):
        category = await CategoryService(session).create_category(
            CategoryCreate(organization_id=org.id, name="Travel", description="Flights"), admin.id
        )

        assert category.organization_id == org.id
        assert category.description == "Flights"

    @pytest.mark.parametrize("is_member", [True, False])
    async def test_non_admin_cannot_create(self, session, factory, org, is_member):
        user = await factory.user()
        if is_member:
            await factory.member(org, user)

        with pytest.raises(ForbiddenError, match="Only admins can create categories"):
            await CategoryService(session).create_category(
                CategoryCreate(organization_id=org.id, name="Travel"), user.id
            )

    async def test_duplicate_name_conflicts(self, session, factory, org, admin):
        await factory.category(org, name="Travel")

        with pytest.raises(ConflictError, match="Category name already exists in this organization"):
            await CategoryService(session).create_category(
                CategoryCreate(organization_id=org.id, name="Travel"), admin.id
            )

    async def test_same_name_allowed_in_other_organization(self, session, factory, org, admin):
        other_org = await factory.organization(admin, name="Other")
        await factory.category(other_org, name="Travel")

        category = await CategoryService(session).create_category(
            CategoryCreate(organization_id=org.id, name="Travel"), admin.id
        )

        assert category.name == "Travel"

    async def test_update_keeps_own_name(self, session, factory, org, admin):
        category = await factory.category(org, name="Travel")

        updated = await CategoryService(session).update_category(
            category.id, CategoryUpdate(name="Travel", description="Updated"), admin.id
        )

        assert updated.description == "Updated"

    async def test_update_to_taken_name_conflicts(self, session, factory, org, admin):
        await factory.category(org, name="Travel")
        meals = await factory.category(org, name="Meals")

        with pytest.raises(ConflictError):
            await CategoryService(session).update_category(
                meals.id, CategoryUpdate(name="Travel"), admin.id
            )

    async def test_member_cannot_update(self, session, factory, org):
        member = await factory.user()
        await factory.member(org, member)
        category = await factory.category(org)

        with pytest.raises(ForbiddenError, match="Only admins can update categories"):
            await CategoryService(session).update_category(
                category.id, CategoryUpdate(name="New"), member.id
            )

    async def test_delete_unused_category(self, session, factory, org, admin):
        category = await factory.category(org)
        service = CategoryService(session)

        await service.delete_category(category.id, admin.id)

        with pytest.raises(NotFoundError):
            await service.get_category(category.id, admin.id)

    async def test_delete_referenced_by_policy_is_refused(self, session, factory, org, admin):
        category = await factory.category(org)
        await factory.policy(org, category)

        with pytest.raises(ConflictError, match="in use"):
            await CategoryService(session).delete_category(category.id, admin.id)

    async def test_delete_referenced_by_expense_is_refused(self, session, factory, org, admin):
        category = await factory.category(org)
        await factory.expense(org, admin, category)

        with pytest.raises(ConflictError, match="in use"):
            await CategoryService(session).delete_category(category.id, admin.id)

    async def test_member_cannot_delete(self, session, factory, org):
        member = await factory.user()
        await factory.member(org, member)
        category = await factory.category(org)

        with pytest.raises(ForbiddenError, match="Only admins can delete categories"):
            await CategoryService(session).delete_category(category.id, member.id)
