"""
Pytest fixtures for the reimbursement API test suite.

Provides:
- A fresh in-memory SQLite database (aiosqlite) per test, schema from ORM metadata
- A service-level AsyncSession and an HTTP client bound to the same database
- Factory helpers for users, organizations, categories, policies, expenses
"""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from datetime import date, datetime
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import reimburse.domain  # noqa: F401  (register all models on Base.metadata)
from reimburse.db.base import Base, get_db
from reimburse.domain.category import ExpenseCategory
from reimburse.domain.expense import Expense, ExpenseReview, ExpenseStatus
from reimburse.domain.group import Group
from reimburse.domain.organization import Membership, Organization, Role
from reimburse.domain.policy import Policy, PolicyPeriod
from reimburse.domain.user import User
from reimburse.main import create_app


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory):
    """A fresh app whose get_db uses the test database."""

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db] = _get_test_db
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def server_error_client(app):
    """Client that receives the 500 response instead of the re-raised server error."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# =============================================================================
# Factories
# =============================================================================


class Factory:
    """Creates rows directly, bypassing service-level authorization."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._seq = 0

    async def _add(self, instance):
        self._session.add(instance)
        await self._session.flush()
        return instance

    async def user(self, email: Optional[str] = None, name: str = "Test User") -> User:
        self._seq += 1
        return await self._add(User(email=email or f"user{self._seq}@example.com", name=name))

    async def organization(self, owner: User, name: str = "Test Org") -> Organization:
        org = await self._add(Organization(name=name))
        await self.member(org, owner, Role.ADMIN)
        return org

    async def member(self, org: Organization, user: User, role: Role = Role.MEMBER) -> Membership:
        return await self._add(Membership(organization_id=org.id, user_id=user.id, role=role))

    async def category(self, org: Organization, name: str = "Travel", description: Optional[str] = None) -> ExpenseCategory:
        return await self._add(
            ExpenseCategory(organization_id=org.id, name=name, description=description)
        )

    async def policy(
        self,
        org: Organization,
        category: ExpenseCategory,
        *,
        user: Optional[User] = None,
        max_amount: int = 50000,
        auto_approve: bool = False,
        period: PolicyPeriod = PolicyPeriod.MONTHLY,
    ) -> Policy:
        return await self._add(
            Policy(
                organization_id=org.id,
                category_id=category.id,
                user_id=user.id if user else None,
                max_amount=max_amount,
                auto_approve=auto_approve,
                period=period,
            )
        )

    async def expense(
        self,
        org: Organization,
        user: User,
        category: ExpenseCategory,
        *,
        amount: int = 10000,
        status: ExpenseStatus = ExpenseStatus.SUBMITTED,
        created_at: Optional[datetime] = None,
    ) -> Expense:
        expense = Expense(
            organization_id=org.id,
            user_id=user.id,
            category_id=category.id,
            amount=amount,
            date=date.today(),
            description="Test expense",
            status=status,
            reviews=[ExpenseReview(reviewer_id=user.id, status=status, comment="seeded")],
        )
        if created_at is not None:
            expense.created_at = created_at
        return await self._add(expense)

    async def group(self, org: Organization, name: str, parent: Optional[Group] = None) -> Group:
        return await self._add(
            Group(organization_id=org.id, name=name, parent_group_id=parent.id if parent else None)
        )


@pytest.fixture
def factory(session) -> Factory:
    return Factory(session)


@pytest.fixture
async def admin(factory) -> User:
    return await factory.user(email="admin@example.com", name="Admin")


@pytest.fixture
async def org(factory, admin) -> Organization:
    return await factory.organization(admin)
