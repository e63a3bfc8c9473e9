"""Async SQLAlchemy engine, session factory, declarative Base, and the unit-of-work dependency."""


from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from reimburse.core.config import settings


def _engine_options(url: str) -> dict:
    options: dict = {"echo": settings.is_development}
    if url.startswith("sqlite"):
        # aiosqlite runs each connection on its own worker thread
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """All ORM models inherit from this base."""


async def create_schema() -> None:
    """Create any missing tables. Local development only; deployments run Alembic."""
    import reimburse.domain  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session.

    Everything a request writes is committed together at the end, or rolled
    back together if anything raises.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
