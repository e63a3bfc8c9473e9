"""Alembic migration environment for the reimburse schema (async engine)."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine

import reimburse.domain  # noqa: F401  (register every model on Base.metadata)
from reimburse.core.config import settings
from reimburse.db.base import Base

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

# render_as_batch: SQLite cannot ALTER constraints in place.
# compare_type: amounts and enums change column types over time.
_OPTIONS = {
    "target_metadata": Base.metadata,
    "render_as_batch": True,
    "compare_type": True,
}


def run_migrations_offline() -> None:
    context.configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection) -> None:
    context.configure(connection=connection, **_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(settings.database_url)
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
