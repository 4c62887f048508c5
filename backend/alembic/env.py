"""Alembic environment — async migrations for the cities / points-of-interest schema.

Design Decisions:
    - URL resolution goes through Settings when DATABASE_URL is set, so the
      postgresql:// → postgresql+asyncpg:// rewrite lives in one place
    - alembic.ini's sqlalchemy.url is the local docker-compose fallback
    - render_as_batch on SQLite: ALTER TABLE there needs copy-and-move
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from cityinfo.config import Settings
from cityinfo.db.base import Base
import cityinfo.models  # noqa: F401  (populates Base.metadata)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def database_url() -> str:
    if os.environ.get("DATABASE_URL"):
        return Settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _configure(url: str, **kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=make_url(url).get_backend_name() == "sqlite",
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of executing it."""
    url = database_url()
    _configure(
        url, url=url, literal_binds=True, dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection, url: str) -> None:
    _configure(url, connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    url = database_url()
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = url
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync, url)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
