# app/database.py
import logging
from typing import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from app.config import settings

logger = logging.getLogger(__name__)

db_url = settings.DATABASE_URL

# Ensure asyncpg is used
if db_url and db_url.startswith("postgresql://") and "+asyncpg" not in db_url:
    db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)

engine = create_async_engine(db_url, echo=settings.SQL_ECHO)


def _unicode_lower(value):
    return value.lower() if value is not None else None


def _on_sqlite_connect(dbapi_conn, connection_record):
    # Built-in LOWER() only folds ASCII letters; ILIKE compiles to LOWER() on SQLite.
    dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


def register_sqlite_functions(bind: AsyncEngine) -> None:
    if bind.dialect.name == "sqlite":
        event.listen(bind.sync_engine, "connect", _on_sqlite_connect)


register_sqlite_functions(engine)

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
Base = declarative_base()

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables(bind: AsyncEngine = engine) -> None:
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def reset_schema(bind: AsyncEngine = engine) -> None:
    """Drop and recreate every table. All data is lost and ids restart at 1."""
    logger.warning("Resetting database schema: dropping all tables")
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema reset; tables recreated")
