"""
Institute Portal Backend: Database Session Management
======================================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       FastAPI session dependency.
How:   One pooled engine per process; each request gets its own session that
       commits on success and rolls back on error.

The declarative base also carries `to_dict()`, the single bridge between ORM
rows and the pure transform functions in `portal.transforms`. Transforms never
see ORM objects, only plain mappings of column values.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from portal.config import settings


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=3600,
    echo=settings.log_level == "DEBUG",
)

# expire_on_commit=False: rows stay readable after the request's commit,
# which happens after the transforms have already run
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Adds `to_dict()` so services can hand rows to the transform layer as
    plain mappings. Relationships are deliberately excluded: the caller
    decides which relations to attach and under which key.
    """

    def to_dict(self) -> Dict[str, Any]:
        """Column values of this row keyed by attribute name."""
        return {
            column.key: getattr(self, column.key)
            for column in self.__table__.columns
        }


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency providing one database session per request.

    Commits when the handler returns, rolls back and re-raises on any
    exception so the global handlers can answer, and always closes the
    session to return its connection to the pool.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """Closes all pooled connections. Called from the app lifespan on shutdown."""
    await engine.dispose()
