from typing import Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .config import settings


def make_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    return create_async_engine(
        url or settings.ASYNC_DATABASE_URL,
        echo=settings.SQL_ECHO if echo is None else echo,
        pool_pre_ping=True,
    )


def make_sessionmaker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = make_engine()

AsyncSessionLocal = make_sessionmaker(engine)

Base = declarative_base()


async def init_db(bind: AsyncEngine = engine):
    """Create the three tables if they do not exist yet."""
    # Register every table on Base.metadata before create_all.
    from family_tasks.models import category, family_member, task  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request):
    session_factory = getattr(request.app.state, "session_factory", AsyncSessionLocal)
    async with session_factory() as session:
        yield session
