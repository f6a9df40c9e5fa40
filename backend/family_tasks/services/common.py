import contextlib
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from family_tasks.core.errors import StoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def store_errors(db: AsyncSession, action: str):
    """
    Turn driver/ORM failures inside the block into StoreError.

    The session is rolled back so a half-applied unit of work is never committed.
    """
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Store failure during %s", action)
        with contextlib.suppress(SQLAlchemyError, OSError):
            await db.rollback()
        raise StoreError(f"Failed to {action}") from e
