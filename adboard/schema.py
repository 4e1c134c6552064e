"""
Schema manager: creates the ``advertisement`` and ``photos`` tables and
their indexes if they are missing.

``Base.metadata.create_all`` checks for every table and index before
issuing DDL, so calling ``ensure_schema`` repeatedly is harmless.  Errors
are not caught: the application lifespan lets them abort startup.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from adboard.database import Base

# Register the mapped tables on Base.metadata.
import adboard.models  # noqa: F401

logger = logging.getLogger(__name__)


async def ensure_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))
