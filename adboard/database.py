"""
Storage handles for the board.

The process owns one engine (and its connection pool) plus the session
factory built on it.  Request handlers receive a session through
``get_db`` and hand it to the advertisement operations, which open their
own transaction on it.
"""
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from adboard.config import settings
from adboard.middleware import install_query_counter


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine whose statements feed ``X-Query-Count``."""
    new_engine = create_async_engine(url, **kwargs)
    install_query_counter(new_engine)
    return new_engine


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG, pool_pre_ping=True)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with async_session() as session:
        yield session
