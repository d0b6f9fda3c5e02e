from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from vodcms.exceptions import ConfigurationMissingError


class Base(DeclarativeBase):
    pass


def create_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine, reporting malformed URLs as configuration errors."""
    try:
        return create_async_engine(database_url, echo=echo, pool_pre_ping=True)
    except (ArgumentError, ImportError) as exc:
        raise ConfigurationMissingError(f"Unusable database_url: {exc}") from exc


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
