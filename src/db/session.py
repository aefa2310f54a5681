from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from uuid import uuid4

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.logging import unit_of_work_id_var
from .config import Settings, get_settings

logger = logging.getLogger(__name__)

_ENGINE: AsyncEngine | None = None
_SESSION_MAKER: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine_initialized(settings: Optional[Settings] = None) -> None:
    """
    Lazily initialize the AsyncEngine and session maker.
    """
    global _ENGINE, _SESSION_MAKER
    if _ENGINE is None:
        settings = settings or get_settings()
        _ENGINE = create_async_engine(
            settings.async_database_url,
            echo=settings.SQL_ECHO,
            pool_pre_ping=True,
        )
    if _SESSION_MAKER is None:
        _SESSION_MAKER = build_session_maker(_ENGINE)


# PUBLIC_INTERFACE
def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to the given engine with the project defaults."""
    return async_sessionmaker(
        bind=engine, expire_on_commit=False, autoflush=False, autocommit=False
    )


# PUBLIC_INTERFACE
def get_engine() -> AsyncEngine:
    """Return the global AsyncEngine instance."""
    _ensure_engine_initialized()
    assert _ENGINE is not None
    return _ENGINE


# PUBLIC_INTERFACE
async def dispose_engine() -> None:
    """Dispose the global engine and forget the session factory."""
    global _ENGINE, _SESSION_MAKER
    if _ENGINE is not None:
        await _ENGINE.dispose()
    _ENGINE = None
    _SESSION_MAKER = None


# PUBLIC_INTERFACE
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield an AsyncSession suitable for FastAPI dependency injection.
    Ensures engine/session factory is initialized.
    """
    _ensure_engine_initialized()
    assert _SESSION_MAKER is not None
    async with _SESSION_MAKER() as session:
        yield session


# PUBLIC_INTERFACE
@asynccontextmanager
async def unit_of_work(
    session_maker: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Async context manager scoping one execution context to one unit of work.

    Usage:
        async with unit_of_work() as session:
            pets = await service.list_pets(session)

    The session is closed on every exit path. Sessions must not be shared
    between concurrent callers; open one unit of work per caller instead.
    """
    if session_maker is None:
        _ensure_engine_initialized()
        session_maker = _SESSION_MAKER
    assert session_maker is not None

    token = unit_of_work_id_var.set(uuid4().hex[:12])
    logger.debug("Opening unit of work")
    try:
        async with session_maker() as session:
            yield session
    finally:
        logger.debug("Closed unit of work")
        unit_of_work_id_var.reset(token)
