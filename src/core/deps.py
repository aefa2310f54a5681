from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.db.session import get_async_session
from src.services.clinic import ClinicQueryService

_SERVICE = ClinicQueryService()


# PUBLIC_INTERFACE
async def get_request_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session scoped to the current request.

    Each request gets its own session, closed once the response is sent.
    """
    async for session in get_async_session():
        yield session


# PUBLIC_INTERFACE
def get_query_service() -> ClinicQueryService:
    """Return the shared, stateless query service."""
    return _SERVICE
