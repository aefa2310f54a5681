from __future__ import annotations

import logging
from typing import Any, List, Optional

from sqlalchemy import Executable
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import GatewayError, NoResultError

logger = logging.getLogger(__name__)


class BaseRepository:
    """
    Gateway adapter over an AsyncSession.

    Statements are executed with their named parameters passed separately, so
    values always travel as bound data. Any SQLAlchemy failure, and a driver
    refusing to bind an out-of-range integer, surfaces as GatewayError with the
    original exception chained.

    Note:
      The session belongs to the caller's unit of work. Build one repository
      per session and never share it across concurrent callers.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def execute(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute a SQLAlchemy statement."""
        return await self.session.execute(statement, params or {})

    async def run_list(
        self,
        statement: Executable,
        params: Optional[dict[str, Any]] = None,
        *,
        name: str = "query",
    ) -> List[Any]:
        """Execute and return every scalar of the first column (possibly empty)."""
        logger.debug("Running %s params=%s", name, params or {})
        try:
            result = await self.execute(statement, params)
            return list(result.scalars().all())
        except (SQLAlchemyError, OverflowError) as exc:
            logger.exception("Query %s failed", name)
            raise GatewayError(name, context={"params": params or {}}) from exc

    async def run_scalar(
        self,
        statement: Executable,
        params: Optional[dict[str, Any]] = None,
        *,
        name: str = "query",
    ) -> Any:
        """
        Execute and return a single scalar.

        Raises:
            NoResultError: zero rows, or an aggregate that evaluated to NULL.
            GatewayError: the persistence layer failed.
        """
        logger.debug("Running %s params=%s", name, params or {})
        try:
            result = await self.execute(statement, params)
            value = result.scalar_one_or_none()
        except (SQLAlchemyError, OverflowError) as exc:
            logger.exception("Query %s failed", name)
            raise GatewayError(name, context={"params": params or {}}) from exc
        if value is None:
            raise NoResultError(name)
        return value
