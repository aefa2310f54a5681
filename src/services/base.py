from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import ValidationError
from src.repositories.base import BaseRepository


class BaseService:
    """
    Base class for services.

    Services keep query orchestration and result shaping, delegating execution
    to repositories. They hold no session: each operation receives the caller's
    execution context and builds a short-lived repository around it.
    """

    repository_class = BaseRepository

    def _gateway(self, session: AsyncSession) -> BaseRepository:
        return self.repository_class(session)

    @staticmethod
    def _require(name: str, value: Any) -> Any:
        """Raise ValidationError when a required parameter is None."""
        if value is None:
            raise ValidationError(name)
        return value
