"""
Unit tests for the error hierarchy and the gateway adapter.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from src.core.errors import (
    AmbiguousResultError,
    ClinicQueryError,
    GatewayError,
    NoResultError,
    ValidationError,
)
from src.repositories.base import BaseRepository


class TestErrorHierarchy:
    def test_all_derive_from_base(self):
        for klass in (ValidationError, NoResultError, AmbiguousResultError, GatewayError):
            assert issubclass(klass, ClinicQueryError)

    def test_message_with_context(self):
        err = GatewayError("list_pets", context={"params": {}})
        assert str(err) == "Query 'list_pets' failed in the persistence layer (Context: params={})"

    def test_validation_names_parameter(self):
        err = ValidationError("species")
        assert err.parameter == "species"
        assert "species" in str(err)


def _session_returning(result=None, error=None):
    session = Mock()
    session.execute = AsyncMock(return_value=result, side_effect=error)
    return session


class TestBaseRepository:
    async def test_scalar_none_is_no_result(self):
        result = Mock()
        result.scalar_one_or_none.return_value = None
        repo = BaseRepository(_session_returning(result))
        with pytest.raises(NoResultError, match="earliest"):
            await repo.run_scalar(select(1), name="earliest")

    async def test_scalar_zero_is_a_value(self):
        result = Mock()
        result.scalar_one_or_none.return_value = 0
        repo = BaseRepository(_session_returning(result))
        assert await repo.run_scalar(select(1)) == 0

    async def test_params_passed_separately(self):
        result = Mock()
        result.scalars.return_value.all.return_value = []
        session = _session_returning(result)
        statement = select(1)
        await BaseRepository(session).run_list(statement, {"species": "Perro"})
        session.execute.assert_awaited_once_with(statement, {"species": "Perro"})

    async def test_sqlalchemy_errors_wrapped(self):
        boom = OperationalError("SELECT 1", {}, Exception("down"))
        repo = BaseRepository(_session_returning(error=boom))
        with pytest.raises(GatewayError) as excinfo:
            await repo.run_list(select(1), name="list_pets")
        assert excinfo.value.__cause__ is boom

    async def test_other_errors_propagate_unchanged(self):
        repo = BaseRepository(_session_returning(error=KeyError("x")))
        with pytest.raises(KeyError):
            await repo.run_scalar(select(1))

    async def test_bind_overflow_wrapped(self):
        overflow = OverflowError("Python int too large to convert to SQLite INTEGER")
        repo = BaseRepository(_session_returning(error=overflow))
        with pytest.raises(GatewayError) as excinfo:
            await repo.run_scalar(select(1), {"threshold": 2**70}, name="owners_with_more_than")
        assert excinfo.value.__cause__ is overflow
