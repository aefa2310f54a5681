"""
Integration tests for the read-only HTTP surface.
"""

import logging
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from src.api import main as api_main
from src.api.main import app
from src.core.deps import get_request_session
from src.db.session import build_session_maker

from tests.conftest import populate


@pytest.fixture
async def client(session_maker):
    async def _session_override():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_request_session] = _session_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def schemaless_client(tmp_path):
    """Client whose sessions point at a SQLite file with no tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    session_maker = build_session_maker(engine)

    async def _session_override():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_request_session] = _session_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    await engine.dispose()


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json()["message"] == "Healthy"
        assert "X-Correlation-ID" in resp.headers

    async def test_startup_logs_environment(self, caplog, monkeypatch):
        monkeypatch.setattr(api_main.settings, "AUTO_SEED", False)
        monkeypatch.setattr(api_main.settings, "ENVIRONMENT", "test")
        caplog.set_level(logging.INFO, logger="src.api.main")
        await api_main.on_startup()
        assert "environment=test" in caplog.text


class TestPetRoutes:
    async def test_list_pets(self, seeded, client):
        resp = await client.get("/api/v1/pets")
        assert resp.status_code == 200
        assert len(resp.json()) == 5

    async def test_by_species(self, seeded, client):
        resp = await client.get("/api/v1/pets/by-species/Gato")
        assert sorted(p["name"] for p in resp.json()) == ["Firu", "Nala"]

    async def test_search(self, seeded, client):
        resp = await client.get("/api/v1/pets/search", params={"q": "ucho"})
        assert [p["name"] for p in resp.json()] == ["Lucho"]

    async def test_search_without_fragment(self, seeded, client):
        resp = await client.get("/api/v1/pets/search")
        assert resp.status_code == 422
        assert resp.json()["error"]["type"] == "validation_error"

    async def test_born_between(self, seeded, client):
        resp = await client.get(
            "/api/v1/pets/born-between", params={"start": "2011-01-01", "end": "2010-01-01"}
        )
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_count(self, seeded, client):
        assert (await client.get("/api/v1/pets/count")).json() == {"count": 5}
        assert (await client.get("/api/v1/pets/count/Perro")).json() == {"count": 2}

    async def test_average_age(self, scenario, client):
        resp = await client.get("/api/v1/pets/average-age", params={"as_of": "2026-10-19"})
        assert resp.json() == {"as_of": "2026-10-19", "average_years": 15.0}

    async def test_earliest_on_empty_store_is_404(self, client):
        resp = await client.get("/api/v1/pets/earliest-birth-date")
        assert resp.status_code == 404
        body = resp.json()
        assert body["error"]["type"] == "no_result"
        assert body["path"] == "/api/v1/pets/earliest-birth-date"

    async def test_earliest(self, seeded, client):
        resp = await client.get("/api/v1/pets/earliest-birth-date")
        assert resp.json() == {"value": "2009-03-15"}

    async def test_same_owner(self, seeded, client):
        resp = await client.get("/api/v1/pets/Lucho/same-owner")
        assert [p["name"] for p in resp.json()] == ["Nala"]

    async def test_treated_by(self, seeded, client):
        resp = await client.get("/api/v1/pets/treated-by/Dr.Gomez")
        assert sorted(p["name"] for p in resp.json()) == ["Lucho", "Nala"]

    async def test_same_owner_ambiguous_name_is_409(self, session_maker, client):
        await populate(
            session_maker,
            [
                ("Twin", "Gato", "Macho", date(2015, 1, 1), "Ana", ()),
                ("Twin", "Gato", "Macho", date(2015, 1, 1), "Luis", ()),
            ],
        )
        resp = await client.get("/api/v1/pets/Twin/same-owner")
        assert resp.status_code == 409
        body = resp.json()
        assert body["error"]["type"] == "ambiguous_result"
        assert "matches 2 pets" in body["error"]["message"]

    async def test_persistence_failure_is_503(self, schemaless_client):
        resp = await schemaless_client.get("/api/v1/pets")
        assert resp.status_code == 503
        body = resp.json()
        assert body["error"]["type"] == "gateway_error"
        assert body["error"]["details"] is None
        assert body["status"] == 503


class TestOwnerRoutes:
    async def test_with_more_than(self, seeded, client):
        resp = await client.get("/api/v1/owners/with-more-than/1")
        assert sorted(o["name"] for o in resp.json()) == ["Ana", "Luis"]

    async def test_with_more_than_beyond_integer_range(self, seeded, client):
        resp = await client.get("/api/v1/owners/with-more-than/1180591620717411303424")
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_with_pets(self, seeded, client):
        resp = await client.get("/api/v1/owners/with-pets")
        assert sorted(o["name"] for o in resp.json()) == ["Ana", "Luis"]


class TestVeterinarianRoutes:
    async def test_list(self, seeded, client):
        resp = await client.get("/api/v1/veterinarians")
        assert sorted(v["name"] for v in resp.json()) == ["Dr.Gomez", "Dra.Ramirez"]
