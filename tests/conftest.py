"""
Pytest configuration and shared fixtures.
"""

from datetime import date
from typing import Iterable, Optional, Sequence, Tuple

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from src.db.models.clinic import Owner, Pet, Veterinarian
from src.db.seed import create_schema, seed_sample_data
from src.db.session import build_session_maker
from src.services.clinic import ClinicQueryService

# name, species, sex, birth date, owner name, veterinarian names
PetRow = Tuple[str, str, str, date, Optional[str], Sequence[str]]

SCENARIO_PETS = [
    ("Miki", "Perro", "Macho", date(2010, 5, 1), "Ana", ()),
    ("Firu", "Gato", "Hembra", date(2012, 1, 1), "Ana", ("Dra.Ramirez",)),
]


async def populate(session_maker, pets: Iterable[PetRow], extra_owners: Iterable[str] = ()) -> None:
    """Insert pets plus the owners and veterinarians they reference."""
    pets = list(pets)
    owners = {name: Owner(name=name) for name in extra_owners}
    vets = {}
    async with session_maker() as session:
        for name, species, sex, born, owner_name, vet_names in pets:
            owner = None
            if owner_name is not None:
                owner = owners.setdefault(owner_name, Owner(name=owner_name))
            linked = [vets.setdefault(v, Veterinarian(name=v)) for v in vet_names]
            session.add(
                Pet(
                    name=name,
                    species=species,
                    sex=sex,
                    birth_date=born,
                    owner=owner,
                    veterinarians=linked,
                )
            )
        session.add_all(owners.values())
        await session.commit()


@pytest.fixture
async def engine(tmp_path):
    """Async engine on a fresh SQLite file with the clinic schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'clinic.db'}")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest.fixture
async def session(session_maker):
    """One session for the duration of a test."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def service():
    return ClinicQueryService()


@pytest.fixture
async def seeded(session_maker):
    """Store loaded with the sample clinic data."""
    async with session_maker() as session:
        await seed_sample_data(session)
    return session_maker


@pytest.fixture
async def scenario(session_maker):
    """Store holding only Miki and Firu, both owned by Ana."""
    await populate(session_maker, SCENARIO_PETS)
    return session_maker
