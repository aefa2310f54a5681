"""
Schema creation and sample data for the clinic store.

Seeds:
- Owners (Ana, Luis, Marta)
- Veterinarians (Dra.Ramirez, Dr.Gomez)
- Pets linked to them, including one unowned pet and pets without a vet

Usage:
  python -m src.db.seed
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.db.base import Base
from src.db.models.clinic import Owner, Pet, Veterinarian
from src.db.session import dispose_engine, get_engine, unit_of_work

logger = logging.getLogger(__name__)

OWNERS = ["Ana", "Luis", "Marta"]
VETERINARIANS = ["Dra.Ramirez", "Dr.Gomez"]

# name, species, sex, birth date, owner, veterinarians
PETS: List[Tuple[str, str, str, date, Optional[str], Tuple[str, ...]]] = [
    ("Miki", "Perro", "Macho", date(2010, 5, 1), "Ana", ()),
    ("Firu", "Gato", "Hembra", date(2012, 1, 1), "Ana", ("Dra.Ramirez",)),
    ("Lucho", "Perro", "Macho", date(2009, 3, 15), "Luis", ("Dra.Ramirez", "Dr.Gomez")),
    ("Nala", "Gato", "Hembra", date(2014, 8, 1), "Luis", ("Dr.Gomez",)),
    ("Coco", "Loro", "Macho", date(2016, 11, 20), None, ()),
]


# PUBLIC_INTERFACE
async def create_schema(engine: Optional[AsyncEngine] = None) -> None:
    """Create all clinic tables that do not exist yet."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Clinic schema ready.")


# PUBLIC_INTERFACE
async def seed_sample_data(session: AsyncSession) -> bool:
    """
    Insert the sample owners, veterinarians and pets if no pet exists yet.

    Returns:
      True when data was inserted, False when the store was already populated.
    """
    existing = (await session.execute(select(func.count(Pet.id)))).scalar_one()
    if existing:
        logger.info("Store already holds %d pets; skipping seed.", existing)
        return False

    owners = {name: Owner(name=name) for name in OWNERS}
    vets = {name: Veterinarian(name=name) for name in VETERINARIANS}
    session.add_all(list(owners.values()) + list(vets.values()))

    for name, species, sex, born, owner, vet_names in PETS:
        session.add(
            Pet(
                name=name,
                species=species,
                sex=sex,
                birth_date=born,
                owner=owners[owner] if owner else None,
                veterinarians=[vets[v] for v in vet_names],
            )
        )
    await session.commit()
    logger.info("Seeded %d owners, %d veterinarians, %d pets.", len(OWNERS), len(VETERINARIANS), len(PETS))
    return True


# PUBLIC_INTERFACE
async def seed_all() -> None:
    """Create the schema and load the sample data in one unit of work."""
    await create_schema()
    async with unit_of_work() as session:
        await seed_sample_data(session)


async def _seed_and_dispose() -> None:
    try:
        await seed_all()
    finally:
        await dispose_engine()


# PUBLIC_INTERFACE
def main() -> None:
    """Entrypoint to run the asynchronous seeding."""
    asyncio.run(_seed_and_dispose())


if __name__ == "__main__":
    main()
