"""
Demo runner: seeds the store and prints every catalogued query.

Usage:
  python -m src.demo
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.logging import configure_logging
from src.core.settings import get_app_settings
from src.db.config import get_settings
from src.db.seed import seed_all
from src.db.session import dispose_engine, unit_of_work
from src.services.clinic import ClinicQueryService

logger = logging.getLogger(__name__)

Step = Tuple[str, Callable[[AsyncSession], Awaitable[Any]]]


def build_steps(service: ClinicQueryService, as_of: date) -> List[Step]:
    """Return the labeled queries in the order they are printed."""
    return [
        ("ALL PETS", service.list_pets),
        ("ALL OWNERS", service.list_owners),
        ("ALL VETERINARIANS", service.list_veterinarians),
        ("PETS BY SPECIES (Perro)", lambda s: service.pets_by_species(s, "Perro")),
        ("PETS BY SEX (Macho)", lambda s: service.pets_by_sex(s, "Macho")),
        ("PETS ORDERED BY NAME", service.pets_ordered_by_name),
        ("PETS ORDERED BY BIRTH DATE", service.pets_ordered_by_birth_date),
        ("PET BY EXACT NAME (Miki)", lambda s: service.pet_by_exact_name(s, "Miki")),
        ("PETS BY NAME PATTERN ('Mi')", lambda s: service.pets_by_name_pattern(s, "Mi")),
        (
            "PETS BORN BETWEEN 2008-12-20 AND 2014-08-01",
            lambda s: service.pets_born_between(s, date(2008, 12, 20), date(2014, 8, 1)),
        ),
        ("TOTAL PETS", service.count_pets),
        ("TOTAL PETS BY SPECIES (Perro)", lambda s: service.count_pets_by_species(s, "Perro")),
        ("EARLIEST BIRTH DATE", service.earliest_birth_date),
        ("PETS WITH OWNER", service.pets_with_owner),
        ("PETS WITH VETERINARIAN", service.pets_with_veterinarian),
        ("OWNERS WITH PETS", service.owners_with_pets),
        ("PETS WITHOUT VETERINARIAN", service.pets_without_veterinarian),
        ("OWNERS WITH MORE THAN 1 PET", lambda s: service.owners_with_more_than(s, 1)),
        (
            "PETS TREATED BY 'Dra.Ramirez'",
            lambda s: service.pets_treated_by(s, "Dra.Ramirez"),
        ),
        (
            f"AVERAGE PET AGE AS OF {as_of.isoformat()}",
            lambda s: service.average_pet_age_years(s, as_of),
        ),
        ("PETS SHARING OWNER WITH 'Lucho'", lambda s: service.pets_sharing_owner_with(s, "Lucho")),
    ]


def _format(result: Any) -> str:
    if isinstance(result, list):
        if not result:
            return "[]"
        return "\n".join(f"  {item!r}" for item in result)
    return str(result)


# PUBLIC_INTERFACE
async def run_demo(as_of: date | None = None) -> None:
    """Seed the store, then run every query in one unit of work and print it."""
    await seed_all()
    service = ClinicQueryService()
    steps = build_steps(service, as_of or date.today())
    async with unit_of_work() as session:
        for label, step in steps:
            result = await step(session)
            print(f"\n=== {label} ===")
            print(_format(result))


async def _main() -> None:
    try:
        await run_demo()
    finally:
        await dispose_engine()


# PUBLIC_INTERFACE
def main() -> None:
    """Entrypoint for the demo; gateway failures propagate and end the process."""
    app_settings = get_app_settings()
    configure_logging(app_settings.LOG_LEVEL, sql_echo=get_settings().SQL_ECHO)
    logger.info("Running demo (environment=%s)", app_settings.ENVIRONMENT or "unset")
    asyncio.run(_main())


if __name__ == "__main__":
    main()
