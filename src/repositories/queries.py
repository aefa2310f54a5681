"""
Statement catalogue for the clinic query layer.

Each statement is built once with named ``bindparam`` placeholders. Callers
pass the values as a separate mapping at execution time, so user input is
never part of the statement text.
"""
from __future__ import annotations

from sqlalchemy import Date, Integer, bindparam, extract, func, select

from src.db.models.clinic import Owner, Pet, Veterinarian

LIKE_ESCAPE = "/"


def like_contains(fragment: str) -> str:
    """Wrap a literal fragment as a LIKE pattern matching it anywhere."""
    escaped = (
        fragment.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


# Listing
ALL_PETS = select(Pet)
ALL_OWNERS = select(Owner)
ALL_VETERINARIANS = select(Veterinarian)

# Filters
PETS_BY_SPECIES = select(Pet).where(Pet.species == bindparam("species"))
PETS_BY_SEX = select(Pet).where(Pet.sex == bindparam("sex"))

# Ordering; id keeps ties stable
PETS_ORDERED_BY_NAME = select(Pet).order_by(Pet.name.asc(), Pet.id.asc())
PETS_ORDERED_BY_BIRTH_DATE = select(Pet).order_by(Pet.birth_date.asc(), Pet.id.asc())

# Exact and approximate search
PETS_BY_NAME = select(Pet).where(Pet.name == bindparam("name"))
PETS_BY_NAME_PATTERN = select(Pet).where(
    Pet.name.like(bindparam("pattern"), escape=LIKE_ESCAPE)
)

# Range
PETS_BORN_BETWEEN = select(Pet).where(
    Pet.birth_date.between(
        bindparam("start", type_=Date), bindparam("end", type_=Date)
    )
)

# Aggregates
COUNT_PETS = select(func.count(Pet.id))
COUNT_PETS_BY_SPECIES = select(func.count(Pet.id)).where(
    Pet.species == bindparam("species")
)
EARLIEST_BIRTH_DATE = select(func.min(Pet.birth_date))
AVERAGE_PET_AGE_YEARS = select(
    func.avg(bindparam("as_of_year", type_=Integer) - extract("year", Pet.birth_date))
)

# Joins
PETS_WITH_OWNER = select(Pet).join(Pet.owner)
PETS_WITH_VETERINARIAN = select(Pet).where(Pet.veterinarians.any())
OWNERS_WITH_PETS = select(Owner).where(Owner.pets.any())
PETS_WITHOUT_VETERINARIAN = select(Pet).where(~Pet.veterinarians.any())

_owned_pet_count = (
    select(func.count(Pet.id))
    .where(Pet.owner_id == Owner.id)
    .correlate(Owner)
    .scalar_subquery()
)
OWNERS_WITH_MORE_THAN = select(Owner).where(
    _owned_pet_count > bindparam("threshold", type_=Integer)
)
PETS_TREATED_BY = select(Pet).where(
    Pet.veterinarians.any(Veterinarian.name == bindparam("vet_name"))
)

# Correlated: anchor lookup, then the anchor owner's other pets
PETS_NAMED = select(Pet).where(Pet.name == bindparam("name")).order_by(Pet.id.asc())
PETS_OF_OWNER_EXCEPT = (
    select(Pet)
    .where(Pet.owner_id == bindparam("owner_id", type_=Integer))
    .where(Pet.id != bindparam("pet_id", type_=Integer))
    .order_by(Pet.id.asc())
)
