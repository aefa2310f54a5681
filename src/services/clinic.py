from __future__ import annotations

import logging
from datetime import date
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import AmbiguousResultError
from src.repositories import queries as q
from src.schemas.clinic import OwnerRead, PetRead, VeterinarianRead
from src.services.base import BaseService

logger = logging.getLogger(__name__)

# Largest count a signed 64-bit INTEGER column can hold
_MAX_PET_COUNT = 2**63 - 1


def _pets(rows) -> List[PetRead]:
    return [PetRead.model_validate(r) for r in rows]


def _owners(rows) -> List[OwnerRead]:
    return [OwnerRead.model_validate(r) for r in rows]


class ClinicQueryService(BaseService):
    """
    Read-only query catalogue over pets, owners and veterinarians.

    Every operation takes the caller's AsyncSession as its first argument and
    returns read models detached from that session. List operations return an
    empty list when nothing matches; scalar operations raise NoResultError
    when the store has nothing to aggregate.
    """

    # ── Listing ───────────────────────────────────────────

    # PUBLIC_INTERFACE
    async def list_pets(self, session: AsyncSession) -> List[PetRead]:
        """Return every pet in store order."""
        rows = await self._gateway(session).run_list(q.ALL_PETS, name="list_pets")
        return _pets(rows)

    # PUBLIC_INTERFACE
    async def list_owners(self, session: AsyncSession) -> List[OwnerRead]:
        """Return every owner in store order."""
        rows = await self._gateway(session).run_list(q.ALL_OWNERS, name="list_owners")
        return _owners(rows)

    # PUBLIC_INTERFACE
    async def list_veterinarians(self, session: AsyncSession) -> List[VeterinarianRead]:
        """Return every veterinarian in store order."""
        rows = await self._gateway(session).run_list(
            q.ALL_VETERINARIANS, name="list_veterinarians"
        )
        return [VeterinarianRead.model_validate(r) for r in rows]

    # ── Filters ───────────────────────────────────────────

    # PUBLIC_INTERFACE
    async def pets_by_species(self, session: AsyncSession, species: str) -> List[PetRead]:
        """Return pets whose species equals `species` exactly."""
        self._require("species", species)
        rows = await self._gateway(session).run_list(
            q.PETS_BY_SPECIES, {"species": species}, name="pets_by_species"
        )
        return _pets(rows)

    # PUBLIC_INTERFACE
    async def pets_by_sex(self, session: AsyncSession, sex: str) -> List[PetRead]:
        """Return pets whose sex equals `sex` exactly."""
        self._require("sex", sex)
        rows = await self._gateway(session).run_list(
            q.PETS_BY_SEX, {"sex": sex}, name="pets_by_sex"
        )
        return _pets(rows)

    # ── Ordering ──────────────────────────────────────────

    # PUBLIC_INTERFACE
    async def pets_ordered_by_name(self, session: AsyncSession) -> List[PetRead]:
        """Return all pets ascending by name; equal names keep id order."""
        rows = await self._gateway(session).run_list(
            q.PETS_ORDERED_BY_NAME, name="pets_ordered_by_name"
        )
        return _pets(rows)

    # PUBLIC_INTERFACE
    async def pets_ordered_by_birth_date(self, session: AsyncSession) -> List[PetRead]:
        """Return all pets ascending by birth date; equal dates keep id order."""
        rows = await self._gateway(session).run_list(
            q.PETS_ORDERED_BY_BIRTH_DATE, name="pets_ordered_by_birth_date"
        )
        return _pets(rows)

    # ── Search ────────────────────────────────────────────

    # PUBLIC_INTERFACE
    async def pet_by_exact_name(self, session: AsyncSession, name: str) -> List[PetRead]:
        """
        Return pets whose name equals `name`.

        Case sensitivity follows the store collation.
        """
        self._require("name", name)
        rows = await self._gateway(session).run_list(
            q.PETS_BY_NAME, {"name": name}, name="pet_by_exact_name"
        )
        return _pets(rows)

    # PUBLIC_INTERFACE
    async def pets_by_name_pattern(self, session: AsyncSession, fragment: str) -> List[PetRead]:
        """
        Return pets whose name contains `fragment` anywhere.

        LIKE wildcards inside the fragment are matched literally. The empty
        fragment matches every pet.
        """
        self._require("fragment", fragment)
        rows = await self._gateway(session).run_list(
            q.PETS_BY_NAME_PATTERN,
            {"pattern": q.like_contains(fragment)},
            name="pets_by_name_pattern",
        )
        return _pets(rows)

    # ── Range ─────────────────────────────────────────────

    # PUBLIC_INTERFACE
    async def pets_born_between(
        self, session: AsyncSession, start: date, end: date
    ) -> List[PetRead]:
        """
        Return pets born in [start, end], both ends included.

        A start after the end is not rejected; it simply matches nothing.
        """
        self._require("start", start)
        self._require("end", end)
        rows = await self._gateway(session).run_list(
            q.PETS_BORN_BETWEEN, {"start": start, "end": end}, name="pets_born_between"
        )
        return _pets(rows)

    # ── Aggregates ────────────────────────────────────────

    # PUBLIC_INTERFACE
    async def count_pets(self, session: AsyncSession) -> int:
        """Return the total number of pets (0 for an empty store)."""
        value = await self._gateway(session).run_scalar(q.COUNT_PETS, name="count_pets")
        return int(value)

    # PUBLIC_INTERFACE
    async def count_pets_by_species(self, session: AsyncSession, species: str) -> int:
        """Return the number of pets of `species`."""
        self._require("species", species)
        value = await self._gateway(session).run_scalar(
            q.COUNT_PETS_BY_SPECIES, {"species": species}, name="count_pets_by_species"
        )
        return int(value)

    # PUBLIC_INTERFACE
    async def earliest_birth_date(self, session: AsyncSession) -> date:
        """
        Return the oldest birth date on record.

        Raises:
            NoResultError: the store holds no pets.
        """
        return await self._gateway(session).run_scalar(
            q.EARLIEST_BIRTH_DATE, name="earliest_birth_date"
        )

    # PUBLIC_INTERFACE
    async def average_pet_age_years(self, session: AsyncSession, as_of: date) -> float:
        """
        Return the mean of (as_of.year - birth year) across all pets.

        Ages are whole calendar-year differences, matching a YEAR()-based
        computation; the result depends only on `as_of`, never on the clock.

        Raises:
            NoResultError: the store holds no pets.
        """
        self._require("as_of", as_of)
        value = await self._gateway(session).run_scalar(
            q.AVERAGE_PET_AGE_YEARS,
            {"as_of_year": as_of.year},
            name="average_pet_age_years",
        )
        return float(value)

    # ── Joins ─────────────────────────────────────────────

    # PUBLIC_INTERFACE
    async def pets_with_owner(self, session: AsyncSession) -> List[PetRead]:
        """Return pets that have an owner."""
        rows = await self._gateway(session).run_list(q.PETS_WITH_OWNER, name="pets_with_owner")
        return _pets(rows)

    # PUBLIC_INTERFACE
    async def pets_with_veterinarian(self, session: AsyncSession) -> List[PetRead]:
        """Return each pet linked to at least one veterinarian, once."""
        rows = await self._gateway(session).run_list(
            q.PETS_WITH_VETERINARIAN, name="pets_with_veterinarian"
        )
        return _pets(rows)

    # PUBLIC_INTERFACE
    async def owners_with_pets(self, session: AsyncSession) -> List[OwnerRead]:
        """Return each owner that owns at least one pet, once."""
        rows = await self._gateway(session).run_list(q.OWNERS_WITH_PETS, name="owners_with_pets")
        return _owners(rows)

    # PUBLIC_INTERFACE
    async def pets_without_veterinarian(self, session: AsyncSession) -> List[PetRead]:
        """Return pets with no veterinarian at all."""
        rows = await self._gateway(session).run_list(
            q.PETS_WITHOUT_VETERINARIAN, name="pets_without_veterinarian"
        )
        return _pets(rows)

    # PUBLIC_INTERFACE
    async def owners_with_more_than(self, session: AsyncSession, n: int) -> List[OwnerRead]:
        """
        Return owners owning strictly more than `n` pets.

        Negative thresholds behave like 0. A threshold at or beyond the
        store's integer range can never be exceeded and returns no owners
        without a round trip.
        """
        self._require("n", n)
        threshold = max(int(n), 0)
        if threshold >= _MAX_PET_COUNT:
            return []
        rows = await self._gateway(session).run_list(
            q.OWNERS_WITH_MORE_THAN, {"threshold": threshold}, name="owners_with_more_than"
        )
        return _owners(rows)

    # PUBLIC_INTERFACE
    async def pets_treated_by(self, session: AsyncSession, vet_name: str) -> List[PetRead]:
        """Return each pet linked to a veterinarian named exactly `vet_name`, once."""
        self._require("vet_name", vet_name)
        rows = await self._gateway(session).run_list(
            q.PETS_TREATED_BY, {"vet_name": vet_name}, name="pets_treated_by"
        )
        return _pets(rows)

    # ── Correlated ────────────────────────────────────────

    # PUBLIC_INTERFACE
    async def pets_sharing_owner_with(self, session: AsyncSession, pet_name: str) -> List[PetRead]:
        """
        Return the other pets owned by the owner of the pet named `pet_name`.

        Policy:
          - no pet has that name: empty list
          - several pets have that name: AmbiguousResultError
          - the named pet has no owner: empty list
        The named pet itself is excluded by identity.
        """
        self._require("pet_name", pet_name)
        gateway = self._gateway(session)
        anchors = await gateway.run_list(
            q.PETS_NAMED, {"name": pet_name}, name="pets_sharing_owner_with.anchor"
        )
        if not anchors:
            return []
        if len(anchors) > 1:
            logger.info("Anchor name %r matched %d pets", pet_name, len(anchors))
            raise AmbiguousResultError(
                f"Pet name '{pet_name}' matches {len(anchors)} pets",
                matches=len(anchors),
                context={"ids": [a.id for a in anchors]},
            )
        anchor = anchors[0]
        if anchor.owner_id is None:
            return []
        rows = await gateway.run_list(
            q.PETS_OF_OWNER_EXCEPT,
            {"owner_id": anchor.owner_id, "pet_id": anchor.id},
            name="pets_sharing_owner_with",
        )
        return _pets(rows)
