from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_query_service, get_request_session
from src.schemas.clinic import AverageAgeRead, CountRead, DateRead, PetRead
from src.services.clinic import ClinicQueryService

router = APIRouter(prefix="/pets", tags=["Pets"])


# PUBLIC_INTERFACE
@router.get("", response_model=List[PetRead], summary="List pets")
async def list_pets(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.list_pets(session)


# PUBLIC_INTERFACE
@router.get(
    "/by-species/{species}",
    response_model=List[PetRead],
    summary="Pets of a species",
    description="Exact match on species.",
)
async def pets_by_species(
    species: str = Path(..., description="Species to match exactly"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_by_species(session, species)


# PUBLIC_INTERFACE
@router.get("/by-sex/{sex}", response_model=List[PetRead], summary="Pets of a sex")
async def pets_by_sex(
    sex: str = Path(..., description="Sex to match exactly"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_by_sex(session, sex)


# PUBLIC_INTERFACE
@router.get("/ordered/name", response_model=List[PetRead], summary="Pets ordered by name")
async def pets_ordered_by_name(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_ordered_by_name(session)


# PUBLIC_INTERFACE
@router.get(
    "/ordered/birth-date",
    response_model=List[PetRead],
    summary="Pets ordered by birth date",
)
async def pets_ordered_by_birth_date(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_ordered_by_birth_date(session)


# PUBLIC_INTERFACE
@router.get("/by-name/{name}", response_model=List[PetRead], summary="Pets with an exact name")
async def pet_by_exact_name(
    name: str = Path(..., description="Name to match exactly"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pet_by_exact_name(session, name)


# PUBLIC_INTERFACE
@router.get(
    "/search",
    response_model=List[PetRead],
    summary="Pets whose name contains a fragment",
    description="Wildcard characters in the fragment are matched literally.",
)
async def pets_by_name_pattern(
    q: Optional[str] = Query(None, description="Name fragment"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_by_name_pattern(session, q)


# PUBLIC_INTERFACE
@router.get(
    "/born-between",
    response_model=List[PetRead],
    summary="Pets born in a date range",
    description="Both ends are included. A start after the end returns an empty list.",
)
async def pets_born_between(
    start: date = Query(..., description="First birth date included"),
    end: date = Query(..., description="Last birth date included"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_born_between(session, start, end)


# PUBLIC_INTERFACE
@router.get("/count", response_model=CountRead, summary="Count pets")
async def count_pets(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> CountRead:
    return CountRead(count=await service.count_pets(session))


# PUBLIC_INTERFACE
@router.get("/count/{species}", response_model=CountRead, summary="Count pets of a species")
async def count_pets_by_species(
    species: str = Path(..., description="Species to match exactly"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> CountRead:
    return CountRead(count=await service.count_pets_by_species(session, species))


# PUBLIC_INTERFACE
@router.get(
    "/earliest-birth-date",
    response_model=DateRead,
    summary="Earliest birth date",
    description="404 when there are no pets.",
)
async def earliest_birth_date(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> DateRead:
    return DateRead(value=await service.earliest_birth_date(session))


# PUBLIC_INTERFACE
@router.get(
    "/average-age",
    response_model=AverageAgeRead,
    summary="Average pet age in years",
    description="Ages are computed against `as_of` (default: today). 404 when there are no pets.",
)
async def average_pet_age(
    as_of: Optional[date] = Query(None, description="Reference date"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> AverageAgeRead:
    as_of = as_of or date.today()
    avg = await service.average_pet_age_years(session, as_of)
    return AverageAgeRead(as_of=as_of, average_years=avg)


# PUBLIC_INTERFACE
@router.get("/with-owner", response_model=List[PetRead], summary="Pets that have an owner")
async def pets_with_owner(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_with_owner(session)


# PUBLIC_INTERFACE
@router.get(
    "/with-veterinarian",
    response_model=List[PetRead],
    summary="Pets with at least one veterinarian",
)
async def pets_with_veterinarian(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_with_veterinarian(session)


# PUBLIC_INTERFACE
@router.get(
    "/without-veterinarian",
    response_model=List[PetRead],
    summary="Pets without any veterinarian",
)
async def pets_without_veterinarian(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_without_veterinarian(session)


# PUBLIC_INTERFACE
@router.get(
    "/treated-by/{vet_name}",
    response_model=List[PetRead],
    summary="Pets treated by a veterinarian",
)
async def pets_treated_by(
    vet_name: str = Path(..., description="Veterinarian name to match exactly"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_treated_by(session, vet_name)


# PUBLIC_INTERFACE
@router.get(
    "/{pet_name}/same-owner",
    response_model=List[PetRead],
    summary="Pets sharing an owner with a named pet",
    description="409 when the name matches several pets.",
)
async def pets_sharing_owner_with(
    pet_name: str = Path(..., description="Name of the reference pet"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[PetRead]:
    return await service.pets_sharing_owner_with(session, pet_name)
