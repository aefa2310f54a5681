from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_query_service, get_request_session
from src.schemas.clinic import OwnerRead
from src.services.clinic import ClinicQueryService

router = APIRouter(prefix="/owners", tags=["Owners"])


# PUBLIC_INTERFACE
@router.get("", response_model=List[OwnerRead], summary="List owners")
async def list_owners(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[OwnerRead]:
    return await service.list_owners(session)


# PUBLIC_INTERFACE
@router.get("/with-pets", response_model=List[OwnerRead], summary="Owners with at least one pet")
async def owners_with_pets(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[OwnerRead]:
    return await service.owners_with_pets(session)


# PUBLIC_INTERFACE
@router.get(
    "/with-more-than/{n}",
    response_model=List[OwnerRead],
    summary="Owners with more than n pets",
    description="Negative thresholds behave like 0.",
)
async def owners_with_more_than(
    n: int = Path(..., description="Exclusive lower bound on the pet count"),
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[OwnerRead]:
    return await service.owners_with_more_than(session, n)
