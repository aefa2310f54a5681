from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_query_service, get_request_session
from src.schemas.clinic import VeterinarianRead
from src.services.clinic import ClinicQueryService

router = APIRouter(prefix="/veterinarians", tags=["Veterinarians"])


# PUBLIC_INTERFACE
@router.get("", response_model=List[VeterinarianRead], summary="List veterinarians")
async def list_veterinarians(
    session: AsyncSession = Depends(get_request_session),
    service: ClinicQueryService = Depends(get_query_service),
) -> List[VeterinarianRead]:
    return await service.list_veterinarians(session)
