from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OwnerRead(BaseModel):
    """Owner read model."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Owner ID")
    name: str = Field(..., description="Owner name")


class VeterinarianRead(BaseModel):
    """Veterinarian read model."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Veterinarian ID")
    name: str = Field(..., description="Veterinarian name")


class PetRead(BaseModel):
    """Pet read model."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Pet ID")
    name: str = Field(..., description="Pet name")
    species: str = Field(..., description="Species, e.g. Perro or Gato")
    sex: str = Field(..., description="Sex as recorded")
    birth_date: date = Field(..., description="Date of birth")
    owner_id: Optional[int] = Field(None, description="Owner ID, if owned")


class CountRead(BaseModel):
    """Result of a count aggregate."""
    count: int = Field(..., ge=0, description="Number of matching pets")


class DateRead(BaseModel):
    """Result of a date aggregate."""
    value: date = Field(..., description="Aggregated date")


class AverageAgeRead(BaseModel):
    """Average pet age relative to a reference date."""
    as_of: date = Field(..., description="Reference date the ages are computed against")
    average_years: float = Field(..., description="Average age in whole calendar years")
