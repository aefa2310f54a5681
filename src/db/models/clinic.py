from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Column, Date, ForeignKey, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.db.base import Base, IntPkMixin


# Single source of truth for the pet <-> veterinarian link.
pet_veterinarians = Table(
    "pet_veterinarians",
    Base.metadata,
    Column("pet_id", ForeignKey("pets.id", ondelete="CASCADE"), primary_key=True),
    Column("veterinarian_id", ForeignKey("veterinarians.id", ondelete="CASCADE"), primary_key=True),
)


class Owner(IntPkMixin, Base):
    """Pet owner. The pets collection is derived from Pet.owner_id."""
    __tablename__ = "owners"

    name: Mapped[str] = mapped_column(Text, nullable=False)

    pets: Mapped[list["Pet"]] = relationship(
        "Pet",
        primaryjoin="Owner.id==Pet.owner_id",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"Owner(id={self.id!r}, name={self.name!r})"


class Veterinarian(IntPkMixin, Base):
    """Veterinarian. The pets collection is derived from pet_veterinarians."""
    __tablename__ = "veterinarians"

    name: Mapped[str] = mapped_column(Text, nullable=False)

    pets: Mapped[list["Pet"]] = relationship(
        "Pet",
        secondary=pet_veterinarians,
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"Veterinarian(id={self.id!r}, name={self.name!r})"


class Pet(IntPkMixin, Base):
    """Pet record, optionally owned and treated by zero or more veterinarians."""
    __tablename__ = "pets"

    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    species: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    sex: Mapped[str] = mapped_column(Text, nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    owner_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("owners.id", ondelete="SET NULL"), nullable=True, index=True
    )

    owner: Mapped[Optional[Owner]] = relationship("Owner", lazy="selectin")
    veterinarians: Mapped[list[Veterinarian]] = relationship(
        "Veterinarian",
        secondary=pet_veterinarians,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"Pet(id={self.id!r}, name={self.name!r}, species={self.species!r})"
