"""
PetType model for the vet-clinic package.

Pet types are shared reference data (cat, dog, ...). Pets point at a type
but never own it, so no cascade flows from Pet to PetType.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class PetType(BaseModel):
    """Catalog entry describing the kind of animal a pet is."""

    __tablename__ = "types"

    name: Mapped[str] = mapped_column(
        String(80),
        nullable=False,
        unique=True,
        comment="Display name of the pet type, e.g. 'dog'",
    )

    def __repr__(self) -> str:
        return f"<PetType(id={self.id}, name='{self.name}')>"

    def __str__(self) -> str:
        return self.name
