"""
Pet model for the vet-clinic package.

This module contains the Pet SQLAlchemy model. A pet belongs to exactly one
owner, references a shared pet type and owns its visit history.
"""

from datetime import date
from typing import Any, List, Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .pet_type import PetType
from .visit import Visit


class Pet(BaseModel):
    """
    Pet model owned by a single Owner.

    The owner is recorded only as ``owner_id``; Pet holds no object
    reference to its Owner. Visits are owned by the pet and persisted
    together with it.
    """

    __tablename__ = "pets"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize Pet with an empty, already-loaded visit history."""
        kwargs.setdefault("visits", [])
        super().__init__(**kwargs)

    owner_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("owners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owner this pet belongs to",
    )

    name: Mapped[str] = mapped_column(String(30), nullable=False, comment="Pet's name")

    birth_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True, comment="Pet's date of birth"
    )

    type_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("types.id"),
        nullable=True,
        comment="Reference to the shared pet type catalog",
    )

    type: Mapped[Optional[PetType]] = relationship(PetType, lazy="joined")

    visits: Mapped[List[Visit]] = relationship(
        Visit,
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=[Visit.visit_date, Visit.id],
    )

    __table_args__ = (
        CheckConstraint("length(name) > 0", name="name_not_empty"),
        Index("ix_pets_owner_name", "owner_id", "name"),
    )

    def add_visit(self, visit: Visit) -> None:
        """
        Append a visit to this pet's history.

        Args:
            visit: New visit to record; persisted when the owner is saved
        """
        self.visits.append(visit)

    @property
    def type_name(self) -> Optional[str]:
        """Get the pet type name, or None when no type is set."""
        return self.type.name if self.type is not None else None

    @property
    def visit_count(self) -> int:
        return len(self.visits)

    def __repr__(self) -> str:
        return f"<Pet(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"
