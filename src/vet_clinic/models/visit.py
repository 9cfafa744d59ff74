"""
Visit model for the vet-clinic package.

A visit is a dated note recorded against one pet. Visits are only ever
written through the owning Owner aggregate.
"""

from datetime import date
from typing import Any, Optional

from sqlalchemy import CheckConstraint, Date, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Visit(BaseModel):
    """
    Record of a pet being seen at the clinic.

    ``visit_date`` defaults to today when not given. ``pet_id`` is a plain
    foreign key that the ORM fills in when the pet's visit collection is
    flushed; there is no object reference back to the pet.
    """

    __tablename__ = "visits"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize Visit with today's date unless one is supplied."""
        if kwargs.get("visit_date") is None:
            kwargs["visit_date"] = date.today()

        super().__init__(**kwargs)

    pet_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Pet this visit belongs to",
    )

    visit_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        default=date.today,
        comment="Day of the visit",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free-text notes, stored exactly as entered",
    )

    __table_args__ = (
        # SQL trim() strips spaces only; VisitForm rejects other whitespace
        CheckConstraint(
            "length(trim(description)) > 0",
            name="description_not_blank",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<Visit(id={self.id}, pet_id={self.pet_id}, "
            f"visit_date='{self.visit_date}')>"
        )
