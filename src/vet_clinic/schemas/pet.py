"""
Pet Pydantic schemas for form validation.

Checks that need the database (is the type in the catalog, is the name free
for this owner) are done by the pet controller after schema validation.
"""

from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import Pet
from .visit import parse_iso_date


class PetForm(BaseModel):
    """Schema for adding or editing a pet."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., max_length=30, description="Pet's name")
    birth_date: date = Field(
        ..., alias="birthDate", description="Date of birth (YYYY-MM-DD)"
    )
    type: str = Field(..., description="Name of a pet type from the catalog")

    @field_validator("name", "type", mode="before")
    @classmethod
    def validate_required_fields(cls, v: Any) -> str:
        """Validate required string fields."""
        if v is None or not str(v).strip():
            raise ValueError("must not be blank")
        return str(v).strip()

    @field_validator("birth_date", mode="before")
    @classmethod
    def validate_birth_date(cls, v: Any) -> date:
        """Validate birth date format and that it is not in the future."""
        parsed = parse_iso_date(v)
        if parsed is None:
            raise ValueError("must not be blank")
        if parsed > date.today():
            raise ValueError("Birth date cannot be in the future")
        return parsed

    @staticmethod
    def form_values(pet: Pet) -> Dict[str, Optional[str]]:
        """Pre-fill values for editing an existing pet, keyed by input name."""
        return {
            "name": pet.name,
            "birthDate": pet.birth_date.isoformat() if pet.birth_date else "",
            "type": pet.type_name,
        }
