"""
Owner Pydantic schemas for form validation.

This module contains the schemas behind the owner search box and the
create/edit owner form. Aliases match the HTML input names.
"""

import re
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import Owner

TELEPHONE_PATTERN = re.compile(r"^\d{10}$")


class OwnerForm(BaseModel):
    """Schema for creating or editing an owner."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: str = Field(
        ..., alias="firstName", max_length=30, description="Owner's first name"
    )
    last_name: str = Field(
        ..., alias="lastName", max_length=30, description="Owner's last name"
    )
    address: str = Field(..., max_length=255, description="Street address")
    city: str = Field(..., max_length=80, description="City")
    telephone: str = Field(..., description="Ten-digit phone number")

    @field_validator("first_name", "last_name", "address", "city", mode="before")
    @classmethod
    def validate_required_fields(cls, v: Any) -> str:
        """Validate required string fields."""
        if v is None or not str(v).strip():
            raise ValueError("must not be blank")
        return str(v).strip()

    @field_validator("telephone", mode="before")
    @classmethod
    def validate_telephone(cls, v: Any) -> str:
        """Validate telephone is exactly ten digits."""
        if v is None or not str(v).strip():
            raise ValueError("must not be blank")
        value = str(v).strip()
        if not TELEPHONE_PATTERN.match(value):
            raise ValueError("Telephone must be a 10-digit number")
        return value

    @staticmethod
    def form_values(owner: Owner) -> Dict[str, str]:
        """Pre-fill values for editing an existing owner, keyed by input name."""
        return {
            "firstName": owner.first_name,
            "lastName": owner.last_name,
            "address": owner.address,
            "city": owner.city,
            "telephone": owner.telephone,
        }

    def to_owner(self) -> Owner:
        """Build a new, unsaved owner from the form data."""
        return Owner(**self.model_dump())

    def apply_to(self, owner: Owner) -> Owner:
        """Copy the form values onto an existing owner."""
        owner.update_fields(**self.model_dump())
        return owner


class OwnerSearch(BaseModel):
    """Query parameters of the owner search."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    last_name: str = Field("", alias="lastName", description="Last name prefix")
    page: int = Field(1, ge=1, description="One-based page number")

    @field_validator("last_name", mode="before")
    @classmethod
    def normalize_last_name(cls, v: Any) -> str:
        """Treat a missing last name as an empty search."""
        return "" if v is None else str(v).strip()
