"""
Visit Pydantic schemas for form validation.

This module contains the schema used by the "add visit" form. Field names
follow the HTML form (``date``, ``description``).
"""

import re
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import Visit

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: Any) -> Optional[date]:
    """
    Parse a form date value.

    Empty strings and None mean "not given". Anything else must be an ISO
    calendar date (``YYYY-MM-DD``).

    Raises:
        ValueError: If the value is not a valid ISO date
    """
    if value is None:
        return None
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    if not ISO_DATE_PATTERN.match(text):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError("Date is not a valid calendar date")


class VisitForm(BaseModel):
    """
    Schema for the new visit form.

    ``date`` is optional and defaults to today. ``description`` is required,
    must contain something other than whitespace and is kept exactly as
    typed.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    visit_date: Optional[date] = Field(
        None, alias="date", description="Day of the visit (YYYY-MM-DD)"
    )
    description: str = Field(..., description="What happened during the visit")

    @field_validator("visit_date", mode="before")
    @classmethod
    def validate_visit_date(cls, v: Any) -> Optional[date]:
        """Validate the visit date format."""
        return parse_iso_date(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Validate that the description is not blank."""
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v

    def to_visit(self) -> Visit:
        """Build a new, unsaved visit from the form data."""
        return Visit(
            visit_date=self.visit_date or date.today(),
            description=self.description,
        )
