"""
Pydantic schemas for form validation.

This module contains the schemas that validate the owner, pet and visit
forms submitted to the web layer.
"""

from .owner import OwnerForm, OwnerSearch
from .pet import PetForm
from .visit import VisitForm, parse_iso_date

__all__ = [
    "OwnerForm",
    "OwnerSearch",
    "PetForm",
    "VisitForm",
    "parse_iso_date",
]
