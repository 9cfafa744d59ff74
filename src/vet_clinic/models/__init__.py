"""
Database models for the vet-clinic package.

This module contains SQLAlchemy models for the Owner / Pet / Visit aggregate
and the shared PetType catalog.
"""

# Base model will be imported by all other models
from .base import Base, BaseModel
from .owner import Owner
from .pet import Pet
from .pet_type import PetType
from .visit import Visit

__all__ = [
    "Base",
    "BaseModel",
    "Owner",
    "Pet",
    "PetType",
    "Visit",
]
