"""
Repositories: the persistence boundary between the web layer and the models.
"""

from .base import BaseRepository
from .owner import OwnerRepository
from .pagination import DEFAULT_PAGE_SIZE, Page, PageRequest
from .pet_type import PetTypeRepository

__all__ = [
    "BaseRepository",
    "OwnerRepository",
    "PetTypeRepository",
    "Page",
    "PageRequest",
    "DEFAULT_PAGE_SIZE",
]
