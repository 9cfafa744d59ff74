"""
Pet type repository: read access to the shared pet type catalog.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import PetType
from ..utils.config import DEFAULT_PET_TYPES
from .base import BaseRepository

logger = logging.getLogger(__name__)


class PetTypeRepository(BaseRepository[PetType]):
    """Lookup of pet types; the aggregate never writes to this table."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, PetType)

    async def find_pet_types(self) -> List[PetType]:
        """
        Return the full pet type catalog ordered by name.

        Returns:
            Every pet type, alphabetically
        """
        result = await self.session.execute(select(PetType).order_by(PetType.name))
        return list(result.scalars().all())

    async def find_by_name(self, name: str) -> Optional[PetType]:
        """Find a pet type by its exact name."""
        result = await self.session.execute(
            select(PetType).where(PetType.name == name)
        )
        return result.scalar_one_or_none()

    async def ensure_defaults(
        self, names: Optional[Iterable[str]] = None
    ) -> List[PetType]:
        """
        Seed the catalog when it is empty.

        Args:
            names: Type names to insert (defaults to the built-in catalog)

        Returns:
            The pet types that were inserted; empty if the catalog
            already had rows
        """
        if await self.count() > 0:
            return []

        created = [PetType(name=name) for name in (names or DEFAULT_PET_TYPES)]
        self.session.add_all(created)
        await self.session.flush()
        logger.info(f"Seeded {len(created)} pet types")
        return created
