"""
Base repository providing common async persistence helpers.
"""

import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import BaseModel
from .pagination import Page, PageRequest

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Generic base repository bound to one async session and one model.

    Repositories never commit; the caller owns the transaction (one per
    web request). ``flush`` is used to push changes and obtain ids.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        """
        Initialize the repository.

        Args:
            session: SQLAlchemy async session
            model: SQLAlchemy model class
        """
        self.session = session
        self.model = model

    async def get_by_id(self, entity_id: Any) -> Optional[T]:
        """
        Retrieve a record by its primary key.

        Returns:
            Model instance or None if not found
        """
        return await self.session.get(self.model, entity_id)

    async def list_all(self) -> List[T]:
        """Retrieve every record ordered by id."""
        result = await self.session.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count total records."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return int(result.scalar_one())

    async def _fetch_page(
        self, statement: Select, count_statement: Select, page_request: PageRequest
    ) -> Page[T]:
        """
        Run a select and its matching count as one page.

        Args:
            statement: Ordered select for the rows
            count_statement: Select returning the total row count
            page_request: Slice to fetch

        Returns:
            Page with content and total element count
        """
        total = int((await self.session.execute(count_statement)).scalar_one())
        if total == 0:
            return Page.empty(page_request)

        if page_request.is_paged:
            statement = statement.offset(page_request.offset).limit(page_request.size)

        result = await self.session.execute(statement)
        content = list(result.scalars().unique().all())
        logger.debug(
            f"Fetched page {page_request.page} of {self.model.__name__}: "
            f"{len(content)}/{total} rows"
        )
        return Page(
            content=content,
            total_elements=total,
            page=page_request.page,
            size=page_request.size,
        )
