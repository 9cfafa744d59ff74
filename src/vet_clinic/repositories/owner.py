"""
Owner repository: the persistence boundary of the Owner aggregate.
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from ..exceptions import ConcurrentModificationException, DatabaseException
from ..models import Owner
from ..models.base import utcnow
from .base import BaseRepository
from .pagination import Page, PageRequest

logger = logging.getLogger(__name__)


class OwnerRepository(BaseRepository[Owner]):
    """
    Loads and saves whole Owner aggregates.

    Pets and visits are persisted only through :meth:`save`; there is no
    separate pet or visit repository.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, Owner)

    async def save(self, owner: Owner) -> Owner:
        """
        Insert or update an owner together with its pets and visits.

        New owners (no id) are inserted. For existing owners the audit
        timestamp is touched so the row is always updated, which bumps the
        optimistic-lock version even when only pets or visits changed.

        Args:
            owner: Owner aggregate to persist

        Returns:
            The same owner, with ids populated for every new entity

        Raises:
            ConcurrentModificationException: If another transaction saved
                this owner after it was loaded
            DatabaseException: For any other persistence failure
        """
        is_new = owner.is_new
        # a failed flush expires the instance, so read the id up front
        owner_id = owner.id
        if not is_new:
            owner.updated_at = utcnow()
        self.session.add(owner)

        try:
            await self.session.flush()
        except StaleDataError as e:
            logger.warning(f"Concurrent modification of owner {owner_id}")
            raise ConcurrentModificationException(
                "Owner was modified by another user; reload and try again",
                entity="Owner",
                identifier=owner_id,
                original_error=e,
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to save owner {owner_id}: {e}")
            raise DatabaseException(
                "Failed to save owner",
                details={"owner_id": owner_id},
                original_error=e,
            )

        logger.info(
            f"{'Created' if is_new else 'Updated'} owner {owner.id} "
            f"with {len(owner.pets)} pet(s)"
        )
        return owner

    async def find_by_id(self, owner_id: int) -> Optional[Owner]:
        """
        Load an owner with pets, pet types and visits.

        Args:
            owner_id: Owner primary key

        Returns:
            The owner, or None if no such id exists
        """
        return await self.get_by_id(owner_id)

    async def find_by_last_name_starting_with(
        self, prefix: str, page_request: Optional[PageRequest] = None
    ) -> Page[Owner]:
        """
        Find owners whose last name starts with ``prefix``.

        Matching is case-sensitive and strictly prefix-based: "SmithT"
        matches "SmithTest" but not "SmithsonTest" or "smithtest". An empty
        prefix yields an empty page. Results are ordered by last name and
        then id.

        Args:
            prefix: Beginning of the last name
            page_request: Slice to fetch (defaults to everything)

        Returns:
            Page of matching owners
        """
        page_request = page_request or PageRequest.unpaged()
        if not prefix:
            return Page.empty(page_request)

        # LIKE is case-insensitive on SQLite, so compare the leading substring
        condition = func.substr(Owner.last_name, 1, len(prefix)) == prefix

        statement = (
            select(Owner).where(condition).order_by(Owner.last_name, Owner.id)
        )
        count_statement = select(func.count()).select_from(Owner).where(condition)

        page = await self._fetch_page(statement, count_statement, page_request)
        logger.debug(
            f"Owner search for prefix '{prefix}' matched {page.total_elements} row(s)"
        )
        return page

    async def find_all(self, page_request: Optional[PageRequest] = None) -> Page[Owner]:
        """
        Page through every owner, ordered by last name and then id.

        Args:
            page_request: Slice to fetch (defaults to everything)
        """
        page_request = page_request or PageRequest.unpaged()
        statement = select(Owner).order_by(Owner.last_name, Owner.id)
        count_statement = select(func.count()).select_from(Owner)
        return await self._fetch_page(statement, count_statement, page_request)
