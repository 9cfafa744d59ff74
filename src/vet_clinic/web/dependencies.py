"""
FastAPI dependencies: one transactional session per request and the
repositories built on top of it.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.session import SessionManager
from ..exceptions import DatabaseException, NotFoundException
from ..models import Owner
from ..repositories import OwnerRepository, PetTypeRepository
from ..utils.config import AppConfig


def get_app_config(request: Request) -> AppConfig:
    """Return the configuration the application was created with."""
    return request.app.state.config


def get_request_session_manager(request: Request) -> SessionManager:
    """Return the session manager created during application startup."""
    return request.app.state.session_manager


async def get_db_session(
    session_manager: SessionManager = Depends(get_request_session_manager),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Open a transaction for the duration of the request.

    Commits when the handler returns normally and rolls back when it
    raises, so a failed save never leaves partial rows behind. Repositories
    declare this with ``scope="function"`` so the commit finishes before the
    response (usually a redirect) is sent; a failed commit becomes an error
    page instead of a lost write.
    """
    try:
        async with session_manager.get_transaction() as session:
            yield session
    except SQLAlchemyError as e:
        raise DatabaseException(
            "Failed to complete the request transaction", original_error=e
        )


def get_owner_repository(
    session: AsyncSession = Depends(get_db_session, scope="function"),
) -> OwnerRepository:
    return OwnerRepository(session)


def get_pet_type_repository(
    session: AsyncSession = Depends(get_db_session, scope="function"),
) -> PetTypeRepository:
    return PetTypeRepository(session)


async def load_owner(owner_id: int, owners: OwnerRepository) -> Owner:
    """
    Load an owner for a handler or fail with a 404.

    Raises:
        NotFoundException: If no owner has this id
    """
    owner = await owners.find_by_id(owner_id)
    if owner is None:
        raise NotFoundException("Owner", owner_id)
    return owner
