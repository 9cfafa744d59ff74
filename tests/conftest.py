"""
Pytest configuration and fixtures for vet-clinic tests.

This module provides common fixtures for all tests in the vet-clinic
package: a throwaway SQLite database per test, session fixtures, Faker
based factories for owners and pets, and the seeded pet type catalog.
"""

import os
from datetime import date
from typing import AsyncGenerator, List, Optional
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from vet_clinic.database.connection import create_engine
from vet_clinic.database.session import SessionManager
from vet_clinic.models import Base, Owner, Pet, PetType, Visit
from vet_clinic.repositories import OwnerRepository, PetTypeRepository
from vet_clinic.utils.config import AppConfig
from vet_clinic.web import create_app
from vet_clinic.web.dependencies import get_owner_repository, get_pet_type_repository

fake = Faker()
Faker.seed(4321)

# Set TEST_DATABASE_URL to run the database tests against PostgreSQL instead
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest.fixture
def database_url(tmp_path) -> str:
    """URL of the database used by a single test."""
    if TEST_DATABASE_URL:
        return TEST_DATABASE_URL
    return f"sqlite+aiosqlite:///{tmp_path / 'vet_clinic_test.db'}"


@pytest_asyncio.fixture
async def test_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine that does not pool connections."""
    engine = create_engine(database_url, use_null_pool=True, echo=False)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_manager(
    test_engine: AsyncEngine,
) -> AsyncGenerator[SessionManager, None]:
    """Create a session manager with every table created."""
    session_manager = SessionManager(test_engine)
    assert await session_manager.initialize_database(Base.metadata)

    yield session_manager

    await session_manager.cleanup_database(
        Base.metadata, drop_all=TEST_DATABASE_URL is not None
    )


@pytest_asyncio.fixture
async def async_session(
    test_session_manager: SessionManager,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide an async database session for testing with automatic cleanup.

    Each test gets a fresh session that is rolled back after the test
    completes to ensure test isolation.
    """
    async with test_session_manager.get_session() as session:
        transaction = await session.begin()

        try:
            yield session
        finally:
            await transaction.rollback()


@pytest_asyncio.fixture
async def pet_types(async_session: AsyncSession) -> List[PetType]:
    """Seed the default pet type catalog."""
    return await PetTypeRepository(async_session).ensure_defaults()


# Factory classes for creating test entities
class OwnerFactory:
    """Factory for creating test Owner aggregates."""

    @staticmethod
    def build(**kwargs) -> Owner:
        """Build an Owner instance without saving to database."""
        defaults = {
            "first_name": fake.first_name()[:30],
            "last_name": fake.last_name()[:30],
            "address": fake.street_address(),
            "city": fake.city()[:80],
            "telephone": fake.numerify("##########"),
        }
        defaults.update(kwargs)
        return Owner(**defaults)

    @staticmethod
    async def create(
        session: AsyncSession, pets: Optional[List[Pet]] = None, **kwargs
    ) -> Owner:
        """Create and save an Owner, with optional pets, through the repository."""
        owner = OwnerFactory.build(**kwargs)
        for pet in pets or []:
            owner.add_pet(pet)
        return await OwnerRepository(session).save(owner)


class PetFactory:
    """Factory for creating test Pet instances."""

    @staticmethod
    def build(pet_type: Optional[PetType] = None, **kwargs) -> Pet:
        """Build a Pet instance without an owner."""
        defaults = {
            "name": fake.first_name()[:30],
            "birth_date": fake.date_between(start_date="-15y", end_date="-1d"),
            "type": pet_type,
        }
        defaults.update(kwargs)
        return Pet(**defaults)


class VisitFactory:
    """Factory for creating test Visit instances."""

    @staticmethod
    def build(**kwargs) -> Visit:
        defaults = {
            "visit_date": date.today(),
            "description": fake.sentence(nb_words=6),
        }
        defaults.update(kwargs)
        return Visit(**defaults)


@pytest.fixture
def owner_factory():
    """Provide OwnerFactory for tests."""
    return OwnerFactory


@pytest.fixture
def pet_factory():
    """Provide PetFactory for tests."""
    return PetFactory


@pytest.fixture
def visit_factory():
    """Provide VisitFactory for tests."""
    return VisitFactory


def build_detached_owner(owner_id: int = 1, pet_id: int = 1) -> Owner:
    """
    Build a persisted-looking owner with one pet, without a database.

    Used by the controller tests, which replace the repositories with mocks.
    """
    owner = Owner(
        id=owner_id,
        first_name="George",
        last_name="Franklin",
        address="110 W. Liberty St.",
        city="Madison",
        telephone="6085551023",
        version=1,
    )
    pet = Pet(
        id=pet_id,
        owner_id=owner_id,
        name="Leo",
        birth_date=date(2010, 9, 7),
        type=PetType(id=2, name="cat"),
    )
    owner.pets.append(pet)
    return owner


@pytest.fixture
def owner_builder():
    """Provide build_detached_owner for tests that need several owners."""
    return build_detached_owner


@pytest.fixture
def detached_owner() -> Owner:
    """Owner 1 with pet 1 ("Leo"), never attached to a session."""
    return build_detached_owner()


# Web fixtures: the app with both repositories replaced by mocks
@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(database_url=f"sqlite+aiosqlite:///{tmp_path / 'web.db'}")


@pytest.fixture
def owner_repository(detached_owner) -> Mock:
    """OwnerRepository mock that knows owner 1 only."""
    repository = Mock(spec=OwnerRepository)

    async def find_by_id(owner_id):
        return detached_owner if owner_id == detached_owner.id else None

    async def save(owner):
        if owner.id is None:
            owner.id = 11
        return owner

    repository.find_by_id = AsyncMock(side_effect=find_by_id)
    repository.save = AsyncMock(side_effect=save)
    repository.find_by_last_name_starting_with = AsyncMock()
    repository.find_all = AsyncMock()
    return repository


@pytest.fixture
def pet_type_repository() -> Mock:
    """PetTypeRepository mock serving the default catalog."""
    catalog = [PetType(id=i, name=name) for i, name in enumerate(["cat", "dog"], 1)]
    repository = Mock(spec=PetTypeRepository)
    repository.find_pet_types = AsyncMock(return_value=catalog)
    repository.find_by_name = AsyncMock(
        side_effect=lambda name: next((t for t in catalog if t.name == name), None)
    )
    return repository


@pytest.fixture
def client(app_config, owner_repository, pet_type_repository) -> TestClient:
    """
    Test client without lifespan, so no database is touched.

    Handlers receive the mocked repositories through dependency overrides.
    """
    app = create_app(app_config)
    app.dependency_overrides[get_owner_repository] = lambda: owner_repository
    app.dependency_overrides[get_pet_type_repository] = lambda: pet_type_repository
    return TestClient(app)
