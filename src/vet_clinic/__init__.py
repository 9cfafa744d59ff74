"""
Vet Clinic

A veterinary clinic record-keeping web application: owners register pets,
pets accrue visit records and staff search owners by last name.

The package is organised in layers:

- SQLAlchemy models for the Owner / Pet / Visit aggregate and the PetType catalog
- Repositories that load and save whole Owner aggregates
- Pydantic schemas that validate the owner, pet and visit forms
- Async database engine and session management (PostgreSQL or SQLite)
- A FastAPI + Jinja2 web layer (``vet_clinic.web``)
- Exception hierarchy and configuration/logging utilities

Quick Start:
    >>> from vet_clinic.database import create_engine, SessionManager
    >>> from vet_clinic.models import Base, Owner, Pet, Visit
    >>> from vet_clinic.repositories import OwnerRepository

    >>> manager = SessionManager(create_engine("sqlite+aiosqlite:///./clinic.db"))
    >>> await manager.initialize_database(Base.metadata)
    >>> async with manager.get_transaction() as session:
    ...     owner = Owner(first_name="Jean", last_name="Coleman",
    ...                   address="105 N. Lake St.", city="Monona",
    ...                   telephone="6085552654")
    ...     owner.add_pet(Pet(name="Samantha"))
    ...     await OwnerRepository(session).save(owner)

Running the web application:
    $ vet-clinic            # or: uvicorn --factory vet_clinic.web:create_app

Requirements:
    - Python 3.11+
    - SQLAlchemy 2.0+
    - Pydantic 2.5+
    - FastAPI 0.121+
"""

__version__ = "0.1.0"
__author__ = "Vet Clinic Platform Team"
__email__ = "dev@vetclinic.com"
__license__ = "MIT"

# Import implemented modules
from . import database
from . import exceptions
from . import models
from . import repositories
from . import schemas
from . import utils

# Convenience imports for common usage patterns
from .database import SessionManager, create_engine
from .exceptions import DatabaseException, ValidationException, VetClinicException
from .models import Owner, Pet, PetType, Visit
from .repositories import OwnerRepository, PetTypeRepository

__all__ = [
    # Version and metadata
    "__version__",
    "__author__",
    "__email__",
    "__license__",
    # Core modules
    "database",
    "exceptions",
    "models",
    "repositories",
    "schemas",
    "utils",
    # Convenience imports
    "SessionManager",
    "create_engine",
    "VetClinicException",
    "ValidationException",
    "DatabaseException",
    "Owner",
    "Pet",
    "PetType",
    "Visit",
    "OwnerRepository",
    "PetTypeRepository",
]
