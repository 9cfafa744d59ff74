"""
Base model class for all SQLAlchemy models in the vet-clinic package.

This module provides the declarative base and the abstract model class that
every clinic entity inherits from, including the surrogate key, audit
timestamps and common utility methods.

The BaseModel class follows SQLAlchemy 2.0 patterns with:
- Integer surrogate keys assigned by the database on first flush
- Automatic timestamp management for audit trails
- Common utility methods for data conversion and bulk field updates

Example:
    >>> from vet_clinic.models.base import BaseModel
    >>> from sqlalchemy.orm import Mapped, mapped_column
    >>> from sqlalchemy import String

    >>> class Specialty(BaseModel):
    ...     __tablename__ = "specialties"
    ...     name: Mapped[str] = mapped_column(String(80))

    >>> specialty = Specialty(name="radiology")
    >>> specialty.is_new  # no id until the session flushes
    True
    >>> specialty.to_dict()["name"]
    'radiology'
"""

from datetime import date, datetime, timezone
from typing import Any, Dict

from sqlalchemy import DateTime, Integer, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

# Constraint names stay stable across PostgreSQL, SQLite and Alembic autogenerate
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    """Return the current timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base declarative class for all SQLAlchemy models.

    Carries the shared metadata object with a naming convention so that
    migrations produce deterministic constraint names.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class BaseModel(Base):
    """
    Abstract base model class providing common functionality for all entities.

    - **Surrogate keys**: integer ``id``, ``None`` until the row is inserted
    - **Audit fields**: ``created_at`` and ``updated_at`` maintained on flush
    - **Utility methods**: dictionary conversion and bulk field updates

    Timestamps are generated on the Python side as well as the server side
    so that they are readable right after a flush without another query,
    which matters for async sessions where lazy refreshes are not allowed.

    Attributes:
        id (int): Primary key, assigned by the database
        created_at (datetime): Timestamp when record was created (UTC)
        updated_at (datetime): Timestamp when record was last updated (UTC)

    Note:
        This is an abstract base class and cannot be instantiated directly.
        All concrete models must define a __tablename__ attribute.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        """
        Return string representation of the model instance.

        Returns:
            String in format: <ModelName(id=1)>
        """
        return f"<{self.__class__.__name__}(id={self.id})>"

    @property
    def is_new(self) -> bool:
        """Check whether the entity has not been persisted yet."""
        return self.id is None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model instance to dictionary representation.

        Converts column values to JSON-serializable types:
        - datetime and date objects to ISO format strings
        - Other types remain unchanged

        Returns:
            Dictionary with column names as keys and serialized values.

        Example:
            >>> owner = Owner(first_name="George", last_name="Franklin")
            >>> owner.to_dict()["last_name"]
            'Franklin'
        """
        result: Dict[str, Any] = {}
        for column in self.__table__.columns:
            value = getattr(self, column.key, None)
            if isinstance(value, (datetime, date)):
                result[column.key] = value.isoformat()
            else:
                result[column.key] = value
        return result

    @classmethod
    def get_table_name(cls) -> str:
        """
        Get the database table name for this model.

        Example:
            >>> Owner.get_table_name()
            'owners'
        """
        return cls.__tablename__

    def update_fields(self, **kwargs: Any) -> None:
        """
        Update multiple fields on the model instance in a single operation.

        Args:
            **kwargs: Field names as keys and new values as values.
                     Only existing model attributes can be updated.

        Raises:
            AttributeError: If any field name doesn't exist on the model.

        Example:
            >>> owner.update_fields(city="Madison", telephone="6085551023")
            >>> owner.update_fields(nonexistent_field="value")
            Traceback (most recent call last):
            AttributeError: 'Owner' has no attribute 'nonexistent_field'

        Note:
            This method only modifies the instance. The owning repository
            must save the aggregate to persist the change.
        """
        for field_name, value in kwargs.items():
            if hasattr(self, field_name):
                setattr(self, field_name, value)
            else:
                raise AttributeError(
                    f"'{self.__class__.__name__}' has no attribute '{field_name}'"
                )
