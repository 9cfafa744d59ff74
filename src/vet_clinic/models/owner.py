"""
Owner model for the vet-clinic package.

The Owner is the aggregate root of the clinic records: pets and their visits
are only created, changed and persisted through an Owner. Saving the owner
cascades to every pet and visit it holds.
"""

from typing import Any, List, Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..exceptions import PetNotFoundException
from .base import BaseModel
from .pet import Pet
from .visit import Visit


class Owner(BaseModel):
    """
    Pet owner and root of the Owner / Pet / Visit aggregate.

    Owners carry an optimistic-lock ``version`` that SQLAlchemy increments
    on every UPDATE of the row. Saving a stale copy raises
    ``StaleDataError`` at flush time, which the repository reports as
    ``ConcurrentModificationException``.

    Attributes:
        first_name: Given name
        last_name: Family name, searched by prefix
        address: Street address
        city: City
        telephone: Ten-digit phone number
        pets: Pets ordered by name, loaded eagerly with the owner
        version: Optimistic-lock counter

    Example:
        >>> owner = Owner(first_name="George", last_name="Franklin")
        >>> owner.add_pet(Pet(name="Leo"))
        >>> owner.get_pet("leo").name
        'Leo'
    """

    __tablename__ = "owners"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize Owner with an empty, already-loaded pet collection."""
        kwargs.setdefault("pets", [])
        super().__init__(**kwargs)

    first_name: Mapped[str] = mapped_column(
        String(30), nullable=False, comment="Owner's first name"
    )

    last_name: Mapped[str] = mapped_column(
        String(30), nullable=False, index=True, comment="Owner's last name"
    )

    address: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", comment="Street address"
    )

    city: Mapped[str] = mapped_column(
        String(80), nullable=False, default="", comment="City"
    )

    telephone: Mapped[str] = mapped_column(
        String(20), nullable=False, default="", comment="Contact phone number"
    )

    version: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Optimistic-lock counter"
    )

    pets: Mapped[List[Pet]] = relationship(
        Pet,
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=[Pet.name, Pet.id],
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def full_name(self) -> str:
        """Get the owner's display name."""
        return f"{self.first_name} {self.last_name}"

    def add_pet(self, pet: Pet) -> None:
        """
        Add a new pet to this owner.

        Pets that already have an id are assumed to be in the collection
        already and are left alone. Name uniqueness is not checked here;
        the pet form rejects duplicate names before calling this.

        Args:
            pet: Pet to attach to the owner
        """
        if pet.is_new and pet not in self.pets:
            self.pets.append(pet)

    def get_pet(self, name: str, ignore_new: bool = False) -> Optional[Pet]:
        """
        Find a pet by name, ignoring case.

        Args:
            name: Pet name to look up
            ignore_new: Skip pets that have not been saved yet

        Returns:
            The first matching pet, or None
        """
        wanted = name.lower()
        for pet in self.pets:
            if ignore_new and pet.is_new:
                continue
            if pet.name and pet.name.lower() == wanted:
                return pet
        return None

    def get_pet_by_id(self, pet_id: Optional[int]) -> Optional[Pet]:
        """Find a pet of this owner by id."""
        if pet_id is None:
            return None
        for pet in self.pets:
            if pet.id == pet_id:
                return pet
        return None

    def add_visit(self, pet_id: Optional[int], visit: Visit) -> Pet:
        """
        Record a visit for one of this owner's pets.

        Args:
            pet_id: Id of a pet held by this owner
            visit: New visit

        Returns:
            The pet the visit was added to

        Raises:
            PetNotFoundException: If the owner has no pet with that id
        """
        pet = self.get_pet_by_id(pet_id)
        if pet is None:
            raise PetNotFoundException(pet_id=pet_id, owner_id=self.id)

        pet.add_visit(visit)
        return pet

    def __repr__(self) -> str:
        return (
            f"<Owner(id={self.id}, name='{self.full_name}', "
            f"pets={len(self.pets)})>"
        )
