"""
Pet controller: add a pet to an owner or edit one of its pets.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from ..exceptions import NotFoundException, format_validation_errors
from ..models import Owner, Pet, PetType
from ..repositories import OwnerRepository, PetTypeRepository
from ..schemas import PetForm
from .dependencies import get_owner_repository, get_pet_type_repository, load_owner
from .templating import redirect_to_owner, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pets"])

PET_FORM_TEMPLATE = "pets/createOrUpdatePetForm.html"


async def _validate_pet_form(
    owner: Owner,
    submitted: Dict[str, Any],
    pet_types: PetTypeRepository,
    editing: Optional[Pet] = None,
) -> Tuple[Optional[PetForm], Optional[PetType], Dict[str, List[str]]]:
    """
    Run schema validation plus the checks that need the owner and catalog.

    A name already used by another pet of the same owner (ignoring case)
    is rejected, as is a type that is not in the catalog.
    """
    form: Optional[PetForm] = None
    errors: Dict[str, List[str]] = {}
    try:
        form = PetForm.model_validate(submitted)
    except ValidationError as e:
        errors = format_validation_errors(e.errors())

    name = str(submitted.get("name") or "").strip()
    if name:
        existing = owner.get_pet(name, ignore_new=editing is None)
        if existing is not None and existing is not editing:
            errors.setdefault("name", []).append("already exists")

    pet_type: Optional[PetType] = None
    type_name = str(submitted.get("type") or "").strip()
    if type_name:
        pet_type = await pet_types.find_by_name(type_name)
        if pet_type is None:
            errors.setdefault("type", []).append("is not a known pet type")

    return form, pet_type, errors


def _form_context(
    owner: Owner, types: List[PetType], is_new: bool, **extra: Any
) -> Dict[str, Any]:
    context = {"owner": owner, "types": types, "is_new": is_new}
    context.update(extra)
    return context


@router.get("/owners/{owner_id}/pets/new")
async def init_creation_form(
    request: Request,
    owner_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
    pet_types: PetTypeRepository = Depends(get_pet_type_repository),
):
    owner = await load_owner(owner_id, owners)
    types = await pet_types.find_pet_types()
    return render(request, PET_FORM_TEMPLATE, _form_context(owner, types, True))


@router.post("/owners/{owner_id}/pets/new")
async def process_creation_form(
    request: Request,
    owner_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
    pet_types: PetTypeRepository = Depends(get_pet_type_repository),
):
    """Add a pet to the owner and redirect to the owner page."""
    owner = await load_owner(owner_id, owners)
    submitted = dict(await request.form())
    form, pet_type, errors = await _validate_pet_form(owner, submitted, pet_types)

    if errors or form is None:
        logger.info(f"Rejected new pet for owner {owner_id}: {sorted(errors)}")
        types = await pet_types.find_pet_types()
        return render(
            request,
            PET_FORM_TEMPLATE,
            _form_context(owner, types, True, form=submitted, errors=errors),
        )

    owner.add_pet(Pet(name=form.name, birth_date=form.birth_date, type=pet_type))
    await owners.save(owner)
    return redirect_to_owner(owner_id)


@router.get("/owners/{owner_id}/pets/{pet_id}/edit")
async def init_update_form(
    request: Request,
    owner_id: int,
    pet_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
    pet_types: PetTypeRepository = Depends(get_pet_type_repository),
):
    owner = await load_owner(owner_id, owners)
    pet = owner.get_pet_by_id(pet_id)
    if pet is None:
        raise NotFoundException("Pet", pet_id)
    types = await pet_types.find_pet_types()
    return render(
        request,
        PET_FORM_TEMPLATE,
        _form_context(owner, types, False, pet=pet, form=PetForm.form_values(pet)),
    )


@router.post("/owners/{owner_id}/pets/{pet_id}/edit")
async def process_update_form(
    request: Request,
    owner_id: int,
    pet_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
    pet_types: PetTypeRepository = Depends(get_pet_type_repository),
):
    """Update a pet's details and redirect to the owner page."""
    owner = await load_owner(owner_id, owners)
    pet = owner.get_pet_by_id(pet_id)
    if pet is None:
        raise NotFoundException("Pet", pet_id)

    submitted = dict(await request.form())
    form, pet_type, errors = await _validate_pet_form(
        owner, submitted, pet_types, editing=pet
    )

    if errors or form is None:
        logger.info(f"Rejected update of pet {pet_id}: {sorted(errors)}")
        types = await pet_types.find_pet_types()
        return render(
            request,
            PET_FORM_TEMPLATE,
            _form_context(owner, types, False, pet=pet, form=submitted, errors=errors),
        )

    pet.update_fields(name=form.name, birth_date=form.birth_date, type=pet_type)
    await owners.save(owner)
    return redirect_to_owner(owner_id)
