"""
Visit controller: the "add visit" form for one pet of one owner.

GET renders an empty form. POST validates the submission and either
records the visit on the owner aggregate and redirects to the owner page,
or re-renders the form with field errors and the user's input.
"""

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from ..exceptions import NotFoundException, format_validation_errors
from ..models import Owner, Pet
from ..repositories import OwnerRepository
from ..schemas import VisitForm
from .dependencies import get_owner_repository, load_owner
from .templating import redirect_to_owner, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["visits"])

VISIT_FORM_TEMPLATE = "pets/createOrUpdateVisitForm.html"


def _find_pet(owner: Owner, pet_id: int) -> Pet:
    pet = owner.get_pet_by_id(pet_id)
    if pet is None:
        raise NotFoundException("Pet", pet_id)
    return pet


@router.get("/owners/{owner_id}/pets/{pet_id}/visits/new")
async def init_new_visit_form(
    request: Request,
    owner_id: int,
    pet_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
):
    """Render an empty visit form for the pet."""
    owner = await load_owner(owner_id, owners)
    pet = _find_pet(owner, pet_id)
    return render(
        request,
        VISIT_FORM_TEMPLATE,
        {"owner": owner, "pet": pet, "form": {"date": "", "description": ""}},
    )


@router.post("/owners/{owner_id}/pets/{pet_id}/visits/new")
async def process_new_visit_form(
    request: Request,
    owner_id: int,
    pet_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
):
    """
    Validate the visit form and record the visit.

    Returns:
        302 to ``/owners/{owner_id}`` on success, otherwise the form again
        with field errors (HTTP 200)
    """
    owner = await load_owner(owner_id, owners)
    pet = _find_pet(owner, pet_id)
    submitted = dict(await request.form())

    try:
        form = VisitForm.model_validate(submitted)
    except ValidationError as e:
        errors = format_validation_errors(e.errors())
        logger.info(
            f"Rejected visit for pet {pet_id} of owner {owner_id}: {sorted(errors)}"
        )
        return render(
            request,
            VISIT_FORM_TEMPLATE,
            {"owner": owner, "pet": pet, "form": submitted, "errors": errors},
        )

    owner.add_visit(pet.id, form.to_visit())
    await owners.save(owner)
    logger.info(f"Recorded visit for pet {pet_id} of owner {owner_id}")
    return redirect_to_owner(owner_id)
