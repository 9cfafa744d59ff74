"""
Owner controller: search, create, show and edit owners.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError

from ..exceptions import format_validation_errors
from ..repositories import OwnerRepository, PageRequest
from ..schemas import OwnerForm, OwnerSearch
from ..utils.config import AppConfig
from .dependencies import get_app_config, get_owner_repository, load_owner
from .templating import redirect_to_owner, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["owners"])

OWNER_FORM_TEMPLATE = "owners/createOrUpdateOwnerForm.html"


@router.get("/owners/find")
async def init_find_form(request: Request):
    """Render the owner search page."""
    return render(request, "owners/findOwners.html", {"form": {"lastName": ""}})


@router.get("/owners/new")
async def init_creation_form(request: Request):
    return render(request, OWNER_FORM_TEMPLATE, {"is_new": True})


@router.post("/owners/new")
async def process_creation_form(
    request: Request,
    owners: OwnerRepository = Depends(get_owner_repository),
):
    """Create an owner and redirect to its details page."""
    submitted = dict(await request.form())
    try:
        form = OwnerForm.model_validate(submitted)
    except ValidationError as e:
        errors = format_validation_errors(e.errors())
        logger.info(f"Rejected new owner: {sorted(errors)}")
        return render(
            request,
            OWNER_FORM_TEMPLATE,
            {"is_new": True, "form": submitted, "errors": errors},
        )

    owner = await owners.save(form.to_owner())
    return redirect_to_owner(owner.id)


@router.get("/owners")
async def process_find_form(
    request: Request,
    last_name: str = Query("", alias="lastName"),
    page: int = Query(1, ge=1),
    owners: OwnerRepository = Depends(get_owner_repository),
    config: AppConfig = Depends(get_app_config),
):
    """
    Search owners by last name prefix.

    A blank last name lists every owner. No match re-renders the search
    page with an error, a single match redirects straight to that owner
    and several matches are shown as a paged list.
    """
    search = OwnerSearch(last_name=last_name, page=page)
    page_request = PageRequest(page=search.page - 1, size=config.page_size)
    if search.last_name:
        results = await owners.find_by_last_name_starting_with(
            search.last_name, page_request
        )
    else:
        results = await owners.find_all(page_request)

    if results.total_elements == 0:
        return render(
            request,
            "owners/findOwners.html",
            {
                "form": {"lastName": search.last_name},
                "errors": {"lastName": ["has not been found"]},
            },
        )

    if results.total_elements == 1 and len(results.content) == 1:
        return redirect_to_owner(results.content[0].id)

    return render(
        request,
        "owners/ownersList.html",
        {
            "owners": results.content,
            "page": results,
            "current_page": search.page,
            "last_name": search.last_name,
        },
    )


@router.get("/owners/{owner_id}")
async def show_owner(
    request: Request,
    owner_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
):
    """Render the owner with pets and visit history."""
    owner = await load_owner(owner_id, owners)
    return render(request, "owners/ownerDetails.html", {"owner": owner})


@router.get("/owners/{owner_id}/edit")
async def init_update_owner_form(
    request: Request,
    owner_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
):
    owner = await load_owner(owner_id, owners)
    return render(
        request,
        OWNER_FORM_TEMPLATE,
        {"is_new": False, "owner": owner, "form": OwnerForm.form_values(owner)},
    )


@router.post("/owners/{owner_id}/edit")
async def process_update_owner_form(
    request: Request,
    owner_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
):
    """Apply the edited contact details and redirect to the owner."""
    owner = await load_owner(owner_id, owners)
    submitted = dict(await request.form())
    try:
        form = OwnerForm.model_validate(submitted)
    except ValidationError as e:
        errors = format_validation_errors(e.errors())
        logger.info(f"Rejected update of owner {owner_id}: {sorted(errors)}")
        return render(
            request,
            OWNER_FORM_TEMPLATE,
            {"is_new": False, "owner": owner, "form": submitted, "errors": errors},
        )

    await owners.save(form.apply_to(owner))
    return redirect_to_owner(owner_id)
