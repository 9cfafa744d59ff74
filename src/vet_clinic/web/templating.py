"""
Jinja2 template environment shared by the routers.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import RedirectResponse

BASE_PATH = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_PATH / "templates"))


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    """Render a template; ``errors`` and ``form`` default to empty dicts."""
    full_context: Dict[str, Any] = {"errors": {}, "form": {}}
    full_context.update(context or {})
    return templates.TemplateResponse(
        request=request,
        name=name,
        context=full_context,
        status_code=status_code,
    )


def redirect_to_owner(owner_id: int) -> RedirectResponse:
    """302 to the owner details page, the landing page after every save."""
    return RedirectResponse(url=f"/owners/{owner_id}", status_code=302)
