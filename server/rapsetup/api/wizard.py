# rapsetup/api/wizard.py
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Form, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from rapsetup.core.session import WizardSession
from rapsetup.models import R_VERSIONS, GeneratorStatus
from rapsetup.utils.config import MODEL_NAME, SESSION_COOKIE_NAME
from rapsetup.utils.file_helpers import file_icon

logger = logging.getLogger(__name__)

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.filters["file_icon"] = file_icon


def _session_for(request: Request) -> (str, WizardSession):
    store = request.app.state.sessions
    return store.get_or_create(request.cookies.get(SESSION_COOKIE_NAME))


def _render(request: Request, session_id: str, session: WizardSession, status_code: int = 200):
    context = {
        "config": session.config,
        "status": session.status,
        "statuses": GeneratorStatus,
        "files": session.files,
        "summary": session.summary,
        "error": session.error,
        "r_versions": R_VERSIONS,
        "model_name": MODEL_NAME,
    }
    response = templates.TemplateResponse(request, "index.html", context, status_code=status_code)
    response.set_cookie(SESSION_COOKIE_NAME, session_id, httponly=True, samesite="lax")
    return response


@router.get("/")
async def index(request: Request):
    session_id, session = _session_for(request)
    return _render(request, session_id, session)


@router.post("/generate")
async def generate(request: Request,
                   goal: str = Form(""),
                   packages: str = Form(""),
                   r_version: str = Form("4.3"),
                   include_bioconductor: Optional[str] = Form(None),
                   include_tidyverse: Optional[str] = Form(None)):
    """
    Form submit of the wizard. Unchecked checkboxes are simply absent from the form.
    Always ends on a page render or a redirect; never leaves the session loading.
    """
    session_id, session = _session_for(request)

    if session.is_generating:
        # the button is disabled while pending; this covers double submits
        logger.info("session %s: generate ignored, request already pending", session_id[:8])
        response = RedirectResponse("/", status_code=303)
        response.set_cookie(SESSION_COOKIE_NAME, session_id, httponly=True, samesite="lax")
        return response

    try:
        session.update_config(
            goal=goal,
            packages=packages,
            r_version=r_version,
            include_bioconductor=include_bioconductor is not None,
            include_tidyverse=include_tidyverse is not None,
        )
    except ValidationError as e:
        session.error = "; ".join(err["msg"] for err in e.errors())
        session.status = GeneratorStatus.ERROR
        return _render(request, session_id, session, status_code=422)

    await session.generate()

    response = RedirectResponse("/", status_code=303)
    response.set_cookie(SESSION_COOKIE_NAME, session_id, httponly=True, samesite="lax")
    return response
