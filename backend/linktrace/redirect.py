import json
import logging
import os
import time

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.responses import FileResponse, RedirectResponse

from . import tracking
from .config import get_settings
from .db import get_db, ensure_tables
from .link_store import LinkStore

router = APIRouter(tags=["redirect"])
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=os.path.join(os.path.dirname(__file__), "templates"))

COLLECTOR_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "collector")
# Modules fetched into the browser's virtual filesystem, in load order
COLLECTOR_MODULES = (
    "__init__.py",
    "signals.py",
    "environment.py",
    "fonts.py",
    "probes_basic.py",
    "probes_hardware.py",
    "probes_graphics.py",
    "probes_behavior.py",
    "collect.py",
    "boot.py",
    "browser.py",
)
COLLECTOR_ENTRY = "bootstrap.py"


def pyscript_config() -> str:
    files = {f"/collector/{name}": f"./collector/{name}" for name in COLLECTOR_MODULES}
    return json.dumps({"files": files})


@router.get("/collector/{name}")
def collector_source(name: str):
    """Serve the in-browser collector's Python sources to PyScript."""
    if name not in COLLECTOR_MODULES and name != COLLECTOR_ENTRY:
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(os.path.join(COLLECTOR_DIR, name), media_type="text/x-python")


@router.get("/{code}")
def redirect_code(code: str, request: Request, db: Session = Depends(get_db)):
    """Resolve a short code and serve the page that fingerprints, then forwards, the visitor."""
    started = time.perf_counter()
    ensure_tables()
    link = LinkStore(db).resolve(code)
    if not link:
        raise HTTPException(status_code=404, detail="Link not found")

    server_data = tracking.capture_server_signals(request, started)
    try:
        tracking_id = tracking.open_record(db, link, request, server_data)
    except SQLAlchemyError:
        db.rollback()
        # tracking is best-effort; the redirect itself must still happen
        logger.exception("Could not open correlation record for link %s", link.id)
        return RedirectResponse(url=link.target_url, status_code=302)

    settings = get_settings()
    response = templates.TemplateResponse(
        request,
        "redirect.html",
        {
            "tracking_id": tracking_id,
            "target_url": link.target_url,
            "failsafe_ms": settings.redirect_failsafe_ms,
            "pyscript_url": settings.pyscript_url,
            "pyscript_config": pyscript_config(),
            "collector_entry": f"/collector/{COLLECTOR_ENTRY}",
        },
    )
    response.headers["Cache-Control"] = "no-store"
    return response
