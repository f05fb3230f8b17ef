import logging
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.templating import Jinja2Templates
from fastapi.responses import FileResponse

from .config import get_settings
from .db import ensure_tables
from .logging_utils import configure_logging
from .redirect import router as redirect_router
from .routes_links import router as links_router
from .routes_track import router as track_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    try:
        ensure_tables()
        logger.info("Database initialized")
    except Exception:
        logger.exception("Database initialization error")
        raise
    yield


app = FastAPI(title="Linktrace", lifespan=lifespan)

templates_dir = os.path.join(os.path.dirname(__file__), "templates")
static_dir = os.path.join(os.path.dirname(__file__), "static")
templates = Jinja2Templates(directory=templates_dir)

app.include_router(links_router)
app.include_router(track_router)


@app.get("/health")
async def health_check():
    """Health check endpoint for debugging."""
    settings = get_settings()
    return {
        "status": "ok",
        "python_version": sys.version,
        "env_vars": {
            "DATABASE_URL": "configured" if settings.database_url else "missing",
            "ANONYMIZE_IP": settings.anonymize_ip,
        },
    }


@app.get("/")
async def root(request: Request):
    """Serve the shortening form."""
    return templates.TemplateResponse(request, "index.html", {})


@app.get("/static/{file_path:path}")
async def serve_static(file_path: str):
    """Serve static files (CSS, JS, images)."""
    file_location = os.path.realpath(os.path.join(static_dir, file_path))
    if not file_location.startswith(os.path.realpath(static_dir) + os.sep) or not os.path.isfile(file_location):
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(file_location)


# Registered last: /{code} would otherwise shadow the single-segment routes above
app.include_router(redirect_router)
