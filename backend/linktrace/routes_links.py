import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from . import schemas
from .db import get_db, ensure_tables
from .link_store import LinkStore, InvalidCode, CodeTaken

router = APIRouter(prefix="/api", tags=["links"])
logger = logging.getLogger(__name__)


@router.post("/create")
def create_link(data: schemas.LinkCreate, db: Session = Depends(get_db)):
    """Shorten a URL, reusing the existing code when the URL was shortened before."""
    ensure_tables()  # Ensure tables exist on first request
    store = LinkStore(db)

    existing = store.find_by_target(data.url)
    if existing:
        return {"code": existing, "existing": True}

    code = data.custom_code or store.generate_code()
    try:
        store.create(code, data.url)
    except (InvalidCode, CodeTaken) as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Created short code %s", code.lower())
    return {"code": code.lower()}
