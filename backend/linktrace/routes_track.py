import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import schemas, tracking
from .db import get_db, ensure_tables

router = APIRouter(prefix="/api", tags=["tracking"])
logger = logging.getLogger(__name__)


@router.post("/track")
def track(data: schemas.TrackPayload, db: Session = Depends(get_db)):
    """Merge the collector's payload into the record opened at redirect time."""
    ensure_tables()
    try:
        digest = tracking.correlate(db, data.id, data.client_data, data.behavior)
    except tracking.RecordNotFound:
        logger.info("Tracking payload for unknown record %s", data.id)
        raise HTTPException(status_code=404, detail="Tracking record not found")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Tracking save error for record %s", data.id)
        raise HTTPException(status_code=500, detail="Could not store tracking data")
    return {"status": "ok", "hash": digest}
