"""Correlation records: opened on redirect, completed when the browser reports back.

A record is inserted exactly once per redirect, before the bootstrap page is
rendered, so its id can be embedded in that page as the tracking identifier.
The collector later posts its payload under that id and the record is
completed in place. Completion is last-write-wins: a retried delivery replaces
the earlier payload in one UPDATE statement, so the payload columns and the
content hash always belong to the same delivery.
"""

import logging
import time
from datetime import datetime
from typing import Any, Optional

from fastapi import Request
from sqlalchemy import update
from sqlalchemy.orm import Session

from . import models
from .config import get_settings
from .link_store import ResolvedLink
from .utils import anonymize_ip, canonical_json, finite_json, sha256_hex

logger = logging.getLogger(__name__)

GEO_HEADERS = ("cf-ipcountry", "x-vercel-ip-country", "x-country-code")


class RecordNotFound(LookupError):
    def __init__(self, record_id: int):
        super().__init__(f"No correlation record with id {record_id}")
        self.record_id = record_id


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def capture_server_signals(request: Request, started: float) -> dict:
    """Snapshot everything the server can observe about this request."""
    headers = dict(request.headers)
    geo: Optional[str] = None
    for name in GEO_HEADERS:
        if headers.get(name):
            geo = headers[name]
            break
    return {
        "ip": client_address(request),
        "forwardedFor": headers.get("x-forwarded-for"),
        "headers": headers,
        "hostname": request.url.hostname,
        "connection": {
            "httpVersion": request.scope.get("http_version"),
            "scheme": request.url.scheme,
            "timingMs": round((time.perf_counter() - started) * 1000, 3),
        },
        "geo": geo,
    }


def open_record(db: Session, link: ResolvedLink, request: Request, server_data: dict) -> int:
    """Insert the provisional record and return its id. Storage errors propagate."""
    ip = client_address(request)
    if get_settings().anonymize_ip:
        ip = anonymize_ip(ip)
        server_data = {**server_data, "ip": ip}
    record = models.CorrelationRecord(
        link_id=link.id,
        requestor_ip=ip,
        user_agent=request.headers.get("user-agent"),
        server_data=server_data,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record.id


def combine(client_data: Any, behavior: Any) -> dict:
    return {"clientData": client_data, "behavior": behavior}


def content_hash(client_data: Any, behavior: Any) -> str:
    return sha256_hex(canonical_json(combine(client_data, behavior)))


def correlate(db: Session, record_id: int, client_data: Any, behavior: Any) -> str:
    """Attach a client payload to an existing record and return its content hash.

    Raises RecordNotFound when no record has this id; nothing is written then.
    Non-finite numbers are stored as null.
    """
    client_data, behavior = finite_json(client_data), finite_json(behavior)
    digest = content_hash(client_data, behavior)
    result = db.execute(
        update(models.CorrelationRecord)
        .where(models.CorrelationRecord.id == record_id)
        .values(
            client_data=client_data,
            behavior_data=behavior,
            combined_data=combine(client_data, behavior),
            content_hash=digest,
            correlated_at=datetime.utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise RecordNotFound(record_id)
    db.commit()
    return digest
