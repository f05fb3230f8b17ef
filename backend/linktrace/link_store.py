"""Short-code storage: resolve, create and check codes against the links table."""

import re
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from . import models
from .utils import generate_code

CODE_PATTERN = re.compile(r"^[a-z0-9_-]{3,20}$", re.IGNORECASE)
# single-segment paths the app routes itself; a link under these would never resolve
RESERVED_CODES = frozenset({"health", "api", "static", "collector", "docs", "redoc"})


class InvalidCode(ValueError):
    pass


class CodeTaken(ValueError):
    pass


@dataclass(frozen=True)
class ResolvedLink:
    id: int
    target_url: str


def is_valid_code(code: str) -> bool:
    return bool(code) and CODE_PATTERN.match(code) is not None


def normalize_code(code: str) -> str:
    return code.strip().lower()


class LinkStore:
    def __init__(self, db: Session):
        self.db = db

    def resolve(self, code: str) -> Optional[ResolvedLink]:
        if not is_valid_code(code):
            return None
        link = self.db.query(models.Link).filter(models.Link.short_code == normalize_code(code)).first()
        if not link:
            return None
        return ResolvedLink(id=link.id, target_url=link.target_url)

    def exists(self, code: str) -> bool:
        return self.db.query(models.Link.id).filter(models.Link.short_code == normalize_code(code)).first() is not None

    def find_by_target(self, target_url: str) -> Optional[str]:
        """Return the code already pointing at target_url, if any."""
        row = self.db.query(models.Link.short_code).filter(models.Link.target_url == target_url).first()
        return row.short_code if row else None

    def generate_code(self) -> str:
        code = generate_code()
        while code in RESERVED_CODES or self.exists(code):
            code = generate_code()
        return code

    def create(self, code: str, target_url: str) -> int:
        if not is_valid_code(code):
            raise InvalidCode("Invalid custom code format")
        if normalize_code(code) in RESERVED_CODES:
            raise InvalidCode("Custom code is reserved")
        if self.exists(code):
            raise CodeTaken("Custom code already in use")
        link = models.Link(short_code=normalize_code(code), target_url=target_url)
        self.db.add(link)
        self.db.commit()
        self.db.refresh(link)
        return link.id
