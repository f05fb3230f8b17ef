"""Runtime configuration read from the environment (and a local .env file)."""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load .env file
load_dotenv()

DEFAULT_PYSCRIPT_URL = "https://pyscript.net/releases/2024.11.1/core.js"


class Settings(BaseModel):
    database_url: Optional[str] = None
    on_vercel: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    anonymize_ip: bool = False
    pyscript_url: str = DEFAULT_PYSCRIPT_URL
    # navigate anyway if the in-browser runtime never boots
    redirect_failsafe_ms: int = Field(default=10_000, ge=0)

    @field_validator("database_url")
    @classmethod
    def normalize_postgres_scheme(cls, v):
        # Supabase/Vercel often hand out postgres:// URLs
        if v and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v or None


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL"),
        on_vercel=bool(os.getenv("VERCEL")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE") or None,
        anonymize_ip=_flag("ANONYMIZE_IP"),
        pyscript_url=os.getenv("PYSCRIPT_URL", DEFAULT_PYSCRIPT_URL),
        redirect_failsafe_ms=int(os.getenv("REDIRECT_FAILSAFE_MS", 10_000)),
    )
