from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import get_settings

Base = declarative_base()

# Lazy initialization - avoid crash at import time
_engine = None
_SessionLocal = None
_tables_initialized = False


def get_engine():
    """Get or create the SQLAlchemy engine (lazy initialization)."""
    global _engine
    if _engine is not None:
        return _engine

    settings = get_settings()
    database_url = settings.database_url

    if not database_url:
        if settings.on_vercel:
            # On Vercel, PostgreSQL is required
            raise ValueError("DATABASE_URL is missing on Vercel. Please set it in the Vercel project settings.")
        # For local development, use SQLite
        database_url = "sqlite:///./dev.db"

    # SQLite needs special config
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}

    _engine = create_engine(database_url, connect_args=connect_args)
    return _engine


def get_session_local():
    """Get or create the SessionLocal factory (lazy initialization)."""
    global _SessionLocal
    if _SessionLocal is not None:
        return _SessionLocal

    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def ensure_tables():
    """Ensure database tables exist. Safe to call multiple times."""
    global _tables_initialized
    if not _tables_initialized:
        # models must be imported for their tables to be registered on Base
        from . import models  # noqa: F401
        Base.metadata.create_all(bind=get_engine())
        _tables_initialized = True


def get_db():
    """Dependency to provide a DB session."""
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
