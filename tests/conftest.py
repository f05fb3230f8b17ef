import sys
import os
import pytest

# make sure the repository root is on sys.path for test collection
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Use a dedicated test sqlite file for consistency across the TestClient and app imports
test_db_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '.test.db'))
os.environ.setdefault('DATABASE_URL', f'sqlite:///{test_db_path}')

from backend.linktrace.db import Base, get_engine, get_session_local  # noqa: E402
from backend.linktrace import models  # noqa: E402,F401  Ensure models are imported so table metadata is registered


@pytest.fixture(scope="session", autouse=True)
def prepare_db():
    # Create tables for tests and drop them at the end
    Base.metadata.create_all(bind=get_engine())
    yield
    Base.metadata.drop_all(bind=get_engine())


@pytest.fixture
def db():
    session = get_session_local()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from backend.linktrace.main import app
    return TestClient(app)
