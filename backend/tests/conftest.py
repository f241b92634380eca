import os
from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

# Keep the app's import-time engine off the on-disk app.db
os.environ.setdefault("DATABASE_URL", "sqlite://")

from teacher_registry import models  # noqa: E402
from teacher_registry.database import configure_sqlite, create_db_and_tables, get_session  # noqa: E402


@pytest.fixture()
def engine():
    """Fresh in-memory SQLite database shared by every connection of one test."""
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    configure_sqlite(eng)
    create_db_and_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def client(engine):
    """TestClient whose requests all use the test database."""
    from fastapi.testclient import TestClient
    from teacher_registry.main import app

    def _session_override():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _session_override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def add_teacher(session):
    """Insert a teacher directly through the session and return it."""
    def _add(full_name: str, date_of_birth: date, number_of_classes: int) -> models.Teacher:
        t = models.Teacher(full_name=full_name, date_of_birth=date_of_birth, number_of_classes=number_of_classes)
        session.add(t)
        session.commit()
        session.refresh(t)
        return t
    return _add
