"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` (a local SQLite file `app.db` at the backend root
by default) and provides small helpers used by the application and tests.
"""

from sqlalchemy import event
from sqlmodel import SQLModel, create_engine, Session

from .config import settings
from . import models  # noqa: F401 registers the teachers table

# check_same_thread only applies to SQLite
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, echo=False, connect_args=_connect_args)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record):
    # SQLite's built-in lower() only folds ASCII letters
    dbapi_connection.create_function("lower", 1, _unicode_lower)


def configure_sqlite(bind):
    """Install Unicode-aware SQL functions on every new SQLite connection of `bind`."""
    if bind.dialect.name == "sqlite":
        event.listen(bind, "connect", _register_sqlite_functions)
    return bind


configure_sqlite(engine)


def create_db_and_tables(bind=None):
    """Create database tables using SQLModel metadata.

    `bind` defaults to the module engine; tests pass their own in-memory
    engine. Production deployments should rely on a proper migration
    tool instead.
    """
    SQLModel.metadata.create_all(bind if bind is not None else engine)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
