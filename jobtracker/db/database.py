"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes the FastAPI session dependency.
"""
import os
import sys

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobtracker.utils.config import get_settings

IN_MEMORY_SQLITE_URL = "sqlite+pysqlite:///:memory:"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test is running,
    so engine creation at import time relies on pytest already being present
    in ``sys.modules`` during collection. ``PYTEST_RUNNING=1`` forces it.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def install_sqlite_functions(target_engine) -> None:
    """Replace SQLite's ASCII-only ``lower()`` on every new connection.

    Case-insensitive search compiles to ``lower(column) LIKE lower(term)``, so
    non-ASCII text only matches once ``lower`` folds Unicode like PostgreSQL.
    """

    @event.listens_for(target_engine, "connect")
    def _register(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def engine_kwargs_for(url: str) -> dict:
    """Return create_engine keyword arguments appropriate for ``url``."""
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url:
        # Single shared connection so the schema survives across sessions
        kwargs["poolclass"] = StaticPool
    return kwargs


# Test override strategy:
# 1. JOBTRACKER_TEST_DB, when set, is used as-is.
# 2. Under pytest without an explicit database, force in-memory sqlite.
# 3. Otherwise use the configured DATABASE_URL / POSTGRES_* settings.
explicit_test_db = os.getenv("JOBTRACKER_TEST_DB")

if explicit_test_db:
    DATABASE_URL = explicit_test_db
elif _is_pytest_runtime():
    DATABASE_URL = IN_MEMORY_SQLITE_URL
else:
    DATABASE_URL = get_settings().database_url

engine = create_engine(DATABASE_URL, **engine_kwargs_for(DATABASE_URL))
if DATABASE_URL.startswith("sqlite"):
    install_sqlite_functions(engine)

# An in-memory database has no migrations applied; create the schema eagerly so
# every session sees the tables.
if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    from jobtracker.db import models  # local import to avoid circular import at module load

    models.Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_schema() -> None:
    """Create all tables directly from the ORM metadata (no Alembic)."""
    from jobtracker.db import models

    models.Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
