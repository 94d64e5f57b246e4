import os
from datetime import timedelta
from decimal import Decimal

import pytest

# Keep startup hooks inert regardless of the developer's shell environment
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["CREATE_SCHEMA_ON_STARTUP"] = "false"

from fastapi.testclient import TestClient

from jobtracker.db import models
from jobtracker.db.database import SessionLocal, engine
from jobtracker.db.repositories import applications as applications_repo
from jobtracker.utils.statuses import ApplicationStatus


@pytest.fixture(autouse=True)
def clean_db():
    """Empty every table before each test (in-memory engine shared across sessions)."""
    models.Base.metadata.create_all(bind=engine)
    with engine.begin() as conn:
        for table in reversed(models.Base.metadata.sorted_tables):
            conn.execute(table.delete())
    yield


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client():
    from jobtracker.api.main import app

    return TestClient(app)


@pytest.fixture
def make_application(db_session):
    """Factory persisting an application dated ``days_ago`` days before now."""
    now = models.now_utc()

    def _make(
        company_name="Acme",
        position="Engineer",
        status=ApplicationStatus.Applied,
        days_ago=0,
        notes=None,
        **extra,
    ):
        application = models.JobApplication(
            company_name=company_name,
            position=position,
            status=status,
            date_applied=extra.pop("date_applied", now - timedelta(days=days_ago)),
            notes=notes,
            salary_range=extra.pop("salary_range", Decimal("100000.00")),
            created_at=now,
            **extra,
        )
        return applications_repo.create_application(db_session, application)

    return _make
