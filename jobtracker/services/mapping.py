"""
Explicit conversions between input schemas and the stored record.

Each operation gets its own function so every copied, preserved and
overridden field is visible here rather than hidden in mapper configuration.
"""
from __future__ import annotations

from datetime import datetime

from jobtracker.db import models, schemas
from jobtracker.utils.statuses import ApplicationStatus


def from_create_input(data: schemas.JobApplicationCreate, now: datetime) -> models.JobApplication:
    """Build a new, not yet persisted record. ``id`` is left to the store."""
    return models.JobApplication(
        company_name=data.company_name,
        position=data.position,
        status=data.status,
        date_applied=data.date_applied,
        contact_person=data.contact_person,
        contact_email=data.contact_email,
        notes=data.notes,
        job_url=data.job_url,
        salary_range=data.salary_range,
        created_at=now,
        updated_at=None,
    )


def apply_full_update(
    application: models.JobApplication,
    data: schemas.JobApplicationUpdate,
    now: datetime,
) -> models.JobApplication:
    """Overwrite every mutable field. ``id`` and ``created_at`` are never touched."""
    application.company_name = data.company_name
    application.position = data.position
    application.status = data.status
    application.date_applied = data.date_applied
    application.contact_person = data.contact_person
    application.contact_email = data.contact_email
    application.notes = data.notes
    application.job_url = data.job_url
    application.salary_range = data.salary_range
    application.updated_at = now
    return application


def apply_status_update(
    application: models.JobApplication,
    status: ApplicationStatus,
    now: datetime,
) -> models.JobApplication:
    """Change ``status`` and ``updated_at`` only."""
    application.status = status
    application.updated_at = now
    return application


def to_schema(application: models.JobApplication) -> schemas.JobApplication:
    return schemas.JobApplication.model_validate(application, from_attributes=True)
