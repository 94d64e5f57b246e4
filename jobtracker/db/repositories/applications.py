"""
Job application repository functions.

Implements the record store: insert, point lookup, the filtered/ordered/paginated
scan with its total count, conflict-detecting updates, delete, and the
per-status count used by statistics.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from sqlalchemy import func, inspect, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from jobtracker.db import models
from jobtracker.errors import ConcurrencyError, NotFoundError, StorageError
from jobtracker.utils.statuses import ApplicationStatus

logger = logging.getLogger(__name__)


class UpdateStatus(str, Enum):
    UPDATED = "updated"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a write against an existing application."""

    status: UpdateStatus
    application_id: int
    # ORM row from the repository; the service swaps in the response schema
    application: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.status is UpdateStatus.UPDATED

    def raise_for_status(self) -> Any:
        """Return the updated row, or raise the matching error for a failed write."""
        if self.status is UpdateStatus.NOT_FOUND:
            raise NotFoundError(self.application_id)
        if self.status is UpdateStatus.CONFLICT:
            raise ConcurrencyError(self.application_id)
        return self.application


@contextmanager
def _storage_errors(db: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise database failures as ``StorageError``."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error occurred while %s: %s", action, e)
        raise StorageError(f"Failed while {action}") from e


def create_application(db: Session, application: models.JobApplication) -> models.JobApplication:
    with _storage_errors(db, "creating job application"):
        db.add(application)
        db.commit()
        db.refresh(application)
    logger.info("Created job application %s for %s", application.id, application.company_name)
    return application


def get_application(db: Session, application_id: int) -> Optional[models.JobApplication]:
    with _storage_errors(db, f"getting job application with ID {application_id}"):
        return db.query(models.JobApplication).filter(models.JobApplication.id == application_id).first()


def application_exists(db: Session, application_id: int) -> bool:
    with _storage_errors(db, f"checking if job application exists with ID {application_id}"):
        exists_query = db.query(models.JobApplication).filter(models.JobApplication.id == application_id).exists()
        return bool(db.query(exists_query).scalar())


def get_applications(
    db: Session,
    page_number: int,
    page_size: int,
    status: Optional[ApplicationStatus] = None,
    search_term: Optional[str] = None,
) -> Tuple[List[models.JobApplication], int]:
    """Return one page of matching applications and the total number of matches.

    The count and the page are separate reads and may disagree if a write lands
    between them.
    """
    query = db.query(models.JobApplication)

    if status is not None:
        query = query.filter(models.JobApplication.status == status)

    term = (search_term or "").strip()
    if term:
        # NULL notes evaluate to NULL and never match
        query = query.filter(
            or_(
                models.JobApplication.company_name.icontains(term, autoescape=True),
                models.JobApplication.position.icontains(term, autoescape=True),
                models.JobApplication.notes.icontains(term, autoescape=True),
            )
        )

    skip = max(page_number - 1, 0) * page_size

    with _storage_errors(db, "getting paginated job applications"):
        total_count = query.count()
        # past the last row; also keeps huge offsets away from the driver
        if skip >= total_count:
            return [], total_count
        applications = (
            query.order_by(
                models.JobApplication.date_applied.desc(),
                models.JobApplication.company_name.asc(),
                models.JobApplication.id.asc(),
            )
            .offset(skip)
            .limit(page_size)
            .all()
        )
    return applications, total_count


def update_application(db: Session, application: models.JobApplication) -> UpdateResult:
    """Write pending changes to an already persisted application.

    ``updated_at`` is always stamped here. The ORM version counter makes the
    UPDATE conditional on the row still carrying the version that was read,
    so a concurrent update or delete surfaces as ``StaleDataError``; existence
    is then re-checked to tell a vanished row from a conflicting write.
    """
    state = inspect(application)
    if state.transient or state.pending:
        raise ValueError("update_application requires an application loaded from the store")
    application_id = state.identity[0]
    if state.detached:
        db.add(application)

    application.updated_at = models.now_utc()
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        if not application_exists(db, application_id):
            logger.warning("Attempted to update non-existent job application with ID: %s", application_id)
            return UpdateResult(UpdateStatus.NOT_FOUND, application_id)
        logger.error("Concurrency conflict while updating job application with ID: %s", application_id)
        return UpdateResult(UpdateStatus.CONFLICT, application_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error occurred while updating job application with ID %s: %s", application_id, e)
        raise StorageError(f"Failed to update job application {application_id}") from e

    with _storage_errors(db, f"reloading job application with ID {application_id}"):
        db.refresh(application)
    return UpdateResult(UpdateStatus.UPDATED, application_id, application)


def delete_application(db: Session, application_id: int) -> bool:
    """Hard-delete by id; ``False`` when there was nothing to delete."""
    with _storage_errors(db, f"deleting job application with ID {application_id}"):
        deleted = (
            db.query(models.JobApplication)
            .filter(models.JobApplication.id == application_id)
            .delete(synchronize_session="fetch")
        )
        db.commit()
    if deleted:
        logger.info("Deleted job application %s", application_id)
    return bool(deleted)


def get_application_counts_by_status(db: Session) -> Dict[ApplicationStatus, int]:
    """Row count per status; statuses without rows are absent from the result."""
    with _storage_errors(db, "getting application counts by status"):
        rows = (
            db.query(models.JobApplication.status, func.count(models.JobApplication.id))
            .group_by(models.JobApplication.status)
            .all()
        )
    return {ApplicationStatus(status): count for status, count in rows}
