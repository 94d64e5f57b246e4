"""
Application service: orchestrates the repository into the CRUD, listing and
statistics operations exposed to the API layer.
"""
from __future__ import annotations

import dataclasses
import logging
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Dict, Optional

from sqlalchemy.orm import Session

from jobtracker.db import models, schemas
from jobtracker.db.repositories import applications as applications_repo
from jobtracker.db.repositories.applications import UpdateResult, UpdateStatus
from jobtracker.services import mapping
from jobtracker.utils.statuses import ALL_STATUSES, ApplicationStatus

logger = logging.getLogger(__name__)

_TWO_PLACES = Decimal("0.01")


def percentage(numerator: int, denominator: int) -> float:
    """``numerator / denominator * 100`` rounded half-to-even to two places."""
    value = Decimal(numerator) / Decimal(denominator) * 100
    return float(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_EVEN))


def build_statistics(counts_by_status: Dict[ApplicationStatus, int]) -> schemas.ApplicationStatistics:
    """Derive the statistics snapshot from raw per-status counts.

    Missing statuses count as zero. ``interview_rate`` divides by
    interview + applied and is only computed when ``applied`` is non-zero.
    """
    counts = {status: counts_by_status.get(status, 0) for status in ALL_STATUSES}
    total_count = sum(counts.values())

    applied = counts[ApplicationStatus.Applied]
    interview = counts[ApplicationStatus.Interview]
    offer = counts[ApplicationStatus.Offer]
    rejected = counts[ApplicationStatus.Rejected]

    success_rate = percentage(offer, total_count) if total_count > 0 else 0.0
    interview_rate = percentage(interview, interview + applied) if applied > 0 else 0.0

    return schemas.ApplicationStatistics(
        total_count=total_count,
        applied_count=applied,
        interview_count=interview,
        offer_count=offer,
        rejected_count=rejected,
        success_rate=success_rate,
        interview_rate=interview_rate,
    )


class ApplicationService:
    """Request-scoped service over a single database session."""

    def __init__(self, db: Session):
        self.db = db

    def list_applications(self, pagination: schemas.PaginationFilter) -> schemas.PaginatedApplications:
        applications, total_count = applications_repo.get_applications(
            self.db,
            page_number=pagination.page_number,
            page_size=pagination.page_size,
            status=pagination.status,
            search_term=pagination.search_term,
        )
        return schemas.PaginatedApplications(
            page_number=pagination.page_number,
            page_size=pagination.page_size,
            total_count=total_count,
            total_pages=schemas.PaginatedApplications.count_pages(total_count, pagination.page_size),
            items=[mapping.to_schema(a) for a in applications],
        )

    def get_application(self, application_id: int) -> Optional[schemas.JobApplication]:
        application = applications_repo.get_application(self.db, application_id)
        return mapping.to_schema(application) if application is not None else None

    def create_application(self, data: schemas.JobApplicationCreate) -> schemas.JobApplication:
        application = mapping.from_create_input(data, now=models.now_utc())
        created = applications_repo.create_application(self.db, application)
        return mapping.to_schema(created)

    def update_application(self, application_id: int, data: schemas.JobApplicationUpdate) -> UpdateResult:
        """Replace every mutable field of an existing application."""
        application = applications_repo.get_application(self.db, application_id)
        if application is None:
            return UpdateResult(UpdateStatus.NOT_FOUND, application_id)
        mapping.apply_full_update(application, data, now=models.now_utc())
        return self._write(application)

    def update_application_status(self, application_id: int, status: ApplicationStatus) -> UpdateResult:
        """Change only the status of an existing application."""
        application = applications_repo.get_application(self.db, application_id)
        if application is None:
            return UpdateResult(UpdateStatus.NOT_FOUND, application_id)
        mapping.apply_status_update(application, status, now=models.now_utc())
        return self._write(application)

    def delete_application(self, application_id: int) -> bool:
        return applications_repo.delete_application(self.db, application_id)

    def get_statistics(self) -> schemas.ApplicationStatistics:
        counts = applications_repo.get_application_counts_by_status(self.db)
        return build_statistics(counts)

    def _write(self, application: models.JobApplication) -> UpdateResult:
        result = applications_repo.update_application(self.db, application)
        if not result.ok:
            logger.info("Update of job application %s ended with %s", result.application_id, result.status.value)
            return result
        return dataclasses.replace(result, application=mapping.to_schema(result.application))
