"""
Development sample data.

Inserts a handful of realistic applications into an empty database so a fresh
local install has something to list and chart.
"""
import logging
from datetime import timedelta
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from jobtracker.db import models
from jobtracker.db.repositories import applications as applications_repo
from jobtracker.utils.statuses import ApplicationStatus

logger = logging.getLogger(__name__)


def sample_applications(now=None) -> List[models.JobApplication]:
    now = now or models.now_utc()
    days_ago = lambda n: now - timedelta(days=n)  # noqa: E731
    return [
        models.JobApplication(
            company_name="Microsoft",
            position="Senior .NET Developer",
            status=ApplicationStatus.Applied,
            date_applied=days_ago(10),
            contact_person="John Smith",
            contact_email="john.smith@microsoft.com",
            notes="Applied through company website. Received confirmation email.",
            job_url="https://careers.microsoft.com/jobs/123456",
            salary_range=Decimal("120000"),
            created_at=days_ago(10),
            updated_at=None,
        ),
        models.JobApplication(
            company_name="Google",
            position="Full Stack Engineer",
            status=ApplicationStatus.Interview,
            date_applied=days_ago(15),
            contact_person="Jane Doe",
            contact_email="jane.doe@google.com",
            notes="First round technical interview scheduled for next week.",
            job_url="https://careers.google.com/jobs/124567",
            salary_range=Decimal("140000"),
            created_at=days_ago(15),
            updated_at=days_ago(12),
        ),
        models.JobApplication(
            company_name="Amazon",
            position="Software Development Engineer II",
            status=ApplicationStatus.Rejected,
            date_applied=days_ago(30),
            contact_person="Recruiter",
            contact_email="recruiter@amazon.com",
            notes="Rejected after phone screen. Will try again in 6 months.",
            job_url="https://amazon.jobs/en/jobs/987654",
            salary_range=Decimal("135000"),
            created_at=days_ago(30),
            updated_at=days_ago(20),
        ),
        models.JobApplication(
            company_name="Netflix",
            position="Senior Frontend Developer",
            status=ApplicationStatus.Offer,
            date_applied=days_ago(45),
            contact_person="Technical Recruiter",
            contact_email="techrec@netflix.com",
            notes="Offer received: $150K base + 15% bonus + stock options",
            job_url="https://jobs.netflix.com/jobs/235689",
            salary_range=Decimal("150000"),
            created_at=days_ago(45),
            updated_at=days_ago(5),
        ),
        models.JobApplication(
            company_name="Apple",
            position="Software Engineer",
            status=ApplicationStatus.Applied,
            date_applied=days_ago(2),
            contact_person=None,
            contact_email=None,
            notes="Applied through LinkedIn Easy Apply",
            job_url="https://jobs.apple.com/en-us/details/123456789",
            salary_range=None,
            created_at=days_ago(2),
            updated_at=None,
        ),
    ]


def seed_sample_applications(db: Session) -> int:
    """Insert the sample applications when the table is empty.

    Returns the number of rows inserted (0 when data already exists).
    """
    if db.query(models.JobApplication.id).first() is not None:
        logger.info("Database already contains data. Skipping seed operation.")
        return 0

    logger.info("Seeding database with sample job applications...")
    rows = sample_applications()
    for row in rows:
        applications_repo.create_application(db, row)
    logger.info("Database seeding completed successfully (%d applications).", len(rows))
    return len(rows)
