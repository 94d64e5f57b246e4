"""
Pydantic schemas package.

Re-exports the request/response shapes so callers can write
``from jobtracker.db import schemas``.
"""

from .applications import (
    DEFAULT_PAGE_NUMBER,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    CamelModel,
    JobApplicationBase,
    JobApplicationCreate,
    JobApplicationUpdate,
    ApplicationStatusUpdate,
    JobApplication,
    PaginationFilter,
    PaginatedApplications,
    ApplicationStatistics,
)

__all__ = [
    "DEFAULT_PAGE_NUMBER",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "CamelModel",
    "JobApplicationBase",
    "JobApplicationCreate",
    "JobApplicationUpdate",
    "ApplicationStatusUpdate",
    "JobApplication",
    "PaginationFilter",
    "PaginatedApplications",
    "ApplicationStatistics",
]
