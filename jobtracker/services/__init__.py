"""Business logic services package with public service helpers."""

from .application_service import ApplicationService, build_statistics, percentage

__all__ = [
    "ApplicationService",
    "build_statistics",
    "percentage",
]
