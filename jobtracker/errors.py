"""
Error taxonomy shared by the repository, service and API layers.

Expected outcomes (record missing, concurrent write) are normally reported
through return values (``None``, ``False``, ``UpdateResult``); these classes
exist for callers that want exceptions and for genuine storage failures.
"""
from __future__ import annotations


class TrackerError(Exception):
    """Base class for job tracker errors."""


class NotFoundError(TrackerError):
    """The targeted application id does not exist."""

    def __init__(self, application_id: int):
        super().__init__(f"Job application with ID {application_id} not found")
        self.application_id = application_id


class ConcurrencyError(TrackerError):
    """Another writer changed the same application between read and write."""

    def __init__(self, application_id: int):
        super().__init__(
            f"Job application with ID {application_id} was modified by another request"
        )
        self.application_id = application_id


class StorageError(TrackerError):
    """The backing database failed or is unavailable."""
