"""
Application status values and helpers.

Centralized definition of the closed set of statuses so filtering and
statistics iterate the same values instead of scattering integer codes.
"""

from enum import IntEnum
from typing import FrozenSet, Tuple


class ApplicationStatus(IntEnum):
    """Status of a job application, stored as its integer code."""
    Applied = 0
    Interview = 1
    Offer = 2
    Rejected = 3


# All statuses in code order
ALL_STATUSES: Tuple[ApplicationStatus, ...] = tuple(ApplicationStatus)
STATUS_CODES: FrozenSet[int] = frozenset(int(s) for s in ALL_STATUSES)


def is_valid_status(code: int) -> bool:
    """Return True if ``code`` is one of the supported status codes."""
    return code in STATUS_CODES
