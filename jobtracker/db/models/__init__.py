"""
SQLAlchemy models package.

Exposes ``Base``, ``now_utc`` and the ORM classes so callers can write
``from jobtracker.db import models`` and reach everything from one place.
"""

from .base import Base, now_utc  # re-export

from .applications import JobApplication

__all__ = [
    "Base",
    "now_utc",
    "JobApplication",
]
