"""
App assembly entry point.

Re-exports the FastAPI `app` from `jobtracker.api.main` so servers can be
pointed at ``app:app``.
"""

from jobtracker.api.main import app  # noqa: F401
