"""
Per-domain repository modules for database access.

Repositories are plain functions taking a SQLAlchemy ``Session`` first; the
service layer composes them into request-scoped units of work.
"""
