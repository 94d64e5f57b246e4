from sqlalchemy import CheckConstraint, Column, Index, Integer, Numeric, String

from jobtracker.db.types import StatusCode, UTCDateTime
from .base import Base, now_utc


class JobApplication(Base):
    __tablename__ = 'job_applications'
    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String(100), nullable=False)
    position = Column(String(100), nullable=False)
    status = Column(StatusCode(), nullable=False)
    date_applied = Column(UTCDateTime(), nullable=False)
    contact_person = Column(String(100), nullable=True)
    contact_email = Column(String(100), nullable=True)
    notes = Column(String(1000), nullable=True)
    job_url = Column(String(500), nullable=True)
    salary_range = Column(Numeric(12, 2), nullable=True)
    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)
    # Stays NULL until the first update; the repository stamps it on every write
    updated_at = Column(UTCDateTime(), nullable=True)
    # Optimistic concurrency counter: UPDATEs match on the version that was read
    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index('idx_job_applications_status', 'status'),
        Index('idx_job_applications_date_applied', 'date_applied'),
        CheckConstraint("status in (0, 1, 2, 3)", name='ck_job_applications_status'),
        # ids are never reused after a delete
        {'sqlite_autoincrement': True},
    )

    def __repr__(self) -> str:
        return f"<JobApplication id={self.id} company={self.company_name!r} status={self.status!r}>"
