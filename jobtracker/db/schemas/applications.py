import math
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from jobtracker.utils.statuses import ApplicationStatus

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


def _coerce_status(value):
    """Accept status codes (0..3) as well as status names ("Offer")."""
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
        for status in ApplicationStatus:
            if status.name.lower() == stripped.lower():
                return status
    return value


class CamelModel(BaseModel):
    """Base for API-facing shapes: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobApplicationBase(CamelModel):
    company_name: str = Field(min_length=1, max_length=100)
    position: str = Field(min_length=1, max_length=100)
    status: ApplicationStatus = ApplicationStatus.Applied
    date_applied: datetime
    contact_person: Optional[str] = Field(default=None, max_length=100)
    contact_email: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=1000)
    job_url: Optional[str] = Field(default=None, max_length=500)
    salary_range: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)

    @field_validator("company_name", "position")
    @classmethod
    def _require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value):
        return _coerce_status(value)

    @field_serializer("salary_range", when_used="json")
    def _salary_as_number(self, value: Optional[Decimal]):
        return float(value) if value is not None else None


class JobApplicationCreate(JobApplicationBase):
    pass


class JobApplicationUpdate(JobApplicationBase):
    """Full replacement of every mutable field; ``id``/``createdAt`` keys are ignored."""
    pass


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value):
        return _coerce_status(value)


class JobApplication(JobApplicationBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class PaginationFilter(CamelModel):
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE
    status: Optional[ApplicationStatus] = None
    search_term: Optional[str] = None

    @field_validator("page_number")
    @classmethod
    def _clamp_page_number(cls, value: int) -> int:
        return max(value, 1)

    @field_validator("page_size")
    @classmethod
    def _clamp_page_size(cls, value: int) -> int:
        return min(max(value, 1), MAX_PAGE_SIZE)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value):
        return _coerce_status(value)


class PaginatedApplications(CamelModel):
    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    items: List[JobApplication]

    @computed_field(alias="hasPreviousPage")
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field(alias="hasNextPage")
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @staticmethod
    def count_pages(total_count: int, page_size: int) -> int:
        if total_count <= 0:
            return 0
        return math.ceil(total_count / page_size)


class ApplicationStatistics(CamelModel):
    total_count: int = 0
    applied_count: int = 0
    interview_count: int = 0
    offer_count: int = 0
    rejected_count: int = 0
    success_rate: float = 0.0
    interview_rate: float = 0.0
