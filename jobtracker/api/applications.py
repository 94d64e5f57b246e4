"""
Job applications API endpoints.

Listing with filters and pagination, CRUD, status-only updates and statistics.
"""
import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from jobtracker.db import schemas
from jobtracker.db.database import get_db
from jobtracker.services.application_service import ApplicationService
from jobtracker.utils.statuses import ApplicationStatus, is_valid_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])

PAGINATION_HEADER = "X-Pagination"


def get_application_service(db: Session = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


def _pagination_header(page: schemas.PaginatedApplications) -> str:
    meta = page.model_dump(by_alias=True, exclude={"items"})
    return json.dumps({
        "totalCount": meta["totalCount"],
        "totalPages": meta["totalPages"],
        "pageNumber": meta["pageNumber"],
        "pageSize": meta["pageSize"],
        "hasPreviousPage": meta["hasPreviousPage"],
        "hasNextPage": meta["hasNextPage"],
    })


@router.get("", response_model=schemas.PaginatedApplications)
def list_applications_endpoint(
    response: Response,
    page_number: int = Query(default=schemas.DEFAULT_PAGE_NUMBER, alias="pageNumber"),
    page_size: int = Query(default=schemas.DEFAULT_PAGE_SIZE, alias="pageSize"),
    status_code: Optional[int] = Query(default=None, alias="status"),
    search_term: Optional[str] = Query(default=None, alias="searchTerm"),
    service: ApplicationService = Depends(get_application_service),
):
    if status_code is not None and not is_valid_status(status_code):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown application status: {status_code}",
        )
    pagination = schemas.PaginationFilter(
        page_number=page_number,
        page_size=page_size,
        status=ApplicationStatus(status_code) if status_code is not None else None,
        search_term=search_term,
    )
    page = service.list_applications(pagination)
    response.headers[PAGINATION_HEADER] = _pagination_header(page)
    return page


@router.get("/statistics", response_model=schemas.ApplicationStatistics)
def get_statistics_endpoint(service: ApplicationService = Depends(get_application_service)):
    return service.get_statistics()


@router.get("/{application_id}", response_model=schemas.JobApplication)
def get_application_endpoint(
    application_id: int,
    service: ApplicationService = Depends(get_application_service),
):
    application = service.get_application(application_id)
    if application is None:
        logger.info("Job application with ID %s not found", application_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job application not found")
    return application


@router.post("", response_model=schemas.JobApplication, status_code=status.HTTP_201_CREATED)
def create_application_endpoint(
    data: schemas.JobApplicationCreate,
    response: Response,
    service: ApplicationService = Depends(get_application_service),
):
    created = service.create_application(data)
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    return created


@router.put("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_application_endpoint(
    application_id: int,
    data: schemas.JobApplicationUpdate,
    service: ApplicationService = Depends(get_application_service),
):
    # NotFoundError / ConcurrencyError are mapped by the app-level handlers
    service.update_application(application_id, data).raise_for_status()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{application_id}/status", status_code=status.HTTP_204_NO_CONTENT)
def update_application_status_endpoint(
    application_id: int,
    data: schemas.ApplicationStatusUpdate,
    service: ApplicationService = Depends(get_application_service),
):
    service.update_application_status(application_id, data.status).raise_for_status()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_application_endpoint(
    application_id: int,
    service: ApplicationService = Depends(get_application_service),
):
    if not service.delete_application(application_id):
        logger.info("Job application with ID %s not found", application_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job application not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
