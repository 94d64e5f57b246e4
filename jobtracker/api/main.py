"""
FastAPI app assembly: logging, middleware, error mapping and router wiring.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from jobtracker.utils.config import get_settings

settings = get_settings()

# Configure logging
LOG_LEVEL_NAME = settings.log_level
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from jobtracker.api.applications import router as applications_router, PAGINATION_HEADER
from jobtracker.db import database
from jobtracker.db.seed import seed_sample_applications
from jobtracker.errors import ConcurrencyError, NotFoundError, StorageError


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Schema is normally managed by Alembic migrations.
    if settings.create_schema_on_startup:
        logger.info("Creating database schema from ORM metadata")
        database.create_schema()
    if settings.seed_sample_data:
        db = database.SessionLocal()
        try:
            seed_sample_applications(db)
        finally:
            db.close()
    yield


app = FastAPI(
    title="Job Application Tracker",
    description="API for tracking job applications, their status and summary statistics.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[PAGINATION_HEADER],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(ConcurrencyError)
async def concurrency_handler(request: Request, exc: ConcurrencyError):
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_409_CONFLICT)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        {"detail": "An error occurred while processing your request."},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


app.include_router(applications_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "job-application-tracker"}
