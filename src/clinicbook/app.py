"""
FastAPI application factory and main app configuration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import certifi
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from .adapters.db.mongo.models.appointment_m import AppointmentMongo
from .adapters.db.mongo.models.schedule_m import DoctorScheduleMongo
from .api.routers import appointments, health, schedules
from .api.utils.responses import fail
from .core.config import get_settings
from .core.exceptions import ClinicBookException
from .core.structured_logger import configure_logging
from .domain.errors import DomainError
from .middleware.performance_middleware import PerformanceMiddleware
from .middleware.request_id_middleware import RequestIDMiddleware

logger = logging.getLogger("clinicbook")


def create_mongo_client(uri: str) -> AsyncIOMotorClient:
    """Build the Motor client; TLS with the certifi bundle only for Atlas SRV URIs."""
    if uri.startswith("mongodb+srv://"):
        return AsyncIOMotorClient(
            uri,
            serverSelectionTimeoutMS=15000,
            tls=True,
            tlsCAFile=certifi.where(),
            tlsAllowInvalidCertificates=False,
        )
    # Local/standard connection (no TLS)
    return AsyncIOMotorClient(uri, serverSelectionTimeoutMS=15000)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info(f"Starting ClinicBook v{settings.app_version}")
    logger.info(f"Environment: {settings.app_env}, debug mode: {settings.debug}")

    # Initialize database connection (MongoDB + Beanie); index creation happens here
    client = create_mongo_client(settings.database.uri)
    try:
        await init_beanie(
            database=client[settings.database.db_name],
            document_models=[DoctorScheduleMongo, AppointmentMongo],
        )
    except Exception:
        logger.exception("Database initialization failed")
        client.close()
        raise
    app.state.mongo_client = client
    logger.info(f"Database connection established (db={settings.database.db_name})")

    yield

    # Shutdown
    logger.info("Shutting down ClinicBook")
    app.state.mongo_client = None
    client.close()


def _error_response(request: Request, status_code: int, error: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=fail(request, error, message, details).model_dump(),
    )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="ClinicBook Appointment Service",
        description="Doctor schedule resolution and conflict-free appointment booking",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Health and readiness checks"},
            {"name": "Schedules", "description": "Doctor schedules and bookable slots"},
            {"name": "Appointments", "description": "Booking, cancellation and rescheduling"},
        ],
    )

    # CORS middleware
    allow_methods = settings.cors.allowed_methods or ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
    allow_methods = list({m.upper() for m in allow_methods} | {"PATCH", "OPTIONS"})
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=allow_methods,
        allow_headers=settings.cors.allowed_headers or ["*"],
        max_age=600,
    )

    # Add performance tracking middleware
    app.add_middleware(PerformanceMiddleware)

    # Register X-Request-ID middleware last so it wraps everything above
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(schedules.router)
    app.include_router(appointments.router)

    # Global exception handler for domain errors
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        req_id = getattr(request.state, "request_id", None)
        log = logger.warning if exc.http_status >= 409 else logger.info
        log(f"DomainError: {exc.error_code} ({exc.http_status}) {exc.message} | request_id={req_id}")
        return _error_response(
            request, exc.http_status, exc.error_code or "DOMAIN_ERROR", exc.message, exc.details
        )

    @app.exception_handler(ClinicBookException)
    async def infrastructure_error_handler(request: Request, exc: ClinicBookException):
        req_id = getattr(request.state, "request_id", None)
        logger.error(f"{type(exc).__name__}: {exc.message} | details={exc.details} | request_id={req_id}")
        return _error_response(
            request,
            exc.http_status,
            exc.error_code or "INTERNAL_ERROR",
            "The booking store is temporarily unavailable. Please retry."
            if exc.http_status == 503
            else exc.message,
        )

    @app.exception_handler(RequestValidationError)
    async def pydantic_error_handler(request: Request, exc: RequestValidationError):
        req_id = getattr(request.state, "request_id", None)
        errors = [
            {
                "loc": [str(x) for x in error.get("loc", [])],
                "msg": error.get("msg", "Validation error"),
                "type": error.get("type", ""),
            }
            for error in exc.errors()
        ]
        logger.info(f"ValidationError on {request.method} {request.url.path}: {errors} | request_id={req_id}")

        # Create user-friendly error message
        error_messages = [f"{' -> '.join(e['loc'])}: {e['msg']}" for e in errors]
        return _error_response(
            request,
            422,
            "INVALID_INPUT",
            f"Input validation failed: {'; '.join(error_messages)}",
            {"errors": errors, "path": request.url.path},
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        req_id = getattr(request.state, "request_id", None)
        logger.error(f"Unhandled error: {type(exc).__name__} | request_id={req_id}", exc_info=exc)
        return _error_response(
            request,
            500,
            "INTERNAL_ERROR",
            "An unexpected error has occurred. Please try again later.",
        )

    # Root endpoint
    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "ClinicBook Appointment Service",
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "available_slots": "GET /doctors/{doctor_id}/slots?date=YYYY-MM-DD",
                "resolved_schedule": "GET /doctors/{doctor_id}/schedule?date=YYYY-MM-DD",
                "list_schedules": "GET /doctors/{doctor_id}/schedules",
                "save_schedule": "PUT /doctors/{doctor_id}/schedules",
                "delete_schedule": "DELETE /doctors/{doctor_id}/schedules/{schedule_id}",
                "book": "POST /appointments",
                "list_appointments": "GET /appointments?patient_id=|doctor_id=&date=&status=",
                "booked_slots": "GET /appointments/booked-slots?doctor_id=&date=",
                "availability": "GET /appointments/availability?doctor_id=&date=&time=",
                "by_key": "GET /appointments/by-key/{appointment_key}",
                "get_appointment": "GET /appointments/{appointment_id}",
                "cancel": "POST /appointments/{appointment_id}/cancel",
                "reschedule": "POST /appointments/{appointment_id}/reschedule",
                "update_status": "PATCH /appointments/{appointment_id}/status",
            },
        }

    return app


# Create the app instance
app = create_app()
