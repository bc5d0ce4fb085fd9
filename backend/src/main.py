# pyright: reportMissingTypeStubs=false
"""
Practice Availability API

A FastAPI application exposing the appointment availability engine.

Features:
- Daily availability for a single provider
- Date-range availability merged across providers
- Booking checks with optional provider auto-assignment

The engine is stateless: callers send the schedule data they have already
fetched with each request.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import availability
from core.config import LOG_LEVEL, PRACTICE_TIMEZONE
from core.constants import CORS_ORIGINS
from services.errors import AvailabilityValidationError, BookingWindowError

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

logger = logging.getLogger(__name__)
logger.info("Practice Availability API starting...")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info(f"Starting Practice Availability API (practice time zone: {PRACTICE_TIMEZONE})")
    yield
    logger.info("Shutting down Practice Availability API")


# Create FastAPI application
app = FastAPI(
    title="Practice Availability",
    description="Appointment availability engine for dental and medical practices",
    version="1.0.0",
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc",  # ReDoc
    lifespan=lifespan,
)

# CORS middleware for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(
    availability.router,
    prefix="/api/availability",
    tags=["availability"],
    responses={
        400: {"description": "Bad request or malformed request body"},
        500: {"description": "Internal server error"},
    },
)


@app.get(
    "/",
    summary="Root endpoint",
    description="Returns basic API information",
)
async def root() -> dict[str, str]:
    """Get API information."""
    return {
        "message": "Practice Availability API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get(
    "/health",
    summary="Health check",
    description="Returns the health status of the API",
)
async def health_check() -> dict[str, str]:
    """Check if the API is healthy and responding."""
    return {"status": "healthy"}


# Global exception handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions globally."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": "internal_error"},
    )


@app.exception_handler(AvailabilityValidationError)
async def availability_validation_error_handler(request: Request, exc: AvailabilityValidationError):
    """Handle rejected request fields."""
    logger.info(f"Validation error on {exc.field}: {exc.reason}")
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "type": "validation_error", "field": exc.field},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 validation errors naming the first bad field."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = next((str(part) for part in reversed(first.get("loc", ())) if isinstance(part, str)), "body")
    message = first.get("msg", "Invalid request")
    logger.info(f"Malformed request body on {field}: {message}")
    return JSONResponse(
        status_code=400,
        content={"detail": f"{field}: {message}", "type": "validation_error", "field": field},
    )


@app.exception_handler(BookingWindowError)
async def booking_window_error_handler(request: Request, exc: BookingWindowError):
    """Handle dates outside the booking window, returning the window bounds."""
    logger.info(f"Booking window rejection ({exc.reason}): {exc}")
    return JSONResponse(
        status_code=400,
        content={
            "detail": str(exc),
            "type": "booking_window",
            "reason": exc.reason,
            "min_date": exc.min_date.isoformat(),
            "max_date": exc.max_date.isoformat(),
        },
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions."""
    logger.warning(f"ValueError: {exc}")
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "type": "validation_error"},
    )
