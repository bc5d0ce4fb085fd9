"""Application constants and configuration values."""

from core.config import FRONTEND_URL

# CORS origins for development and production
_CORS_ORIGINS_RAW = [
    "http://localhost:5173",      # React dev server (Vite)
    FRONTEND_URL,
]

# Filter out None values and empty strings to avoid CORS errors
CORS_ORIGINS = [origin for origin in _CORS_ORIGINS_RAW if origin and origin.strip()]

# Clock-time grid
MINUTES_PER_DAY = 24 * 60

# Booking statuses that no longer occupy provider time
EXCLUDED_BOOKING_STATUSES = frozenset({"CANCELLED", "NO_SHOW"})

# Exception types stored by older practices that mean "provider is out all day"
ABSENCE_EXCEPTION_ALIASES = frozenset({"HOLIDAY", "SICK"})

# Default durations (minutes) per appointment type
APPOINTMENT_TYPE_DURATIONS = {
    "CHECKUP": 20,
    "TREATMENT": 45,
    "CONSULTATION": 30,
    "HYGIENE": 30,
    "EMERGENCY": 30,
}

# Booking window hard limits
MAX_ADVANCE_DAYS_LIMIT = 365
