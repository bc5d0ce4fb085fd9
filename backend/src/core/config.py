"""
Application configuration using python-dotenv.

This module loads environment variables from .env file into os.environ
for use throughout the application.
"""

import os
import pathlib
from dotenv import load_dotenv


# Determine if we're running in a test environment
# Don't load .env file during testing to ensure predictable test behavior
is_testing = os.getenv("PYTEST_VERSION") is not None or any("pytest" in str(frame) for frame in __import__('inspect').stack(0))

# Load .env file into os.environ (only outside of testing)
if not is_testing:
    # Try multiple possible locations for .env file
    possible_paths = [
        pathlib.Path(__file__).parent.parent.parent / ".env",  # backend/.env (when run from backend/src)
        pathlib.Path(__file__).parent.parent.parent.parent / ".env",  # .env (when run from src)
        pathlib.Path.cwd() / ".env",  # .env in current directory
        pathlib.Path.cwd().parent / ".env",  # .env in parent directory
    ]

    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(env_path)
            break


# Configuration constants with defaults
# These match the environment variables defined in .env.example
def get_practice_timezone_name():
    """Get the IANA time zone name of the practice from environment."""
    return os.getenv("PRACTICE_TIMEZONE", "Europe/Amsterdam")

PRACTICE_TIMEZONE = get_practice_timezone_name()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Booking window defaults (applied when a practice has no explicit setting)
DEFAULT_MIN_NOTICE_DAYS = int(os.getenv("DEFAULT_MIN_NOTICE_DAYS", "1"))
DEFAULT_MAX_ADVANCE_DAYS = int(os.getenv("DEFAULT_MAX_ADVANCE_DAYS", "90"))
DEFAULT_SLOT_GRANULARITY_MINUTES = int(os.getenv("DEFAULT_SLOT_GRANULARITY_MINUTES", "15"))

# Range requests fan out (date, provider) pairs on a bounded worker pool
AVAILABILITY_MAX_WORKERS = int(os.getenv("AVAILABILITY_MAX_WORKERS", "8"))
AVAILABILITY_PARALLEL_THRESHOLD = int(os.getenv("AVAILABILITY_PARALLEL_THRESHOLD", "16"))
