"""
Provider model representing a practitioner who can be booked.
"""

from typing import Optional

from pydantic import BaseModel


class Provider(BaseModel):
    """Roster entry for a provider eligible for the requested appointment type."""
    id: str
    display_name: str
    role: Optional[str] = None  # e.g. "DENTIST", "HYGIENIST"
