"""
Utility modules for the availability engine.

This package contains shared utility functions and helpers used across
the application, including the time grid (datetime utilities) and the
half-open interval primitives.
"""

from utils.interval_utils import overlaps

__all__ = ['overlaps']
