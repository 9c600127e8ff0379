"""
Utilities package for the irrigation scheduler.

Exports shared helpers for logging and profiling. Keep this package
lightweight and free of allocation logic.
"""

from irrigation_scheduler.utils.logging import configure_logging, get_logger
from irrigation_scheduler.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
