"""
Error kinds raised while turning a request into a runnable allocation.

All of them are detected before any allocator runs and are terminal for the
current invocation. `to_payload()` gives the single structured failure record
emitted in place of a result.
"""

from __future__ import annotations

from typing import Dict


class SchedulingError(ValueError):
    """Base class for request and capacity failures."""

    kind: str = "SchedulingError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, str]:
        return {"error": self.message, "kind": self.kind}


class InvalidBudget(SchedulingError):
    """Total water is missing or not positive."""

    kind = "InvalidBudget"


class InvalidFieldCount(SchedulingError):
    """Field count is zero, negative, or above the configured capacity."""

    kind = "InvalidFieldCount"


class InvalidMoisture(SchedulingError):
    """Moisture level outside [0, 100]."""

    kind = "InvalidMoisture"

    def __init__(self, field_name: str, moisture: int) -> None:
        super().__init__(f"Invalid moisture level for field {field_name}: {moisture}")
        self.field_name = field_name
        self.moisture = moisture


class InvalidWaterNeed(SchedulingError):
    """Negative water requirement."""

    kind = "InvalidWaterNeed"

    def __init__(self, field_name: str, water_needed: int) -> None:
        super().__init__(f"Invalid water needed for field {field_name}: {water_needed}")
        self.field_name = field_name
        self.water_needed = water_needed


class MalformedInput(SchedulingError):
    """Request payload cannot be interpreted structurally."""

    kind = "MalformedInput"


class CapacityExceeded(SchedulingError):
    """
    Request is too large for the optimal strategy's table.

    Attributes
    ----------
    total_water : int
        Requested water budget (table width - 1).
    field_count : int
        Number of fields (table height - 1).
    """

    kind = "CapacityExceeded"

    def __init__(self, message: str, total_water: int, field_count: int) -> None:
        super().__init__(message)
        self.total_water = total_water
        self.field_count = field_count


__all__ = [
    "SchedulingError",
    "InvalidBudget",
    "InvalidFieldCount",
    "InvalidMoisture",
    "InvalidWaterNeed",
    "MalformedInput",
    "CapacityExceeded",
]
