"""
Domain package for the irrigation scheduler.

Exports the data model, error kinds, and request validation used across
strategies and the orchestrator. Keep this package focused on data
definitions and validation concerns.
"""

from irrigation_scheduler.domain.errors import (
    CapacityExceeded,
    InvalidBudget,
    InvalidFieldCount,
    InvalidMoisture,
    InvalidWaterNeed,
    MalformedInput,
    SchedulingError,
)
from irrigation_scheduler.domain.models import (
    AllocationResult,
    Budgets,
    FieldRecord,
    ScheduleRequest,
    satisfaction_value,
)
from irrigation_scheduler.domain.validation import (
    build_budgets,
    ensure_table_capacity,
    parse_request,
)

__all__ = [
    # Models
    "AllocationResult",
    "Budgets",
    "FieldRecord",
    "ScheduleRequest",
    "satisfaction_value",
    # Errors
    "CapacityExceeded",
    "InvalidBudget",
    "InvalidFieldCount",
    "InvalidMoisture",
    "InvalidWaterNeed",
    "MalformedInput",
    "SchedulingError",
    # Validation
    "build_budgets",
    "ensure_table_capacity",
    "parse_request",
]
