"""
Domain models for the irrigation scheduler.

A request is a set of fields plus water (and optionally time) budgets. Field
records are copied per run and mutated in place by exactly one strategy;
nothing persists between runs.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


def satisfaction_value(moisture: int, water_needed: int, allocated: int) -> float:
    """
    Dryness-weighted fractional satisfaction of a single field.

    `(100 - moisture) * (allocated / water_needed)`; zero for a field that
    receives nothing or needs nothing.
    """
    if allocated <= 0 or water_needed <= 0:
        return 0.0
    return (100 - moisture) * (allocated / water_needed)


class FieldRecord(BaseModel):
    """
    A single water consumer.

    `original_index` is fixed at ingestion and used only to report fields in
    the order they were supplied.
    """

    name: str = Field(..., min_length=1, description="Label used for reporting only.")
    moisture: int = Field(..., ge=0, le=100, description="Lower is drier and higher priority.")
    water_needed: int = Field(..., ge=0, description="Water units required.")
    original_index: int = Field(..., ge=0, description="Position in the input.")
    allocated: int = Field(0, ge=0, description="Water units granted by a strategy.")
    scheduled: bool = Field(False, description="True iff allocated > 0.")
    time_needed: Optional[int] = Field(None, description="Time units for the full need.")
    time_used: Optional[int] = Field(None, description="Time units actually consumed.")

    model_config = {
        "validate_assignment": True,
        "populate_by_name": True,
    }

    @property
    def satisfaction(self) -> float:
        return satisfaction_value(self.moisture, self.water_needed, self.allocated)


class Budgets(BaseModel):
    """
    Global resource budgets.

    When `use_time_constraints` is False the electricity and delivery-rate
    values are synthetic defaults and must not constrain allocation.
    """

    total_water: int = Field(..., gt=0)
    total_electricity: int = Field(..., ge=0)
    water_delivery_rate: int = Field(..., ge=0)
    use_time_constraints: bool = False

    model_config = {"frozen": True}


class ScheduleRequest(BaseModel):
    """Validated input for one allocation run."""

    budgets: Budgets
    fields: List[FieldRecord]
    strategy: Optional[str] = None

    def copy_fields(self) -> List[FieldRecord]:
        """Fresh, reset copies of the fields so each run starts clean."""
        return [
            f.model_copy(update={"allocated": 0, "scheduled": False, "time_used": None})
            for f in self.fields
        ]


class AllocationResult(BaseModel):
    """
    Outcome of one strategy run, with fields in input order.
    """

    algorithm: str
    strategy: str
    fields: List[FieldRecord]
    total_water: int
    total_water_used: int
    remaining_water: int
    use_time_constraints: bool = False
    total_time_used: Optional[int] = None
    remaining_electricity: Optional[int] = None
    total_value: Optional[float] = None

    @property
    def scheduled_fields(self) -> List[FieldRecord]:
        return [f for f in self.fields if f.scheduled]

    @property
    def satisfaction(self) -> float:
        return sum(f.satisfaction for f in self.fields)


__all__ = [
    "AllocationResult",
    "Budgets",
    "FieldRecord",
    "ScheduleRequest",
    "satisfaction_value",
]
