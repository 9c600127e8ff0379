"""
Time-constrained greedy strategy: water and delivery time, one pass.

Time is derived from water through the delivery rate: a field needing `w`
units takes `ceil(w / rate)` time units (at least 1). A field is admitted if
both budgets can still cover 10% of its need; otherwise it is skipped and the
pass continues with the next field.
"""

from __future__ import annotations

from typing import List, Optional

from irrigation_scheduler.config import Settings, get_settings
from irrigation_scheduler.domain.models import Budgets, FieldRecord
from irrigation_scheduler.strategies.abstract import (
    AbstractAllocationStrategy,
    AllocationTotals,
    ceil_div,
)
from irrigation_scheduler.strategies.greedy import MIN_ALLOCATION_DIVISOR
from irrigation_scheduler.utils.logging import get_logger

log = get_logger(__name__)


class TimeConstrainedGreedyStrategy(AbstractAllocationStrategy):
    """
    Greedy allocation under both a water and a time budget.

    Admitted fields get their full need, clamped first by remaining water
    (time recomputed from the clamped water) and then by remaining time
    (water recomputed from the clamped time and capped at the need).
    """

    name: str = "time_constrained"
    algorithm: str = "GreedyTimeConstrained"
    description: str = "Greedy over water and delivery time; skips fields that do not fit."

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def _delivery_rate(self, budgets: Budgets) -> int:
        if budgets.water_delivery_rate > 0:
            return budgets.water_delivery_rate
        return self._settings.default_delivery_rate

    def _run(self, ordered: List[FieldRecord], budgets: Budgets) -> AllocationTotals:
        rate = self._delivery_rate(budgets)
        remaining_water = budgets.total_water
        remaining_time = budgets.total_electricity
        time_used = 0

        for field in ordered:
            field.time_needed = max(1, ceil_div(field.water_needed, rate))
            field.time_used = 0

            min_water = field.water_needed // MIN_ALLOCATION_DIVISOR
            min_time = ceil_div(min_water, rate)
            if remaining_water < min_water or remaining_time < min_time:
                log.debug(
                    "Skipping field below admission threshold",
                    extra={
                        "field": field.name,
                        "remaining_water": remaining_water,
                        "remaining_electricity": remaining_time,
                    },
                )
                continue

            water = field.water_needed
            time = field.time_needed
            if water > remaining_water:
                water = remaining_water
                time = ceil_div(water, rate)
            if time > remaining_time:
                time = remaining_time
                water = min(time * rate, field.water_needed)

            # Committed even when the clamped water is 0: a zero-need field
            # still occupies its minimum delivery slot.
            field.allocated = water
            field.time_used = time
            field.scheduled = water > 0
            remaining_water -= water
            remaining_time -= time
            time_used += time
            log.debug(
                "Allocated field",
                extra={
                    "field": field.name,
                    "allocated": water,
                    "remaining_water": remaining_water,
                    "remaining_electricity": remaining_time,
                },
            )

        return AllocationTotals(
            water_used=budgets.total_water - remaining_water,
            time_used=time_used,
            remaining_electricity=remaining_time,
        )


__all__ = ["TimeConstrainedGreedyStrategy"]
