"""
Greedy strategy: single resource, one pass in priority order.

Each field is fully satisfied while water lasts. The first field that cannot
be fully satisfied receives all remaining water if that covers at least 10%
of its need, and processing stops there either way. At most one field is ever
partially irrigated, and nothing after it is considered.
"""

from __future__ import annotations

from typing import List

from irrigation_scheduler.domain.models import Budgets, FieldRecord
from irrigation_scheduler.strategies.abstract import AbstractAllocationStrategy, AllocationTotals
from irrigation_scheduler.utils.logging import get_logger

log = get_logger(__name__)

# Smallest partial allocation worth making, as a divisor of the need.
MIN_ALLOCATION_DIVISOR = 10


class GreedyStrategy(AbstractAllocationStrategy):
    """
    Priority-ordered greedy allocation with a hard stop.

    Unlike the time-constrained variant, a field that fails the 10% threshold
    is not skipped: the run ends and every lower-priority field stays dry.
    """

    name: str = "greedy"
    algorithm: str = "Greedy"
    description: str = "Fill driest fields fully; one partial allocation, then stop."

    def _run(self, ordered: List[FieldRecord], budgets: Budgets) -> AllocationTotals:
        remaining = budgets.total_water

        for field in ordered:
            if remaining >= field.water_needed:
                field.allocated = field.water_needed
                field.scheduled = field.allocated > 0
                remaining -= field.water_needed
                log.debug(
                    "Allocated full need",
                    extra={
                        "field": field.name,
                        "allocated": field.allocated,
                        "remaining_water": remaining,
                    },
                )
            elif remaining > 0:
                min_allocation = field.water_needed // MIN_ALLOCATION_DIVISOR
                if remaining >= min_allocation:
                    field.allocated = remaining
                    field.scheduled = True
                    remaining = 0
                    log.debug(
                        "Allocated remaining water as partial",
                        extra={"field": field.name, "allocated": field.allocated},
                    )
                else:
                    log.debug(
                        "Remaining water below threshold; stopping",
                        extra={"field": field.name, "remaining_water": remaining},
                    )
                break
            else:
                log.debug("Water exhausted; stopping", extra={"field": field.name})
                break

        return AllocationTotals(water_used=budgets.total_water - remaining)


__all__ = ["GreedyStrategy", "MIN_ALLOCATION_DIVISOR"]
