"""
Optimal strategy: dynamic programming over discrete water units.

Maximizes the summed dryness-weighted satisfaction

    value_i(x) = (100 - moisture_i) * (x / water_needed_i)

where each field either gets nothing or between ceil(10% of its need) and
its full need. `dp[i][w]` is the best value using the first `i` fields in
priority order and exactly `w` units of water; `parent[i][w]` remembers the
amount given to field `i - 1` (or SKIP). The answer is the smallest `w`
reaching the maximum of the last row, recovered by walking parents back.

Time is O(fields * total_water * max_need) and the tables hold
(fields + 1) * (total_water + 1) cells each, so the budget is checked against
the configured capacity before anything is allocated. Transitions are pushed
only from reachable usages, but the loops are pure Python: budgets near the
100000 cap combined with needs in the thousands mean billions of steps, so
the practical range is budgets and needs in the low thousands.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from irrigation_scheduler.config import Settings, get_settings
from irrigation_scheduler.domain.models import Budgets, FieldRecord
from irrigation_scheduler.domain.validation import ensure_table_capacity
from irrigation_scheduler.strategies.abstract import (
    AbstractAllocationStrategy,
    AllocationTotals,
    ceil_div,
)
from irrigation_scheduler.strategies.greedy import MIN_ALLOCATION_DIVISOR
from irrigation_scheduler.utils.logging import get_logger

log = get_logger(__name__)

SKIP = -1
UNREACHABLE = float("-inf")


def build_tables(
    ordered: List[FieldRecord], total_water: int
) -> Tuple[List[List[float]], List[List[int]]]:
    """
    Fill the value and parent tables for `ordered` fields.

    Ties keep the earlier choice: skipping beats any allocation of equal
    value, and smaller allocations beat larger ones.
    """
    n = len(ordered)
    dp = [[UNREACHABLE] * (total_water + 1)]
    parent = [[SKIP] * (total_water + 1) for _ in range(n + 1)]
    dp[0][0] = 0.0

    for i, field in enumerate(ordered):
        prev = dp[i]
        # Skipping carries every reachable usage over unchanged.
        row = list(prev)
        dp.append(row)
        choice = parent[i + 1]
        need = field.water_needed
        # A zero-need field can only be skipped.
        min_water = max(1, ceil_div(need, MIN_ALLOCATION_DIVISOR))
        weight = 100 - field.moisture
        reachable = [w for w, value in enumerate(prev) if value != UNREACHABLE]

        # Ascending x keeps the smaller allocation on equal value.
        for x in range(min_water, min(need, total_water) + 1):
            gain = weight * (x / need)
            for base_w in reachable:
                w = base_w + x
                if w > total_water:
                    break
                candidate = prev[base_w] + gain
                if candidate > row[w]:
                    row[w] = candidate
                    choice[w] = x

    return dp, parent


def best_usage(last_row: List[float]) -> Tuple[int, float]:
    """Smallest water usage achieving the maximum value."""
    best_w, best_value = 0, UNREACHABLE
    for w, value in enumerate(last_row):
        if value > best_value:
            best_w, best_value = w, value
    return best_w, best_value


def backtrack(ordered: List[FieldRecord], parent: List[List[int]], best_w: int) -> int:
    """Apply the parent choices to `ordered` and return the water consumed."""
    current_w = best_w
    for i in range(len(ordered) - 1, -1, -1):
        x = parent[i + 1][current_w]
        if x != SKIP:
            ordered[i].allocated = x
            ordered[i].scheduled = True
            current_w -= x
    return best_w - current_w


class OptimalStrategy(AbstractAllocationStrategy):
    """
    Globally value-maximizing allocation for the water-only case.
    """

    name: str = "optimal"
    algorithm: str = "DynamicProgramming"
    description: str = "Dynamic programming over water units; maximizes dryness-weighted satisfaction."

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def _run(self, ordered: List[FieldRecord], budgets: Budgets) -> AllocationTotals:
        total_water = budgets.total_water
        ensure_table_capacity(total_water, len(ordered), self._settings)

        dp, parent = build_tables(ordered, total_water)
        best_w, best_value = best_usage(dp[len(ordered)])
        used = backtrack(ordered, parent, best_w)
        del dp, parent

        if used != best_w:
            raise RuntimeError(f"Backtracking consumed {used} units, expected {best_w}")

        log.debug(
            "Optimal allocation found",
            extra={"total_water": total_water, "allocated": used},
        )
        return AllocationTotals(water_used=used, total_value=best_value)


__all__ = ["OptimalStrategy", "backtrack", "best_usage", "build_tables"]
