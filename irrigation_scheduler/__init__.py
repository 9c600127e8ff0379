"""
Irrigation Scheduler - allocate scarce water across competing fields.

Given a handful of fields (each with a moisture level and a water need) and a
water budget, optionally paired with a delivery-time budget, the package picks
how much water each field receives. Three interchangeable strategies are
provided:

- Greedy: driest fields first, one partial allocation, then stop
- Time-constrained greedy: water and delivery time, skipping fields that do not fit
- Optimal: dynamic programming maximizing dryness-weighted satisfaction

Results are always reported in the order the fields were supplied.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from irrigation_scheduler.config import Settings, get_settings
from irrigation_scheduler.domain import (
    AllocationResult,
    Budgets,
    FieldRecord,
    ScheduleRequest,
    SchedulingError,
    parse_request,
)
from irrigation_scheduler.orchestrator import (
    RunConfig,
    available_strategies,
    run_strategies,
    schedule,
)
from irrigation_scheduler.strategies import (
    AbstractAllocationStrategy,
    AllocationStrategy,
    GreedyStrategy,
    OptimalStrategy,
    TimeConstrainedGreedyStrategy,
)
from irrigation_scheduler.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "AllocationResult",
    "Budgets",
    "FieldRecord",
    "ScheduleRequest",
    "SchedulingError",
    "parse_request",
    # Orchestration
    "RunConfig",
    "available_strategies",
    "run_strategies",
    "schedule",
    # Strategies
    "AbstractAllocationStrategy",
    "AllocationStrategy",
    "GreedyStrategy",
    "OptimalStrategy",
    "TimeConstrainedGreedyStrategy",
    # Logging
    "configure_logging",
    "get_logger",
]
