"""
Strategies package for the irrigation scheduler.

Re-exports the abstract interfaces, the shared ordering helpers, and the
concrete strategy classes so downstream code can import from
`irrigation_scheduler.strategies` directly.
"""

from irrigation_scheduler.strategies.abstract import (
    AbstractAllocationStrategy,
    AllocationStrategy,
    AllocationTotals,
    StrategyResult,
)
from irrigation_scheduler.strategies.greedy import GreedyStrategy
from irrigation_scheduler.strategies.optimal import OptimalStrategy
from irrigation_scheduler.strategies.ordering import priority_order, restore_order
from irrigation_scheduler.strategies.time_constrained import TimeConstrainedGreedyStrategy

__all__ = [
    # Abstracts
    "AbstractAllocationStrategy",
    "AllocationStrategy",
    "AllocationTotals",
    "StrategyResult",
    # Ordering
    "priority_order",
    "restore_order",
    # Concrete strategies
    "GreedyStrategy",
    "OptimalStrategy",
    "TimeConstrainedGreedyStrategy",
]
