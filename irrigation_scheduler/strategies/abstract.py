"""
Abstract strategy interfaces and result contracts for the irrigation scheduler.

Concrete strategies (greedy, time-constrained greedy, optimal) implement
AbstractAllocationStrategy. The base class owns the run template shared by all
of them: copy the request's fields, put them in priority order, let the
subclass allocate, then restore input order and build the AllocationResult.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, TypedDict, runtime_checkable

from irrigation_scheduler.domain.models import (
    AllocationResult,
    Budgets,
    FieldRecord,
    ScheduleRequest,
)
from irrigation_scheduler.strategies.ordering import priority_order, restore_order


class StrategyResult(TypedDict, total=False):
    """
    Serialised run record passed between the orchestrator and reporters.

    Fields are optional so failed runs can carry only `error`/`kind`.
    """

    strategy: str
    algorithm: str
    scheduled: List[Dict[str, Any]]
    total_water: int
    total_water_used: int
    remaining_water: int
    total_time_used: Optional[int]
    remaining_electricity: Optional[int]
    satisfaction: float
    duration_seconds: float
    peak_rss_bytes: Optional[int]
    peak_traced_bytes: Optional[int]
    cpu_percent: Optional[float]
    error: Optional[str]
    kind: Optional[str]
    notes: Optional[str]
    extra: Dict[str, Any]


@dataclass
class AllocationTotals:
    """Aggregate figures a strategy reports after mutating its fields."""

    water_used: int
    time_used: Optional[int] = None
    remaining_electricity: Optional[int] = None
    total_value: Optional[float] = None


@runtime_checkable
class AllocationStrategy(Protocol):
    """
    Common interface all allocation strategies must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier used by the registry and CLI.
    algorithm : str
        Tag written to the result record.
    description : str
        A human-friendly summary of the policy.
    """

    name: str
    algorithm: str
    description: str

    def allocate(self, request: ScheduleRequest) -> AllocationResult:
        """
        Allocate the request's budgets across its fields.

        Parameters
        ----------
        request : ScheduleRequest
            Validated fields and budgets. Left unmodified.

        Returns
        -------
        AllocationResult
            Per-field allocations in input order plus totals.
        """
        ...


class AbstractAllocationStrategy(abc.ABC):
    """
    Base class for class-based strategies.

    Subclasses set `name`, `algorithm` and `description` and implement `_run`,
    which receives fields already in priority order and mutates them in place.
    """

    name: str
    algorithm: str
    description: str

    def allocate(self, request: ScheduleRequest) -> AllocationResult:
        ordered = priority_order(request.copy_fields())
        totals = self._run(ordered, request.budgets)
        total_water = request.budgets.total_water

        return AllocationResult(
            algorithm=self.algorithm,
            strategy=self.name,
            fields=restore_order(ordered),
            total_water=total_water,
            total_water_used=totals.water_used,
            remaining_water=total_water - totals.water_used,
            use_time_constraints=totals.time_used is not None,
            total_time_used=totals.time_used,
            remaining_electricity=totals.remaining_electricity,
            total_value=totals.total_value,
        )

    @abc.abstractmethod
    def _run(
        self, ordered: List[FieldRecord], budgets: Budgets
    ) -> AllocationTotals:  # pragma: no cover - interface only
        """Allocate in place over `ordered` and return the totals."""
        raise NotImplementedError


def ceil_div(numerator: int, denominator: int) -> int:
    """Integer ceiling division for non-negative numerators."""
    return -(-numerator // denominator)


__all__ = [
    "AbstractAllocationStrategy",
    "AllocationStrategy",
    "AllocationTotals",
    "StrategyResult",
    "ceil_div",
]
