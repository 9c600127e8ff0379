"""
Orchestrator for resolving strategies, running allocations, profiling them,
and persisting results.

Usage (example from CLI):
    from irrigation_scheduler.domain import parse_request
    from irrigation_scheduler.orchestrator import RunConfig, run_strategies, schedule

    request = parse_request(payload)
    result = schedule(request, "optimal")

    results = run_strategies(RunConfig(request=request, strategy_names=["all"]))

Comparison runs are saved to `results/` by default:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Literal, Optional

from irrigation_scheduler.config import get_settings
from irrigation_scheduler.domain.errors import SchedulingError
from irrigation_scheduler.domain.models import AllocationResult, ScheduleRequest
from irrigation_scheduler.domain.validation import ensure_table_capacity
from irrigation_scheduler.reporter import to_payload
from irrigation_scheduler.strategies.abstract import AllocationStrategy, StrategyResult
from irrigation_scheduler.strategies.greedy import GreedyStrategy
from irrigation_scheduler.strategies.optimal import OptimalStrategy
from irrigation_scheduler.strategies.time_constrained import TimeConstrainedGreedyStrategy
from irrigation_scheduler.utils.logging import get_logger
from irrigation_scheduler.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)

AUTO = "auto"
_ALIASES = {"dynamic": "optimal", "dp": "optimal", "genetic": "greedy"}
# Request techniques that pick their variant from the budgets.
_BUDGET_SENSITIVE_TECHNIQUES = {"greedy"}

FailurePolicy = Literal["tolerant", "strict"]


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _strategy_factories() -> Dict[str, Callable[[], AllocationStrategy]]:
    """Registry of available strategies."""
    return {
        "greedy": lambda: GreedyStrategy(),
        "time_constrained": lambda: TimeConstrainedGreedyStrategy(),
        "optimal": lambda: OptimalStrategy(),
    }


def available_strategies() -> List[str]:
    """List available strategy names."""
    return sorted(_strategy_factories().keys())


def resolve_strategy_name(name: Optional[str], request: ScheduleRequest) -> str:
    """
    Turn a selector into a registry name.

    `auto` picks the time-constrained strategy when the request activates time
    constraints and the plain greedy strategy otherwise. A `greedy` technique
    carried by the request itself resolves the same way; `genetic` always
    means the unconstrained greedy strategy.
    """
    if not name and request.strategy:
        selected = request.strategy.lower()
        if selected in _BUDGET_SENSITIVE_TECHNIQUES:
            selected = AUTO
    else:
        selected = (name or get_settings().default_strategy).lower()
    selected = _ALIASES.get(selected, selected)
    if selected == AUTO:
        return "time_constrained" if request.budgets.use_time_constraints else "greedy"
    return selected


def _resolve_strategy(name: str) -> AllocationStrategy:
    factories = _strategy_factories()
    if name not in factories:
        raise ValueError(f"Unknown strategy '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


def _preflight(name: str, request: ScheduleRequest) -> None:
    """Capacity checks that must pass before a strategy allocates anything."""
    if name == "optimal":
        ensure_table_capacity(request.budgets.total_water, len(request.fields))


def schedule(request: ScheduleRequest, strategy_name: Optional[str] = None) -> AllocationResult:
    """
    Run a single strategy over a validated request.

    Raises
    ------
    ValueError
        Unknown strategy name.
    SchedulingError
        Capacity violations detected before allocation.
    """
    name = resolve_strategy_name(strategy_name, request)
    strategy = _resolve_strategy(name)
    _preflight(name, request)

    log.info(f"[STRATEGY START] {name}", extra={"strategy": name})
    result = strategy.allocate(request)
    log.info(
        f"[STRATEGY SUCCESS] {name}",
        extra={
            "strategy": name,
            "allocated": result.total_water_used,
            "remaining_water": result.remaining_water,
        },
    )
    return result


@dataclass
class RunConfig:
    """
    Parameters for a comparison run.

    Attributes
    ----------
    request : ScheduleRequest
        Validated input shared by every strategy.
    strategy_names : iterable[str] | None
        Strategies to execute. None or ["all"] runs every registered strategy.
    results_dir : Path | str | None
        Directory for JSON artifacts. Defaults to settings.results_dir.
    persist : bool
        Whether to write results to disk.
    failure_policy : "tolerant" | "strict"
        Tolerant records a failed run and continues; strict re-raises.
    """

    request: ScheduleRequest
    strategy_names: Optional[Iterable[str]] = None
    results_dir: Optional[Path | str] = None
    persist: bool = True
    failure_policy: FailurePolicy = "tolerant"


def _result_record(result: AllocationResult) -> StrategyResult:
    payload = to_payload(result)
    return StrategyResult(
        strategy=result.strategy,
        algorithm=result.algorithm,
        scheduled=payload["scheduled"],
        total_water=result.total_water,
        total_water_used=result.total_water_used,
        remaining_water=result.remaining_water,
        total_time_used=result.total_time_used,
        remaining_electricity=result.remaining_electricity,
        satisfaction=_round_float(result.satisfaction, 4),
    )


def _failure_record(name: str, exc: Exception, policy: FailurePolicy) -> StrategyResult:
    return StrategyResult(
        strategy=name,
        error=str(exc),
        kind=exc.kind if isinstance(exc, SchedulingError) else None,
        total_water_used=0,
        notes="Execution failed in tolerant mode; run continued.",
        extra={
            "failed": True,
            "error_type": type(exc).__name__,
            "failure_policy": policy,
        },
    )


def _merge_result(result: StrategyResult, stats: ProfileStats) -> dict:
    """Merge a run record with profiler stats, rounding floats for readability."""
    merged = dict(result)
    merged["duration_seconds"] = _round_float(stats.duration_seconds, 4)
    merged["peak_rss_bytes"] = stats.peak_rss_bytes
    merged["peak_traced_bytes"] = stats.peak_traced_bytes
    merged["cpu_percent"] = _round_float(stats.cpu_percent, 1) if stats.cpu_percent else None
    return merged


def _profiled_execute(
    name: str, request: ScheduleRequest, policy: FailurePolicy
) -> dict:
    with profile_block(name) as stats:
        try:
            record = _result_record(schedule(request, name))
        except Exception as exc:  # noqa: BLE001 - failures are recorded per strategy
            log.exception(
                f"[STRATEGY FAILED] {name}",
                extra={"strategy": name, "error": str(exc)},
            )
            if policy == "strict":
                raise
            record = _failure_record(name, exc, policy)

    return _merge_result(record, stats)


def _persist_results(payload: dict, results_dir: Path) -> None:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})


def run_strategies(config: RunConfig) -> List[dict]:
    """
    Run one or more strategies over the same request.

    Returns
    -------
    List[dict]
        One record per strategy, in execution order, each including the
        allocation summary and profiler stats. Failed runs carry `error`.
    """
    names = list(config.strategy_names) if config.strategy_names is not None else ["all"]
    if len(names) == 1 and names[0] == "all":
        names = available_strategies()

    results: List[dict] = []
    for index, name in enumerate(names, start=1):
        log.info(
            f"[RUN {index}/{len(names)}] {name}",
            extra={"strategy": name, "total_water": config.request.budgets.total_water},
        )
        result = _profiled_execute(name, config.request, config.failure_policy)
        results.append(result)

    if config.persist:
        results_dir = Path(config.results_dir or get_settings().results_dir)
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "strategies": names,
            "request": config.request.model_dump(mode="json"),
            "results": results,
        }
        _persist_results(payload, results_dir)

    failed = [r["strategy"] for r in results if r.get("error")]
    log.info(
        f"[ORCHESTRATOR COMPLETE] {len(names) - len(failed)}/{len(names)} strategies succeeded",
        extra={"strategies": names, "failed": failed},
    )
    return results


__all__ = [
    "RunConfig",
    "available_strategies",
    "resolve_strategy_name",
    "run_strategies",
    "schedule",
]
