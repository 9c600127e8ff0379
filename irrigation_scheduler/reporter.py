"""
Result emission: the JSON output record and rich tables for terminals.

The output record keeps the field names of the original tool's API
(`algorithm`, `scheduled`, `totalWaterUsed`, ...). Only scheduled fields are
listed, in input order. Time figures appear only when time constraints were
active for the run.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from irrigation_scheduler.domain.errors import SchedulingError
from irrigation_scheduler.domain.models import AllocationResult


def to_payload(result: AllocationResult) -> Dict[str, Any]:
    """Build the output record for a successful run."""
    scheduled: List[Dict[str, Any]] = []
    for field in result.scheduled_fields:
        entry: Dict[str, Any] = {
            "name": field.name,
            "moisture": field.moisture,
            "need": field.water_needed,
            "allocated": field.allocated,
        }
        if result.use_time_constraints:
            entry["timeNeeded"] = field.time_needed
            entry["timeUsed"] = field.time_used
        scheduled.append(entry)

    payload: Dict[str, Any] = {
        "algorithm": result.algorithm,
        "scheduled": scheduled,
        "totalWaterUsed": result.total_water_used,
    }
    if result.use_time_constraints:
        payload["totalTimeUsed"] = result.total_time_used
        payload["remainingElectricity"] = result.remaining_electricity
    payload["remainingWater"] = result.remaining_water
    return payload


def error_payload(exc: SchedulingError) -> Dict[str, str]:
    """Single structured failure record; never combined with a result."""
    return exc.to_payload()


def render_json(payload: Dict[str, Any]) -> str:
    """Deterministic JSON text for an output or failure record."""
    return json.dumps(payload, indent=2)


def print_result(result: AllocationResult, console: Optional[Console] = None) -> None:
    """
    Render one allocation as a rich table with every field, in input order.
    """
    console = console or Console()
    table = Table(
        title=f"Irrigation Schedule ({result.algorithm})",
        box=box.ROUNDED,
        caption=(
            f"Water used {result.total_water_used:,} of {result.total_water:,} "
            f"│ remaining {result.remaining_water:,}"
        ),
    )
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Moisture", justify="right", style="magenta")
    table.add_column("Need", justify="right")
    table.add_column("Allocated", justify="right", style="bold green")
    if result.use_time_constraints:
        table.add_column("Time", justify="right", style="yellow")
    table.add_column("Status", justify="center")

    for field in result.fields:
        status = "[green]irrigated[/green]" if field.scheduled else "[dim]not scheduled[/dim]"
        row = [field.name, str(field.moisture), f"{field.water_needed:,}", f"{field.allocated:,}"]
        if result.use_time_constraints:
            row.append(str(field.time_used or 0))
        row.append(status)
        table.add_row(*row)

    console.print(table)
    if result.use_time_constraints:
        console.print(
            f"Time used {result.total_time_used} │ "
            f"remaining electricity {result.remaining_electricity}"
        )


def print_comparison(results: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render orchestrator run records side by side.

    Sorted by satisfaction (descending) so the best-scoring strategy is first;
    failed runs sort last and show their error.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    table = Table(
        title="Irrigation Strategy Comparison",
        box=box.ROUNDED,
        caption="Sorted by satisfaction (descending)",
    )
    table.add_column("Strategy", style="cyan", no_wrap=True)
    table.add_column("Algorithm", style="blue")
    table.add_column("Scheduled", justify="right", style="magenta")
    table.add_column("Water Used", justify="right", style="green")
    table.add_column("Remaining", justify="right")
    table.add_column("Satisfaction", justify="right", style="bold green")
    table.add_column("Duration (ms)", justify="right", style="yellow")
    table.add_column("Peak Traced (KB)", justify="right", style="red")

    def get_sort_key(r: Dict[str, Any]) -> float:
        if r.get("error"):
            return float("-inf")
        return r.get("satisfaction", 0.0)

    for res in sorted(results, key=get_sort_key, reverse=True):
        duration_ms = (res.get("duration_seconds") or 0.0) * 1000
        traced = res.get("peak_traced_bytes")
        traced_str = f"{traced / 1024:,.1f}" if traced else "N/A"

        if res.get("error"):
            table.add_row(
                res.get("strategy", "Unknown"),
                "[red]failed[/red]",
                "-",
                "-",
                "-",
                f"[red]{res['error']}[/red]",
                f"{duration_ms:.2f}",
                traced_str,
            )
            continue

        table.add_row(
            res.get("strategy", "Unknown"),
            res.get("algorithm", ""),
            str(len(res.get("scheduled", []))),
            f"{res.get('total_water_used', 0):,}",
            f"{res.get('remaining_water', 0):,}",
            f"{res.get('satisfaction', 0.0):,.2f}",
            f"{duration_ms:.2f}",
            traced_str,
        )

    console.print(table)


__all__ = [
    "error_payload",
    "print_comparison",
    "print_result",
    "render_json",
    "to_payload",
]
