"""
Sample request generator for the irrigation scheduler.

Writes deterministic pseudo-random request files in the JSON shape accepted by
`irrigation-scheduler schedule`, for demos and manual comparison runs.
"""

from __future__ import annotations

import json
import random
import sys
from pathlib import Path
from typing import Any, Dict

import typer

app = typer.Typer(help="Generate sample irrigation requests as JSON.")

FIELD_NAMES = [
    "North",
    "South",
    "East",
    "West",
    "Orchard",
    "Meadow",
    "Vineyard",
    "Paddock",
    "Terrace",
    "Riverside",
]


def _generate_request(
    fields: int,
    seed: int,
    max_need: int,
    water_ratio: float,
    electricity: int,
    rate: int,
) -> Dict[str, Any]:
    rng = random.Random(seed)
    records = []
    for i in range(fields):
        base = FIELD_NAMES[i % len(FIELD_NAMES)]
        name = base if i < len(FIELD_NAMES) else f"{base}-{i // len(FIELD_NAMES) + 1}"
        records.append(
            {
                "name": name,
                "moisture": rng.randint(0, 100),
                "waterNeeded": rng.randint(0, max_need),
            }
        )

    total_need = sum(r["waterNeeded"] for r in records)
    request: Dict[str, Any] = {
        "totalWater": max(1, int(total_need * water_ratio)),
        "fieldCount": fields,
        "fields": records,
    }
    if electricity > 0 and rate > 0:
        request["totalElectricity"] = electricity
        request["waterDeliveryRate"] = rate
    return request


@app.command()
def main(
    fields: int = typer.Option(5, "--fields", "-f", help="Number of fields to generate."),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
    max_need: int = typer.Option(200, "--max-need", help="Upper bound for a field's need."),
    water_ratio: float = typer.Option(
        0.6,
        "--water-ratio",
        help="Total water as a fraction of the summed need.",
    ),
    electricity: int = typer.Option(
        0,
        "--electricity",
        help="Time budget; with --rate > 0 activates time constraints.",
    ),
    rate: int = typer.Option(0, "--rate", help="Water delivered per time unit."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (prints to stdout if omitted).",
    ),
) -> None:
    """
    Generate one sample request.
    """
    request = _generate_request(fields, seed, max_need, water_ratio, electricity, rate)
    text = json.dumps(request, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        typer.echo(f"Wrote {fields} fields (totalWater={request['totalWater']}) -> {output}")
    else:
        typer.echo(text)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
