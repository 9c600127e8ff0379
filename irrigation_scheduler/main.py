from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer

from irrigation_scheduler.config import get_settings
from irrigation_scheduler.domain.errors import MalformedInput, SchedulingError
from irrigation_scheduler.domain.validation import parse_request
from irrigation_scheduler.orchestrator import (
    RunConfig,
    available_strategies,
    run_strategies,
    schedule as run_schedule,
)
from irrigation_scheduler.reporter import (
    error_payload,
    print_comparison,
    print_result,
    render_json,
    to_payload,
)
from irrigation_scheduler.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Irrigation scheduler CLI.")
log = get_logger(__name__)


def _load_payload(input_path: str) -> Any:
    """Read a JSON request from a file path, or stdin when the path is '-'."""
    if input_path == "-":
        text = sys.stdin.read()
    else:
        path = Path(input_path)
        if not path.is_file():
            raise MalformedInput(f"Input file not found: {input_path}")
        text = path.read_text(encoding="utf-8")

    if not text.strip():
        raise MalformedInput("No input received")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedInput(f"Failed to parse input JSON: {exc.msg}") from exc


def _fail(exc: SchedulingError) -> NoReturn:
    log.error(exc.message, extra={"kind": exc.kind})
    typer.echo(render_json(error_payload(exc)))
    typer.echo(f"Error: {exc.message}", err=True)
    raise typer.Exit(code=1)


def _setup_logging() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | max_fields={settings.max_fields} "
        f"max_total_water={settings.max_total_water} | "
        f"default_rate={settings.default_delivery_rate} "
        f"default_electricity={settings.default_total_electricity} | "
        f"strategy={settings.default_strategy} results={settings.results_dir}"
    )


@app.command()
def strategies() -> None:
    """
    List available strategies.
    """
    typer.echo("Available strategies: " + ", ".join(available_strategies()))


@app.command()
def schedule(
    input_path: str = typer.Argument("-", help="JSON request file, or '-' for stdin."),
    strategy: Optional[str] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="greedy, time_constrained, optimal, or auto (default from request/settings).",
    ),
    table: bool = typer.Option(False, "--table", help="Render a table instead of JSON."),
) -> None:
    """
    Allocate water for one request and print the result record.
    """
    _setup_logging()
    try:
        request = parse_request(_load_payload(input_path))
        result = run_schedule(request, strategy)
    except SchedulingError as exc:
        _fail(exc)
    except ValueError as exc:
        typer.echo(render_json({"error": str(exc), "kind": "UnknownStrategy"}))
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)

    if table:
        print_result(result)
    else:
        typer.echo(render_json(to_payload(result)))


@app.command()
def compare(
    input_path: str = typer.Argument("-", help="JSON request file, or '-' for stdin."),
    strategy_names: Optional[List[str]] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Strategy to include; repeat for several. Defaults to all.",
    ),
    persist: bool = typer.Option(True, "--persist/--no-persist", help="Write results JSON."),
    output_json: bool = typer.Option(False, "--json", help="Print records as JSON."),
    strict: bool = typer.Option(False, "--strict", help="Stop at the first failing strategy."),
) -> None:
    """
    Run several strategies on the same request and compare them.
    """
    _setup_logging()
    try:
        request = parse_request(_load_payload(input_path))
    except SchedulingError as exc:
        _fail(exc)

    try:
        results = run_strategies(
            RunConfig(
                request=request,
                strategy_names=strategy_names or ["all"],
                persist=persist,
                failure_policy="strict" if strict else "tolerant",
            )
        )
    except SchedulingError as exc:
        _fail(exc)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)

    if output_json:
        typer.echo(json.dumps(results, indent=2))
    else:
        print_comparison(results)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
