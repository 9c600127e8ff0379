"""
Request validation: raw JSON-shaped payloads in, `ScheduleRequest` out.

Accepts the request shape used by the HTTP front end of the original tool:

    {
        "totalWater": 100,
        "totalElectricity": 4,        # optional
        "waterDeliveryRate": 50,      # optional
        "fieldCount": 2,              # optional, defaults to len(fields)
        "fields": [{"name": "North", "moisture": 10, "waterNeeded": 80}, ...],
        "technique": "greedy"         # optional, alias "strategy"
    }

Strategies never re-validate; everything is checked here first.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from irrigation_scheduler.config import Settings, get_settings
from irrigation_scheduler.domain.errors import (
    CapacityExceeded,
    InvalidBudget,
    InvalidFieldCount,
    InvalidMoisture,
    InvalidWaterNeed,
    MalformedInput,
)
from irrigation_scheduler.domain.models import Budgets, FieldRecord, ScheduleRequest
from irrigation_scheduler.utils.logging import get_logger

log = get_logger(__name__)


def _as_int(value: Any, key: str) -> int:
    """Coerce a numeric JSON value to int; missing or null counts as 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise MalformedInput(f"Expected an integer for '{key}', got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise MalformedInput(f"Expected an integer for '{key}', got {value}")
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise MalformedInput(f"Expected an integer for '{key}', got {value!r}") from None
    raise MalformedInput(f"Expected an integer for '{key}', got {type(value).__name__}")


def build_budgets(
    total_water: int,
    total_electricity: int = 0,
    water_delivery_rate: int = 0,
    settings: Optional[Settings] = None,
) -> Budgets:
    """
    Build budgets, substituting synthetic time defaults unless both the time
    budget and the delivery rate are positive.
    """
    settings = settings or get_settings()
    if total_water <= 0:
        raise InvalidBudget("Invalid total water amount")

    use_time = total_electricity > 0 and water_delivery_rate > 0
    if not use_time:
        total_electricity = settings.default_total_electricity
        water_delivery_rate = settings.default_delivery_rate

    return Budgets(
        total_water=total_water,
        total_electricity=total_electricity,
        water_delivery_rate=water_delivery_rate,
        use_time_constraints=use_time,
    )


def parse_request(payload: Any, settings: Optional[Settings] = None) -> ScheduleRequest:
    """
    Validate a request payload.

    Raises
    ------
    MalformedInput
        Structural problems (not an object, no fields array, non-integer numbers).
    InvalidBudget
        Non-positive total water.
    InvalidFieldCount
        Zero, negative, or above `settings.max_fields`, or no usable fields.
    InvalidMoisture, InvalidWaterNeed
        Per-field range violations.
    """
    settings = settings or get_settings()

    if not isinstance(payload, Mapping):
        raise MalformedInput("Request must be a JSON object")

    raw_fields = payload.get("fields")
    if not isinstance(raw_fields, list):
        raise MalformedInput("Fields array not found")

    budgets = build_budgets(
        total_water=_as_int(payload.get("totalWater"), "totalWater"),
        total_electricity=_as_int(payload.get("totalElectricity"), "totalElectricity"),
        water_delivery_rate=_as_int(payload.get("waterDeliveryRate"), "waterDeliveryRate"),
        settings=settings,
    )

    if "fieldCount" in payload:
        field_count = _as_int(payload.get("fieldCount"), "fieldCount")
    else:
        field_count = len(raw_fields)
    if field_count <= 0 or field_count > settings.max_fields:
        raise InvalidFieldCount(f"Invalid field count: {field_count}")

    fields: List[FieldRecord] = []
    for position, raw in enumerate(raw_fields[:field_count]):
        if not isinstance(raw, Mapping):
            raise MalformedInput(f"Field entry {position} must be an object")
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            log.warning("Skipping field without a name", extra={"field": position})
            continue
        name = name[: settings.max_name_length]

        moisture = _as_int(raw.get("moisture"), "moisture")
        water_needed = _as_int(raw.get("waterNeeded"), "waterNeeded")
        if moisture < 0 or moisture > 100:
            raise InvalidMoisture(name, moisture)
        if water_needed < 0:
            raise InvalidWaterNeed(name, water_needed)

        fields.append(
            FieldRecord(
                name=name,
                moisture=moisture,
                water_needed=water_needed,
                original_index=len(fields),
            )
        )

    if not fields:
        raise InvalidFieldCount("Invalid field count: 0")

    strategy = payload.get("strategy") or payload.get("technique")
    if strategy is not None and not isinstance(strategy, str):
        raise MalformedInput("Strategy must be a string")

    return ScheduleRequest(budgets=budgets, fields=fields, strategy=strategy)


def ensure_table_capacity(
    total_water: int, field_count: int, settings: Optional[Settings] = None
) -> None:
    """
    Reject inputs whose optimal-strategy table would exceed configured bounds.

    Must run before the table is allocated; the table holds
    (field_count + 1) * (total_water + 1) cells.
    """
    settings = settings or get_settings()
    if total_water > settings.max_total_water:
        raise CapacityExceeded(
            f"Total water {total_water} exceeds capacity {settings.max_total_water}",
            total_water=total_water,
            field_count=field_count,
        )
    if field_count > settings.max_fields:
        raise CapacityExceeded(
            f"Field count {field_count} exceeds capacity {settings.max_fields}",
            total_water=total_water,
            field_count=field_count,
        )


__all__ = ["build_budgets", "ensure_table_capacity", "parse_request"]
