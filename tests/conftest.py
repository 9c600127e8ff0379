"""
Pytest configuration for the irrigation scheduler.

Provides fixtures for:
- Settings isolation (cache reset, environment overrides)
- Building validated requests from compact field tuples
- The reference scenarios used across strategy tests
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

import pytest

from irrigation_scheduler.config import Settings, get_settings
from irrigation_scheduler.domain.models import ScheduleRequest
from irrigation_scheduler.domain.validation import parse_request

FieldSpec = Tuple[str, int, int]


def build_payload(
    total_water: int,
    fields: Iterable[FieldSpec],
    electricity: Optional[int] = None,
    rate: Optional[int] = None,
) -> Dict[str, Any]:
    """Request payload in the JSON shape accepted by `parse_request`."""
    records = [
        {"name": name, "moisture": moisture, "waterNeeded": need}
        for name, moisture, need in fields
    ]
    payload: Dict[str, Any] = {
        "totalWater": total_water,
        "fieldCount": len(records),
        "fields": records,
    }
    if electricity is not None:
        payload["totalElectricity"] = electricity
    if rate is not None:
        payload["waterDeliveryRate"] = rate
    return payload


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Drop cached settings so environment overrides never leak between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch) -> Callable[..., Settings]:
    """
    Apply environment overrides and return the refreshed settings.

    Example: settings_env(SCHEDULER_MAX_TOTAL_WATER=50)
    """

    def _apply(**env: Any) -> Settings:
        for key, value in env.items():
            monkeypatch.setenv(key, str(value))
        get_settings.cache_clear()
        return get_settings()

    return _apply


@pytest.fixture
def make_request() -> Callable[..., ScheduleRequest]:
    """Factory building a validated request from (name, moisture, need) tuples."""

    def _make(
        total_water: int,
        fields: Iterable[FieldSpec],
        electricity: Optional[int] = None,
        rate: Optional[int] = None,
    ) -> ScheduleRequest:
        return parse_request(build_payload(total_water, fields, electricity, rate))

    return _make


@pytest.fixture
def two_field_payload() -> Dict[str, Any]:
    """A dry, thirsty field followed by a wetter one; 100 units of water."""
    return build_payload(100, [("A", 10, 80), ("B", 50, 50)])
