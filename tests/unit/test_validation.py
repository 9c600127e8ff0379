from __future__ import annotations

import pytest

from irrigation_scheduler.domain.errors import (
    CapacityExceeded,
    InvalidBudget,
    InvalidFieldCount,
    InvalidMoisture,
    InvalidWaterNeed,
    MalformedInput,
)
from irrigation_scheduler.domain.validation import ensure_table_capacity, parse_request
from tests.conftest import build_payload

DEFAULT_MAX_FIELDS = 10
DEFAULT_ELECTRICITY = 1000
DEFAULT_RATE = 50


def test_zero_total_water_is_invalid_budget(two_field_payload):
    two_field_payload["totalWater"] = 0

    with pytest.raises(InvalidBudget) as excinfo:
        parse_request(two_field_payload)

    assert excinfo.value.to_payload() == {
        "error": "Invalid total water amount",
        "kind": "InvalidBudget",
    }


def test_missing_total_water_is_invalid_budget(two_field_payload):
    del two_field_payload["totalWater"]

    with pytest.raises(InvalidBudget):
        parse_request(two_field_payload)


def test_field_count_at_capacity_is_accepted():
    fields = [(f"f{i}", 10, 10) for i in range(DEFAULT_MAX_FIELDS)]

    request = parse_request(build_payload(100, fields))

    assert len(request.fields) == DEFAULT_MAX_FIELDS


def test_field_count_over_capacity_is_rejected():
    fields = [(f"f{i}", 10, 10) for i in range(DEFAULT_MAX_FIELDS + 1)]

    with pytest.raises(InvalidFieldCount):
        parse_request(build_payload(100, fields))


def test_field_count_capacity_follows_settings(settings_env):
    settings_env(SCHEDULER_MAX_FIELDS=3)
    fields = [(f"f{i}", 10, 10) for i in range(4)]

    with pytest.raises(InvalidFieldCount):
        parse_request(build_payload(100, fields))
    assert len(parse_request(build_payload(100, fields[:3])).fields) == 3


@pytest.mark.parametrize("count", [0, -1])
def test_non_positive_field_count_is_rejected(two_field_payload, count: int):
    two_field_payload["fieldCount"] = count

    with pytest.raises(InvalidFieldCount):
        parse_request(two_field_payload)


def test_declared_field_count_limits_fields_read(two_field_payload):
    two_field_payload["fieldCount"] = 1

    request = parse_request(two_field_payload)

    assert [f.name for f in request.fields] == ["A"]


@pytest.mark.parametrize("moisture", [-1, 101])
def test_moisture_out_of_range(moisture: int):
    with pytest.raises(InvalidMoisture, match="field X"):
        parse_request(build_payload(100, [("X", moisture, 10)]))


def test_moisture_bounds_are_inclusive():
    request = parse_request(build_payload(100, [("bone-dry", 0, 10), ("soaked", 100, 10)]))

    assert [f.moisture for f in request.fields] == [0, 100]


def test_negative_water_need():
    with pytest.raises(InvalidWaterNeed) as excinfo:
        parse_request(build_payload(100, [("X", 10, -5)]))

    assert excinfo.value.kind == "InvalidWaterNeed"
    assert excinfo.value.water_needed == -5


@pytest.mark.parametrize(
    "payload",
    [
        [],
        "totalWater=100",
        {"totalWater": 100},
        {"totalWater": 100, "fields": {"name": "A"}},
        {"totalWater": "lots", "fields": [{"name": "A", "moisture": 1, "waterNeeded": 1}]},
        {"totalWater": 100, "fields": [{"name": "A", "moisture": 1.5, "waterNeeded": 1}]},
        {"totalWater": 100, "fields": ["A"]},
    ],
)
def test_structurally_invalid_payloads_are_malformed(payload):
    with pytest.raises(MalformedInput):
        parse_request(payload)


def test_nameless_entries_are_skipped_and_indices_stay_dense():
    payload = {
        "totalWater": 100,
        "fields": [
            {"name": "A", "moisture": 10, "waterNeeded": 10},
            {"moisture": 5, "waterNeeded": 10},
            {"name": "", "moisture": 5, "waterNeeded": 10},
            {"name": "B", "moisture": 20, "waterNeeded": 10},
        ],
    }

    request = parse_request(payload)

    assert [(f.name, f.original_index) for f in request.fields] == [("A", 0), ("B", 1)]


def test_only_nameless_entries_is_invalid_field_count():
    payload = {"totalWater": 100, "fields": [{"moisture": 5, "waterNeeded": 10}]}

    with pytest.raises(InvalidFieldCount):
        parse_request(payload)


def test_long_names_are_truncated():
    request = parse_request(build_payload(100, [("x" * 150, 10, 10)]))

    assert len(request.fields[0].name) == 99


def test_numeric_strings_are_accepted():
    payload = {
        "totalWater": "100",
        "fields": [{"name": "A", "moisture": "10", "waterNeeded": 80.0}],
    }

    request = parse_request(payload)

    assert request.budgets.total_water == 100
    assert request.fields[0].moisture == 10
    assert request.fields[0].water_needed == 80


def test_time_constraints_require_both_budgets():
    timed = parse_request(build_payload(100, [("A", 10, 10)], electricity=4, rate=25))
    rate_only = parse_request(build_payload(100, [("A", 10, 10)], electricity=0, rate=25))

    assert timed.budgets.use_time_constraints is True
    assert timed.budgets.total_electricity == 4
    assert timed.budgets.water_delivery_rate == 25
    assert rate_only.budgets.use_time_constraints is False
    assert rate_only.budgets.total_electricity == DEFAULT_ELECTRICITY
    assert rate_only.budgets.water_delivery_rate == DEFAULT_RATE


def test_technique_is_read_as_strategy(two_field_payload):
    two_field_payload["technique"] = "dynamic"

    assert parse_request(two_field_payload).strategy == "dynamic"


def test_table_capacity_bounds(settings_env):
    settings_env(SCHEDULER_MAX_TOTAL_WATER=1000)

    ensure_table_capacity(1000, 10)
    with pytest.raises(CapacityExceeded):
        ensure_table_capacity(1001, 10)
    with pytest.raises(CapacityExceeded):
        ensure_table_capacity(1000, 11)
