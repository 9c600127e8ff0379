from __future__ import annotations

import pytest

from irrigation_scheduler.config import Settings
from irrigation_scheduler.domain.models import Budgets, FieldRecord, ScheduleRequest
from irrigation_scheduler.strategies.greedy import GreedyStrategy
from irrigation_scheduler.strategies.time_constrained import TimeConstrainedGreedyStrategy

RATE = 50
TIME_BUDGET = 1


def _by_name(result) -> dict[str, FieldRecord]:
    return {f.name: f for f in result.fields}


def test_time_budget_clamps_water_through_delivery_rate(make_request):
    request = make_request(100, [("C", 0, 100)], electricity=TIME_BUDGET, rate=RATE)

    result = TimeConstrainedGreedyStrategy().allocate(request)
    field = _by_name(result)["C"]

    assert request.budgets.use_time_constraints is True
    assert result.algorithm == "GreedyTimeConstrained"
    assert field.time_needed == 2
    assert field.allocated == 50
    assert field.time_used == 1
    assert field.scheduled is True
    assert result.total_water_used == 50
    assert result.remaining_water == 50
    assert result.total_time_used == 1
    assert result.remaining_electricity == 0


def test_water_clamp_recomputes_time_rounding_up(make_request):
    request = make_request(45, [("a", 0, 100)], electricity=10, rate=10)

    result = TimeConstrainedGreedyStrategy().allocate(request)
    field = _by_name(result)["a"]

    assert field.allocated == 45
    assert field.time_used == 5
    assert result.remaining_electricity == 5


def test_skipped_field_does_not_stop_the_pass(make_request):
    # "huge" cannot get 10% of its need; greedy would stop here.
    request = make_request(50, [("huge", 0, 1000), ("modest", 10, 40)], electricity=10, rate=10)

    timed = TimeConstrainedGreedyStrategy().allocate(request)
    greedy = GreedyStrategy().allocate(request)

    assert _by_name(timed)["huge"].scheduled is False
    assert _by_name(timed)["modest"].allocated == 40
    assert _by_name(timed)["modest"].time_used == 4
    assert greedy.total_water_used == 0


def test_exhausted_time_budget_skips_remaining_fields(make_request):
    request = make_request(
        500,
        [("first", 0, 100), ("second", 10, 100), ("third", 20, 100)],
        electricity=2,
        rate=50,
    )

    result = TimeConstrainedGreedyStrategy().allocate(request)
    fields = _by_name(result)

    assert fields["first"].allocated == 100
    assert fields["second"].allocated == 0
    assert fields["third"].allocated == 0
    assert result.total_time_used == 2
    assert result.remaining_electricity == 0
    assert result.remaining_water == 400


def test_admitted_field_with_nothing_left_is_not_scheduled(make_request):
    # "tiny" has a zero threshold so it is admitted with no water left.
    request = make_request(50, [("big", 0, 100), ("tiny", 10, 5)], electricity=100, rate=10)

    result = TimeConstrainedGreedyStrategy().allocate(request)
    fields = _by_name(result)

    assert fields["big"].allocated == 50
    assert fields["tiny"].allocated == 0
    assert fields["tiny"].scheduled is False
    assert fields["tiny"].time_used == 0


def test_zero_need_field_still_takes_its_delivery_slot(make_request):
    request = make_request(100, [("fallow", 0, 0), ("crop", 10, 50)], electricity=1, rate=RATE)

    result = TimeConstrainedGreedyStrategy().allocate(request)
    fields = _by_name(result)

    assert fields["fallow"].allocated == 0
    assert fields["fallow"].scheduled is False
    assert fields["fallow"].time_used == 1
    assert fields["crop"].allocated == 0
    assert fields["crop"].scheduled is False
    assert result.total_time_used == 1
    assert result.remaining_electricity == 0
    assert result.remaining_water == 100


def test_non_positive_rate_falls_back_to_default():
    settings = Settings(default_delivery_rate=25)
    request = ScheduleRequest(
        budgets=Budgets(
            total_water=100,
            total_electricity=10,
            water_delivery_rate=0,
            use_time_constraints=True,
        ),
        fields=[FieldRecord(name="f", moisture=0, water_needed=60, original_index=0)],
    )

    result = TimeConstrainedGreedyStrategy(settings=settings).allocate(request)

    assert result.fields[0].time_needed == 3
    assert result.fields[0].allocated == 60


def test_without_time_budget_synthetic_defaults_apply(make_request):
    request = make_request(100, [("A", 10, 80), ("B", 50, 50)])

    result = TimeConstrainedGreedyStrategy().allocate(request)

    assert request.budgets.use_time_constraints is False
    assert request.budgets.total_electricity == 1000
    assert request.budgets.water_delivery_rate == 50
    assert [f.allocated for f in result.fields] == [80, 20]
    assert result.total_time_used == 3


@pytest.mark.parametrize("electricity,rate", [(1, 7), (3, 10), (5, 13), (9, 3), (40, 1)])
def test_both_budgets_respected(make_request, electricity: int, rate: int):
    fields = [("a", 5, 37), ("b", 5, 64), ("c", 30, 12), ("d", 60, 90), ("e", 0, 3)]
    for budget in (1, 20, 55, 130, 400):
        result = TimeConstrainedGreedyStrategy().allocate(
            make_request(budget, fields, electricity=electricity, rate=rate)
        )

        assert sum(f.allocated for f in result.fields) == result.total_water_used <= budget
        assert sum(f.time_used or 0 for f in result.fields) == result.total_time_used
        assert result.total_time_used <= electricity
        assert result.remaining_electricity == electricity - result.total_time_used
        assert all(0 <= f.allocated <= f.water_needed for f in result.fields)
        assert all(f.scheduled == (f.allocated > 0) for f in result.fields)
        assert [f.original_index for f in result.fields] == list(range(len(fields)))
