import datetime as dt
import random

import pytest

from toll_calculator.domain import UnsupportedVehicleTypeError, Vehicle, VehicleType
from toll_calculator.fee_engine import calculate_toll_fee, explain_toll_fee, fee_for_passage
from toll_calculator.rules import TOLL_FREE_VEHICLES


MONDAY = dt.date(2024, 4, 29)


def car():
    return Vehicle(type=VehicleType.CAR, registration_number="ABC123")


def at(hour: int, minute: int = 0, second: int = 0, day: dt.date = MONDAY) -> dt.datetime:
    return dt.datetime(day.year, day.month, day.day, hour, minute, second)


def test_empty_passages_cost_nothing():
    assert calculate_toll_fee(car(), []) == 0
    assert calculate_toll_fee(None, []) == 0


def test_single_weekday_rush_hour_passage():
    assert calculate_toll_fee(car(), [at(7, 30)]) == 22


def test_passages_in_one_interval_charge_the_highest_fee():
    # 07:30 (22) and 08:15 (16) are 45 minutes apart
    assert calculate_toll_fee(car(), [at(7, 30), at(8, 15)]) == 22


def test_exactly_sixty_minutes_stays_in_interval():
    assert calculate_toll_fee(car(), [at(14, 20), at(15, 20)]) == 16


def test_seconds_past_sixty_minutes_still_floor_to_sixty():
    assert calculate_toll_fee(car(), [at(14, 20), at(15, 20, 59)]) == 16


def test_sixty_one_minutes_opens_new_interval():
    assert calculate_toll_fee(car(), [at(14, 20), at(15, 21)]) == 9 + 16


def test_interval_anchor_is_first_passage_not_previous():
    # 06:00 anchors; 06:50 joins; 07:10 is 70 minutes after the anchor
    passages = [at(6, 0), at(6, 50), at(7, 10)]
    assert calculate_toll_fee(car(), passages) == 16 + 22


def test_sunday_passage_is_free():
    assert calculate_toll_fee(car(), [at(6, 15, day=dt.date(2024, 4, 28))]) == 0


def test_july_passage_is_free_on_a_weekday():
    assert calculate_toll_fee(car(), [at(7, 30, day=dt.date(2024, 7, 15))]) == 0


def test_daily_cap_applies():
    passages = [at(7, 0), at(15, 30), at(16, 35)]  # 22 each, separate intervals
    assert calculate_toll_fee(car(), passages) == 60


def test_many_separate_intervals_are_capped():
    passages = [at(6, 0) + dt.timedelta(minutes=61 * i) for i in range(10)]
    assert calculate_toll_fee(car(), passages) == 60
    breakdown = explain_toll_fee(car(), passages)
    assert breakdown.uncapped_total > 60
    assert len(breakdown.intervals) == 10


@pytest.mark.parametrize("vehicle_type", sorted(TOLL_FREE_VEHICLES, key=lambda v: v.value))
def test_exempt_vehicles_never_pay(vehicle_type):
    vehicle = Vehicle(type=vehicle_type, registration_number="X")
    assert calculate_toll_fee(vehicle, [at(7, 0), at(15, 30), at(17, 0)]) == 0
    assert calculate_toll_fee(vehicle_type, [at(7, 0)]) == 0


@pytest.mark.parametrize("vehicle_type", [VehicleType.CAR, VehicleType.LORRY, VehicleType.BUS])
def test_non_exempt_vehicles_pay(vehicle_type):
    assert calculate_toll_fee(Vehicle(type=vehicle_type), [at(7, 0)]) == 22


def test_unset_vehicle_is_not_exempt():
    assert calculate_toll_fee(None, [at(7, 0)]) == 22


def test_order_independence_and_input_not_mutated():
    passages = [at(h, m) for h, m in [(6, 5), (6, 40), (8, 10), (9, 30), (15, 10), (16, 45), (17, 50), (18, 20)]]
    expected = calculate_toll_fee(car(), passages)
    rng = random.Random(7)
    for _ in range(20):
        shuffled = passages[:]
        rng.shuffle(shuffled)
        snapshot = list(shuffled)
        assert calculate_toll_fee(car(), shuffled) == expected
        assert shuffled == snapshot


def test_result_is_always_within_bounds():
    rng = random.Random(11)
    for _ in range(50):
        passages = [at(rng.randrange(24), rng.randrange(60)) for _ in range(rng.randrange(1, 15))]
        assert 0 <= calculate_toll_fee(car(), passages) <= 60


def test_accepts_any_iterable():
    assert calculate_toll_fee(car(), (t for t in [at(7, 30)])) == 22


def test_aware_timestamps_use_their_own_local_time():
    tz = dt.timezone(dt.timedelta(hours=2))
    passage = dt.datetime(2024, 4, 29, 7, 30, tzinfo=tz)
    assert fee_for_passage(passage, car()) == 22


def test_fee_for_passage_respects_exemptions():
    assert fee_for_passage(at(7, 30), car()) == 22
    assert fee_for_passage(at(7, 30), VehicleType.DIPLOMAT) == 0
    assert fee_for_passage(at(7, 30, day=dt.date(2024, 12, 24)), car()) == 0
    assert fee_for_passage(at(19, 0), car()) == 0


def test_moving_holidays_are_opt_in():
    good_friday = at(7, 30, day=dt.date(2024, 3, 29))
    assert calculate_toll_fee(car(), [good_friday]) == 22
    assert calculate_toll_fee(car(), [good_friday], include_moving_holidays=True) == 0


def test_breakdown_lists_intervals_and_passages():
    breakdown = explain_toll_fee(car(), [at(8, 15), at(7, 30), at(14, 45)])
    assert breakdown.vehicle_type == VehicleType.CAR
    assert [i.start for i in breakdown.intervals] == [at(7, 30), at(14, 45)]
    assert [i.charged_fee for i in breakdown.intervals] == [22, 9]
    assert [p.fee for p in breakdown.intervals[0].passages] == [22, 16]
    assert breakdown.uncapped_total == 31
    assert breakdown.total == 31


def test_breakdown_of_nothing_is_empty():
    breakdown = explain_toll_fee(car(), [])
    assert breakdown.intervals == []
    assert breakdown.total == 0


@pytest.mark.parametrize("tag", ["Motorbike", "tractor", " Diplomat "])
def test_exempt_tag_strings_never_pay(tag):
    assert calculate_toll_fee(tag, [at(7, 30)]) == 0
    assert fee_for_passage(at(7, 30), tag) == 0


def test_car_tag_string_pays():
    assert calculate_toll_fee("Car", [at(7, 30)]) == 22


def test_unknown_tag_string_fails_fast():
    with pytest.raises(UnsupportedVehicleTypeError):
        calculate_toll_fee("Hovercraft", [at(7, 30)])


def test_mixed_naive_and_aware_timestamps_are_rejected():
    from zoneinfo import ZoneInfo

    aware = dt.datetime(2024, 4, 29, 8, 45, tzinfo=ZoneInfo("Europe/Stockholm"))
    with pytest.raises(TypeError):
        calculate_toll_fee(car(), [at(7, 30), aware])
