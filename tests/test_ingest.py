from datetime import datetime, timezone

import pytest

from outage_planner.ingest.slots import (
    apply_charge_override,
    build_schedule_from_slots,
    parse_battery_telemetry,
    parse_schedule_slots,
)
from outage_planner.io.defaults import default_battery_settings
from outage_planner.io.schema import TimeRange

TODAY = [
    {"start": 0, "end": 360, "type": "Definite"},
    {"start": 360, "end": 840, "type": "NotPlanned"},
    {"start": 840, "end": 1080, "type": "Definite"},
    {"start": 1080, "end": 1440, "type": "NotPlanned"},
]
TOMORROW = [
    {"start": 0, "end": 240, "type": "NotPlanned"},
    {"start": 240, "end": 600, "type": "Definite"},
    {"start": 600, "end": 1440, "type": "NotPlanned"},
]


def test_merge_today_and_tomorrow_around_start_hour():
    schedule = build_schedule_from_slots(parse_schedule_slots(TODAY), parse_schedule_slots(TOMORROW), 10)
    assert schedule.periods == [
        TimeRange(start=10, end=14),
        TimeRange(start=18, end=24),
        TimeRange(start=0, end=4),
    ]


def test_fractional_start_hour_clips_slots():
    schedule = build_schedule_from_slots(parse_schedule_slots(TODAY), [], 12.5)
    assert schedule.periods[0] == TimeRange(start=12.5, end=14)


def test_malformed_slots_are_skipped():
    slots = parse_schedule_slots([{"start": 0, "end": 60, "type": "NotPlanned"}, {"start": "x"}, None])
    assert len(slots) == 1
    assert parse_schedule_slots({"not": "a list"}) == []


def test_telemetry_nested_and_string_values():
    snap = parse_battery_telemetry({"data": {"batterySOC": "67.5", "batteryPower": -1200, "lastUpdateTime": 1700000000}})
    assert snap.soc == 67.5
    assert snap.battery_power_w == -1200
    assert snap.recorded_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)


def test_telemetry_top_level_soc_only():
    snap = parse_battery_telemetry({"batterySOC": 42})
    assert snap.soc == 42
    assert snap.battery_power_w is None
    assert snap.recorded_at is None


@pytest.mark.parametrize("payload", [{}, {"data": {}}, {"batterySOC": "n/a"}, {"batterySOC": "nan"}, []])
def test_telemetry_without_usable_soc_raises(payload):
    with pytest.raises(ValueError):
        parse_battery_telemetry(payload)


def test_charge_override_returns_new_settings():
    manual = default_battery_settings()
    live = apply_charge_override(manual, 73.0)
    assert live.current_charge == 73.0
    assert manual.current_charge == 0
    assert live.capacity_kwh == manual.capacity_kwh
    assert apply_charge_override(manual, None) is manual


def test_empty_tomorrow_feed_reuses_today():
    today = parse_schedule_slots([{"start": 360, "end": 840, "type": "NotPlanned"}])
    schedule = build_schedule_from_slots(today, [], 15)
    assert schedule.periods == [TimeRange(start=6, end=14)]


def test_published_tomorrow_feed_is_used_as_is():
    today = parse_schedule_slots([{"start": 360, "end": 840, "type": "NotPlanned"}])
    tomorrow = parse_schedule_slots([{"start": 0, "end": 1440, "type": "Definite"}])
    assert build_schedule_from_slots(today, tomorrow, 15).periods == []


@pytest.mark.parametrize("soc", ["inf", "-inf", float("inf")])
def test_telemetry_with_infinite_soc_raises(soc):
    with pytest.raises(ValueError):
        parse_battery_telemetry({"data": {"batterySOC": soc}})


@pytest.mark.parametrize("ts", [1e20, "inf", "nan"])
def test_telemetry_out_of_range_timestamp_is_dropped(ts):
    snap = parse_battery_telemetry({"batterySOC": 50, "lastUpdateTime": ts})
    assert snap.soc == 50
    assert snap.recorded_at is None
