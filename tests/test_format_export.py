import math

from outage_planner.dt.simulator import calculate_battery_status
from outage_planner.io.defaults import default_appliances, default_battery_settings, default_power_schedule
from outage_planner.io.export import scenarios_to_frame, timeline_to_frame
from outage_planner.io.format import charge_color, format_hours
from outage_planner.planning import generate_scenarios


def test_format_hours():
    assert format_hours(2.5) == "2 h 30 min"
    assert format_hours(0.25) == "15 min"
    assert format_hours(3) == "3 h"
    assert format_hours(1.9999) == "2 h"
    assert format_hours(0.9999) == "1 h"
    assert format_hours(1.5, "uk") == "1 год 30 хв"
    assert format_hours(999) == "∞"
    assert format_hours(math.inf) == "∞"


def test_charge_color_bands():
    assert charge_color(95) == "#22c55e"
    assert charge_color(70) == "#22c55e"
    assert charge_color(40) == "#f59e0b"
    assert charge_color(39.9) == "#ef4444"


def test_frames_for_default_household():
    battery = default_battery_settings().model_copy(update={"current_charge": 50})
    appliances = default_appliances()
    schedule = default_power_schedule()

    result = calculate_battery_status(battery, appliances, schedule, 10)
    df = timeline_to_frame(result.timeline_data)
    assert len(df) == 24
    assert df["time"].iloc[0] == 10
    assert df["appliances"].iloc[0] == "Water Pump;Heating Pump"
    assert bool(df["charging"].iloc[0]) is True

    sdf = scenarios_to_frame(generate_scenarios(battery, appliances, schedule, 10))
    assert list(sdf["rank"]) == list(range(1, len(sdf) + 1))
    assert sdf["id"].iloc[0] == "heating-only"
    assert sdf["enabled"].iloc[0] == "heating"


def test_empty_frames_keep_columns():
    assert list(timeline_to_frame([]).columns)[:3] == ["time", "battery_level", "consumption_kw"]
    assert scenarios_to_frame([]).empty
