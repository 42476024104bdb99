import pytest

from outage_planner.dt.simulator import check_survival, simulate
from outage_planner.io.defaults import default_appliances
from outage_planner.io.schema import BatterySettings, PlannerConfig, PowerSchedule, TimeRange
from outage_planner.metrics.kpis import TimelineMetrics
from outage_planner.planning import CATALOG, apply_overrides, generate_scenarios
from outage_planner.planning.scenarios import TAG_ORDER, Override


def _battery(charge=50):
    return BatterySettings(capacity_kwh=82, min_discharge=10, max_charge=95, current_charge=charge, charging_power_kw=20)


DAY_GRID = PowerSchedule(periods=[TimeRange(start=6, end=14)])


def test_daytime_catalog_and_ranking():
    scenarios = generate_scenarios(_battery(50), default_appliances(), DAY_GRID, 10)
    assert [s.id for s in scenarios] == [
        "heating-only",
        "evening-comfort",
        "max-comfort",
        "balanced",
        "extended-elevator",
        "basic-needs",
        "water-night-off",
        "workday",
        "long-outage",
    ]
    assert [s.feasible for s in scenarios] == [True] + [False] * 8


def test_heating_only_metrics():
    scenarios = generate_scenarios(_battery(50), default_appliances(), DAY_GRID, 10)
    heating = scenarios[0]
    assert heating.tag == "emergency"
    # 95% at 14:00, then 4 kW for 16 hours
    assert heating.min_battery_level == 17.0
    assert heating.min_battery_time == 5
    assert heating.energy_used_kwh == 64.0
    enabled = [a.id for a in heating.appliances if a.enabled]
    assert enabled == ["heating"]


def test_critical_battery_replaces_heating_only():
    ids = [s.id for s in generate_scenarios(_battery(15), default_appliances(), DAY_GRID, 10)]
    assert "critical" in ids
    assert "heating-only" not in ids
    assert "extended-elevator" not in ids


def test_night_candidates():
    ids = {s.id for s in generate_scenarios(_battery(80), default_appliances(), DAY_GRID, 4.5)}
    assert {"morning-rush", "night-light", "extended-elevator"} <= ids
    assert "workday" not in ids
    assert "evening-comfort" not in ids
    assert "full-power" not in ids


def test_short_outage_candidates():
    ids = [s.id for s in generate_scenarios(_battery(80), default_appliances(), PowerSchedule(periods=[TimeRange(start=0, end=21)]), 10)]
    assert "full-power" in ids
    assert "short-outage" in ids
    assert "long-outage" not in ids
    assert "water-night-off" not in ids


@pytest.mark.parametrize("charge,hour", [(15, 2), (50, 10), (80, 18.5), (35, 7), (95, 23)])
def test_results_reproduce_and_sort(charge, hour):
    battery = _battery(charge)
    scenarios = generate_scenarios(battery, default_appliances(), DAY_GRID, hour)
    assert scenarios

    for s in scenarios:
        tl = simulate(battery, s.appliances, DAY_GRID.periods, hour)
        m = TimelineMetrics.from_timeline(tl)
        assert check_survival(tl, battery.min_discharge) == s.feasible
        assert m.min_level == s.min_battery_level
        assert m.min_time == s.min_battery_time

    keys = [(not s.feasible, TAG_ORDER[s.tag]) for s in scenarios]
    assert keys == sorted(keys)


def test_candidates_do_not_share_appliance_lists():
    base = default_appliances()
    scenarios = generate_scenarios(_battery(), base, DAY_GRID, 10)
    for s in scenarios:
        assert s.appliances is not base
        for copy, orig in zip(s.appliances, base):
            assert copy is not orig
            assert copy.schedule is not orig.schedule
    assert scenarios[0].appliances[0] is not scenarios[1].appliances[0]
    # the caller's list is untouched
    assert [a.enabled for a in base] == [True, True, True, False]


def test_apply_overrides_keeps_unnamed_appliances():
    base = default_appliances()
    out = apply_overrides(base, {"water": Override(enabled=False)})
    water, heating, elevator, lighting = out
    assert water.enabled is False
    assert water.schedule == []
    assert elevator.schedule == base[2].schedule
    assert lighting.enabled is False


def test_generation_is_deterministic():
    a = generate_scenarios(_battery(62), default_appliances(), DAY_GRID, 16.25)
    b = generate_scenarios(_battery(62), default_appliances(), DAY_GRID, 16.25)
    assert [s.model_dump() for s in a] == [s.model_dump() for s in b]


def test_every_candidate_has_text_and_a_known_tier():
    from outage_planner.planning.scenarios import SCENARIO_TEXT

    for c in CATALOG:
        assert c.tag in TAG_ORDER
        assert c.id in SCENARIO_TEXT["en"]
        assert c.id in SCENARIO_TEXT["uk"]
        assert c.overrides["heating"].enabled is True


def test_localized_description_embeds_situation():
    scenarios = generate_scenarios(_battery(50), default_appliances(), DAY_GRID, 10, PlannerConfig(locale="uk"))
    long = next(s for s in scenarios if s.id == "long-outage")
    assert long.name == "Довгий блекаут"
    assert long.description.startswith("16 год без світла")


def test_energy_used_counts_only_discharging_hours():
    battery = _battery(50)
    tl = simulate(battery, default_appliances(), DAY_GRID.periods, 10)
    m = TimelineMetrics.from_timeline(tl)
    assert m.energy_used_kwh == 102.0
    assert m.min_level == 10.0
    assert m.min_time == 0
