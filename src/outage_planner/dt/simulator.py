from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from outage_planner.dt.battery import BatteryState, round1, update_level
from outage_planner.dt.timerange import is_appliance_active, is_in_range
from outage_planner.io.schema import (
    Appliance,
    BatterySettings,
    CalculationResult,
    Locale,
    PlannerConfig,
    PowerSchedule,
    TimelinePoint,
    TimeRange,
)
from outage_planner.xai.explain import generate_recommendation_codes, render_recommendations

HORIZON_HOURS = 24

log = logging.getLogger("outage_planner")


def active_appliances(appliances: Sequence[Appliance], hour: float) -> List[Appliance]:
    return [a for a in appliances if a.enabled and is_appliance_active(a, hour)]


def simulate(
    battery: BatterySettings,
    appliances: Sequence[Appliance],
    power_periods: Sequence[TimeRange],
    reference_hour: float,
    locale: Locale = "en",
) -> List[TimelinePoint]:
    """Project the battery level hour by hour over the next 24 hours.

    The first point covers the hour containing reference_hour. The level is carried
    unrounded between steps; each emitted point holds it rounded to one decimal.
    """
    start_hour = math.floor(reference_hour)
    state = BatteryState(level=battery.current_charge)
    points: List[TimelinePoint] = []

    for i in range(HORIZON_HOURS):
        hour = (start_hour + i) % 24
        grid_on = is_in_range(hour, power_periods)
        active = active_appliances(appliances, hour)
        appliance_kw = sum(a.power_kw for a in active)
        # loads run from the grid while it is up
        battery_kw = 0 if grid_on else appliance_kw

        state = update_level(
            state,
            grid_on=grid_on,
            consumption_kw=battery_kw,
            battery_capacity_kwh=battery.capacity_kwh,
            charging_power_kw=battery.charging_power_kw,
            min_discharge=battery.min_discharge,
            max_charge=battery.max_charge,
        )

        points.append(
            TimelinePoint(
                time=hour,
                battery_level=round1(state.level),
                consumption=battery_kw,
                charging=grid_on,
                appliances=[a.display_name(locale) for a in active],
            )
        )

    log.debug("Simulated %d h from %02d:00, ending at %.1f%%", HORIZON_HOURS, start_hour, state.level)
    return points


def check_survival(timeline: Sequence[TimelinePoint], min_discharge: float) -> bool:
    # touching the floor counts as depleted
    return all(p.battery_level > min_discharge for p in timeline)


def _finite(value: float, sentinel: float) -> float:
    return value if math.isfinite(value) else sentinel


def calculate_battery_status(
    battery: BatterySettings,
    appliances: Sequence[Appliance],
    power_schedule: PowerSchedule,
    current_hour: float,
    cfg: Optional[PlannerConfig] = None,
) -> CalculationResult:
    """Full status for the current inputs: energy figures, 24h timeline, survivability, advice."""
    cfg = cfg or PlannerConfig()
    periods = power_schedule.periods

    usable_energy = battery.capacity_kwh * (battery.max_charge - battery.min_discharge) / 100
    current_available_energy = battery.capacity_kwh * max(0.0, battery.current_charge - battery.min_discharge) / 100

    power_on_now = is_in_range(math.floor(current_hour), periods)
    drawing_now = sum(a.power_kw for a in active_appliances(appliances, current_hour))
    current_consumption = 0 if power_on_now else drawing_now

    if current_consumption > 0:
        hours_remaining = max(0.0, current_available_energy / current_consumption)
    else:
        hours_remaining = math.inf

    energy_to_full = battery.capacity_kwh * (battery.max_charge - battery.current_charge) / 100
    if battery.charging_power_kw > 0:
        charge_time = energy_to_full / battery.charging_power_kw
    else:
        charge_time = math.inf

    timeline = simulate(battery, appliances, periods, current_hour, locale=cfg.locale)
    can_survive = check_survival(timeline, battery.min_discharge)

    # advice sees the unclamped duration so "never" compares as infinite
    codes = generate_recommendation_codes(
        battery,
        appliances,
        hours_remaining=hours_remaining,
        can_survive=can_survive,
        power_periods=periods,
        reference_hour=current_hour,
    )
    recommendations = render_recommendations(codes, appliances, locale=cfg.locale)

    if not can_survive:
        log.debug("Battery reaches the %.0f%% floor within the next %d h", battery.min_discharge, HORIZON_HOURS)

    return CalculationResult(
        usable_energy=usable_energy,
        current_available_energy=current_available_energy,
        current_consumption=current_consumption,
        hours_remaining=_finite(hours_remaining, cfg.sentinel_hours),
        charge_time=_finite(charge_time, cfg.sentinel_hours),
        timeline_data=timeline,
        can_survive_outage=can_survive,
        recommendations=recommendations,
        recommendation_codes=codes,
    )
