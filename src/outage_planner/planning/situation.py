"""Appliance-independent outlook for the next 24 hours.

Summarises how much energy the battery holds above its floor and how the grid
schedule unfolds from the current hour: outage hours ahead, and how long until
the grid comes back (or, while it is up, until it goes away).
"""

from __future__ import annotations

import math

from outage_planner.dt.battery import round1
from outage_planner.dt.simulator import HORIZON_HOURS
from outage_planner.dt.timerange import is_in_range
from outage_planner.io.schema import BatterySettings, PowerSchedule, SituationSummary


def analyze_situation(
    battery: BatterySettings,
    power_schedule: PowerSchedule,
    current_hour: float,
) -> SituationSummary:
    periods = power_schedule.periods
    start_hour = math.floor(current_hour)
    available_kwh = battery.capacity_kwh * max(0.0, battery.current_charge - battery.min_discharge) / 100

    grid = [is_in_range((start_hour + i) % 24, periods) for i in range(HORIZON_HOURS + 1)]
    total_outage_hours = sum(1 for on in grid[:HORIZON_HOURS] if not on)
    power_on_now = grid[0]

    hours_to_next_power_on = 0
    if not power_on_now:
        hours_to_next_power_on = next((i for i in range(1, HORIZON_HOURS + 1) if grid[i]), HORIZON_HOURS)

    # left at 0 while the grid is down; callers treat it as not applicable
    hours_to_next_outage = 0
    if power_on_now:
        hours_to_next_outage = next((i for i in range(1, HORIZON_HOURS + 1) if not grid[i]), 0)

    return SituationSummary(
        battery_percent=battery.current_charge,
        available_energy_kwh=round1(available_kwh),
        total_outage_hours=total_outage_hours,
        is_power_on_now=power_on_now,
        hours_to_next_power_on=hours_to_next_power_on,
        hours_to_next_outage=hours_to_next_outage,
    )
