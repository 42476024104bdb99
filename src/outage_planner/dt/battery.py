from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class BatteryState:
    level: float


def round1(value: float) -> float:
    """Round half up to one decimal (2.25 -> 2.3, unlike round())."""
    return math.floor(value * 10 + 0.5) / 10


def update_level(
    state: BatteryState,
    grid_on: bool,
    consumption_kw: float,
    battery_capacity_kwh: float,
    charging_power_kw: float,
    min_discharge: float,
    max_charge: float,
    timestep_hours: float = 1.0,
) -> BatteryState:
    """Advance the state of charge (%) by one step.

    With the grid up the charger runs at full power and loads are served from the grid,
    so charging and discharging never happen in the same step.
    """
    if grid_on:
        charge_rate = charging_power_kw / battery_capacity_kwh * 100
        level = min(max_charge, state.level + charge_rate * timestep_hours)
        return BatteryState(level=level)

    discharge_rate = consumption_kw / battery_capacity_kwh * 100
    level = max(min_discharge, state.level - discharge_rate * timestep_hours)
    return BatteryState(level=level)
