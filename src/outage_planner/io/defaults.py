"""Default household: an apartment block on an 82 kWh battery bank."""

from __future__ import annotations

from typing import List

from outage_planner.io.schema import Appliance, BatterySettings, PowerSchedule, TimeRange


def default_battery_settings() -> BatterySettings:
    return BatterySettings(
        capacity_kwh=82,
        min_discharge=10,
        max_charge=95,
        current_charge=0,
        charging_power_kw=20,
    )


def default_appliances() -> List[Appliance]:
    return [
        Appliance(id="water", name="Water Pump", name_ua="Насос води", icon="droplets", power_kw=2, color="#3b82f6"),
        Appliance(id="heating", name="Heating Pump", name_ua="Насос опалення", icon="flame", power_kw=4, color="#ef4444"),
        Appliance(
            id="elevator",
            name="Elevator",
            name_ua="Ліфт",
            icon="building",
            power_kw=3.0,
            color="#a855f7",
            schedule=[TimeRange(start=7, end=9), TimeRange(start=18.5, end=20.5)],
        ),
        Appliance(
            id="lighting",
            name="Lighting",
            name_ua="Освітлення",
            icon="lightbulb",
            power_kw=0.4,
            enabled=False,
            color="#f59e0b",
            schedule=[TimeRange(start=18, end=24), TimeRange(start=0, end=6)],
        ),
    ]


def default_power_schedule() -> PowerSchedule:
    return PowerSchedule(periods=[TimeRange(start=6, end=14)])
