from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Locale = Literal["en", "uk"]
ScenarioTag = Literal["comfort", "balanced", "economy", "emergency"]


class PlannerConfig(BaseModel):
    """Runtime knobs for the planner core.

    The sentinel replaces infinite durations so results stay finite and serializable.
    """
    locale: Locale = Field(default="en", description="Language of recommendations, scenario text and display names.")
    sentinel_hours: float = Field(
        default=999.0,
        description="Finite stand-in for 'never' in hours_remaining and charge_time.",
    )


class BatterySettings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    capacity_kwh: float = Field(alias="capacity", description="Nameplate capacity (kWh), expected > 0")
    min_discharge: float = Field(alias="minDischarge", description="Discharge floor (%)")
    max_charge: float = Field(alias="maxCharge", description="Charge ceiling (%), expected > min_discharge")
    current_charge: float = Field(alias="currentCharge", description="Instantaneous state of charge (%)")
    charging_power_kw: float = Field(alias="chargingPower", description="Charger power while the grid is up (kW)")


class TimeRange(BaseModel):
    """Hours-of-day interval. start > end wraps across midnight; start == end is empty."""
    model_config = ConfigDict(frozen=True)

    start: float
    end: float


class Appliance(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    name_ua: str = Field(default="", alias="nameUa")
    icon: str = ""
    power_kw: float = Field(alias="power", description="Draw while active (kW)")
    enabled: bool = True
    color: str = ""
    # empty list means the appliance runs around the clock
    schedule: List[TimeRange] = Field(default_factory=list)

    def display_name(self, locale: Locale = "en") -> str:
        if locale == "uk" and self.name_ua:
            return self.name_ua
        return self.name


class PowerSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    # each period is a window with grid power available
    periods: List[TimeRange] = Field(default_factory=list)


class TimelinePoint(BaseModel):
    time: int
    battery_level: float
    consumption: float
    charging: bool
    appliances: List[str] = Field(default_factory=list)


class CalculationResult(BaseModel):
    usable_energy: float
    current_available_energy: float
    current_consumption: float
    hours_remaining: float
    charge_time: float
    timeline_data: List[TimelinePoint]
    can_survive_outage: bool
    recommendations: List[str] = Field(default_factory=list)
    recommendation_codes: List[str] = Field(default_factory=list)


class SituationSummary(BaseModel):
    battery_percent: float
    available_energy_kwh: float
    total_outage_hours: int
    is_power_on_now: bool
    hours_to_next_power_on: int
    # 0 whenever is_power_on_now is False; callers read it as "not applicable"
    hours_to_next_outage: int


class Scenario(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    tag: ScenarioTag
    appliances: List[Appliance]
    feasible: bool
    min_battery_level: float
    min_battery_time: int
    energy_used_kwh: float


class ScheduleSlot(BaseModel):
    """One slot of an outage-schedule feed, in minutes of day."""
    model_config = ConfigDict(populate_by_name=True)

    start_minute: float = Field(alias="start")
    end_minute: float = Field(alias="end")
    type: str = Field(description="'NotPlanned' means grid power is expected; anything else is an outage.")


class TelemetrySnapshot(BaseModel):
    soc: float
    battery_power_w: Optional[float] = Field(
        default=None, description="Negative while charging, positive while discharging."
    )
    recorded_at: Optional[datetime] = None
