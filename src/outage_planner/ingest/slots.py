"""Adapters from external feeds to planner inputs.

Fetching is done elsewhere; these functions only turn already-downloaded
payloads into a PowerSchedule or a battery charge override:
- outage-schedule feeds publish per-day slots in minutes of day, where only
  'NotPlanned' slots mean the grid is expected to be up;
- inverter telemetry reports the live state of charge (batterySOC), the battery
  power in watts and the unix time of the reading.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from outage_planner.io.schema import BatterySettings, PowerSchedule, ScheduleSlot, TelemetrySnapshot, TimeRange

LOG = logging.getLogger("outage_planner")

POWER_ON_SLOT = "NotPlanned"


def parse_schedule_slots(payload: Any) -> List[ScheduleSlot]:
    """Parse a list of {"start", "end", "type"} dicts; malformed entries are skipped."""
    slots: List[ScheduleSlot] = []
    if not isinstance(payload, list):
        LOG.warning("Schedule feed payload is not a list: %r", type(payload).__name__)
        return slots
    for item in payload:
        try:
            slots.append(ScheduleSlot.model_validate(item))
        except ValidationError as e:
            LOG.warning("Skipping malformed schedule slot %r: %s", item, e.errors()[0].get("msg", ""))
    return slots


def _clip_power_on(slots: Sequence[ScheduleSlot], lo: float, hi: float) -> List[TimeRange]:
    periods: List[TimeRange] = []
    for slot in slots:
        if slot.type != POWER_ON_SLOT:
            continue
        start = max(slot.start_minute / 60, lo)
        end = min(slot.end_minute / 60, hi)
        if start < end:
            periods.append(TimeRange(start=start, end=end))
    return periods


def build_schedule_from_slots(
    today: Sequence[ScheduleSlot],
    tomorrow: Sequence[ScheduleSlot],
    start_hour: float,
) -> PowerSchedule:
    """Merge today's and tomorrow's feeds into one rolling 24h schedule.

    Hours from start_hour to midnight come from today; hours before start_hour
    come from tomorrow, since the simulation wraps into the next day. An empty
    tomorrow feed is not published yet, so today's slots stand in as the estimate.
    """
    if not tomorrow:
        tomorrow = today
    periods = _clip_power_on(today, start_hour, 24) + _clip_power_on(tomorrow, 0, start_hour)
    return PowerSchedule(periods=periods)


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _field(payload: dict, key: str) -> Any:
    data = payload.get("data")
    if isinstance(data, dict) and data.get(key) is not None:
        return data[key]
    return payload.get(key)


def parse_battery_telemetry(payload: dict) -> TelemetrySnapshot:
    """Read batterySOC (required), batteryPower and lastUpdateTime from an inverter response.

    Values may sit at the top level or under "data", as numbers or numeric strings.
    """
    if not isinstance(payload, dict):
        raise ValueError("telemetry payload must be a JSON object")

    raw_soc = _field(payload, "batterySOC")
    if raw_soc is None:
        raise ValueError("batterySOC not found in telemetry payload")
    soc = _number(raw_soc)
    if soc is None or not math.isfinite(soc):
        raise ValueError(f"invalid batterySOC value: {raw_soc!r}")

    power = _number(_field(payload, "batteryPower"))
    ts = _number(_field(payload, "lastUpdateTime"))
    recorded_at = None
    if ts is not None:
        try:
            recorded_at = datetime.fromtimestamp(ts, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            LOG.warning("Ignoring out-of-range lastUpdateTime %r in telemetry payload", ts)
    if power is None and _field(payload, "batteryPower") is not None:
        LOG.warning("Ignoring non-numeric batteryPower in telemetry payload")

    return TelemetrySnapshot(soc=soc, battery_power_w=power, recorded_at=recorded_at)


def apply_charge_override(battery: BatterySettings, soc: Optional[float]) -> BatterySettings:
    """Settings with current_charge replaced by a live reading; None keeps the manual value."""
    if soc is None:
        return battery
    return battery.model_copy(update={"current_charge": soc})
