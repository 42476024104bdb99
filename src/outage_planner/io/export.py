from __future__ import annotations

from typing import Sequence

import pandas as pd

from outage_planner.io.format import charge_color
from outage_planner.io.schema import Scenario, TimelinePoint


def timeline_to_frame(points: Sequence[TimelinePoint]) -> pd.DataFrame:
    """One row per simulated hour, in simulation order, for charts and tables."""
    rows = []
    for p in points:
        rows.append(
            {
                "time": p.time,
                "battery_level": p.battery_level,
                "consumption_kw": p.consumption,
                "charging": p.charging,
                "appliances": ";".join(p.appliances),
                "level_color": charge_color(p.battery_level),
            }
        )
    return pd.DataFrame(rows, columns=["time", "battery_level", "consumption_kw", "charging", "appliances", "level_color"])


def scenarios_to_frame(scenarios: Sequence[Scenario]) -> pd.DataFrame:
    rows = []
    for rank, s in enumerate(scenarios, start=1):
        rows.append(
            {
                "rank": rank,
                "id": s.id,
                "name": s.name,
                "tag": s.tag,
                "feasible": s.feasible,
                "min_battery_level": s.min_battery_level,
                "min_battery_time": s.min_battery_time,
                "energy_used_kwh": s.energy_used_kwh,
                "enabled": ";".join(a.id for a in s.appliances if a.enabled),
            }
        )
    return pd.DataFrame(
        rows,
        columns=[
            "rank",
            "id",
            "name",
            "tag",
            "feasible",
            "min_battery_level",
            "min_battery_time",
            "energy_used_kwh",
            "enabled",
        ],
    )
