from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from outage_planner.dt.battery import round1
from outage_planner.io.schema import TimelinePoint


@dataclass
class TimelineMetrics:
    min_level: float
    min_time: int
    energy_used_kwh: float

    @classmethod
    def from_timeline(cls, timeline: Sequence[TimelinePoint]) -> "TimelineMetrics":
        """Minimum projected level (first occurrence) and battery energy drawn.

        Each point spans one hour, so summing kW over discharging points gives kWh.
        """
        levels = np.asarray([p.battery_level for p in timeline], dtype=float)
        idx = int(np.argmin(levels))
        used = 0.0
        for p in timeline:
            if not p.charging:
                used += p.consumption
        return cls(
            min_level=round1(float(levels[idx])),
            min_time=timeline[idx].time,
            energy_used_kwh=round1(used),
        )
