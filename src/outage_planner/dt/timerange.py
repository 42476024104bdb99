"""Hour-of-day interval predicates.

Ranges are interpreted modulo 24: a range whose start is greater than its end
crosses midnight, and a range with start == end never matches. Callers are
expected to pass hours already reduced to [0, 24).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from outage_planner.io.schema import Appliance, TimeRange


def hour_in_range(hour: float, rng: TimeRange) -> bool:
    if rng.start <= rng.end:
        return rng.start <= hour < rng.end
    return hour >= rng.start or hour < rng.end


def is_in_range(hour: float, ranges: Sequence[TimeRange]) -> bool:
    """True when hour falls inside any of the ranges. An empty list never matches."""
    return any(hour_in_range(hour, r) for r in ranges)


@dataclass(frozen=True)
class Always:
    pass


@dataclass(frozen=True)
class Ranges:
    ranges: Tuple[TimeRange, ...]


ActivityWindow = Union[Always, Ranges]


def activity_window(appliance: Appliance) -> ActivityWindow:
    # an appliance without a schedule runs around the clock
    if not appliance.schedule:
        return Always()
    return Ranges(tuple(appliance.schedule))


def window_contains(window: ActivityWindow, hour: float) -> bool:
    if isinstance(window, Always):
        return True
    return is_in_range(hour, window.ranges)


def is_appliance_active(appliance: Appliance, hour: float) -> bool:
    return window_contains(activity_window(appliance), hour)
