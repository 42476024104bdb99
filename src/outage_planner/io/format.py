from __future__ import annotations

import math

from outage_planner.io.schema import Locale

_UNITS = {"en": ("h", "min"), "uk": ("год", "хв")}


def format_hours(hours: float, locale: Locale = "en") -> str:
    """Human-readable duration, e.g. '2 h 30 min'. Anything past 100 h reads as '∞'."""
    if not math.isfinite(hours) or hours > 100:
        return "∞"
    h_unit, m_unit = _UNITS[locale]
    h = math.floor(hours)
    m = math.floor((hours - h) * 60 + 0.5)
    if m == 60:
        h, m = h + 1, 0
    if h == 0:
        return f"{m} {m_unit}"
    if m == 0:
        return f"{h} {h_unit}"
    return f"{h} {h_unit} {m} {m_unit}"


def charge_color(percent: float) -> str:
    if percent >= 70:
        return "#22c55e"
    if percent >= 40:
        return "#f59e0b"
    return "#ef4444"
