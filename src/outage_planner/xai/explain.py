from __future__ import annotations

import math
from typing import Dict, List, Sequence

from outage_planner.dt.timerange import is_in_range
from outage_planner.io.schema import Appliance, BatterySettings, Locale, TimeRange

LOW_CHARGE_PCT = 50.0
SHED_CHARGE_PCT = 40.0
HIGH_POWER_KW = 1.0
SHORT_RUNTIME_H = 4.0

DEPLETION_BEFORE_POWER = "DEPLETION_BEFORE_POWER"
LOW_CHARGE = "LOW_CHARGE"
UNDER_4_HOURS = "UNDER_4_HOURS"
SHED_HIGH_POWER = "SHED_HIGH_POWER"
MUST_SHED_LOAD = "MUST_SHED_LOAD"
OPERATING_OPTIMALLY = "OPERATING_OPTIMALLY"

MESSAGES: Dict[Locale, Dict[str, str]] = {
    "en": {
        DEPLETION_BEFORE_POWER: "⚠️ At the current load the battery will run down before power returns",
        LOW_CHARGE: "🔋 Battery charge is low. Reduce consumption",
        UNDER_4_HOURS: "⏰ Less than 4 hours of runtime left. Switch off non-critical appliances",
        SHED_HIGH_POWER: "💡 Consider switching off: {names}",
        MUST_SHED_LOAD: "🔌 The battery will not last until power returns. Switch off some appliances",
        OPERATING_OPTIMALLY: "✅ The system is operating optimally",
    },
    "uk": {
        DEPLETION_BEFORE_POWER: "⚠️ При поточному споживанні батарея розрядиться до увімкнення світла",
        LOW_CHARGE: "🔋 Низький заряд батареї. Рекомендується знизити споживання",
        UNDER_4_HOURS: "⏰ Залишилось менше 4 годин роботи. Вимкніть некритичні прилади",
        SHED_HIGH_POWER: "💡 Розгляньте вимкнення: {names}",
        MUST_SHED_LOAD: "🔌 Батареї не вистачить до увімкнення світла. Потрібно вимкнути частину приладів",
        OPERATING_OPTIMALLY: "✅ Система працює в оптимальному режимі",
    },
}


def high_power_appliances(appliances: Sequence[Appliance]) -> List[Appliance]:
    return [a for a in appliances if a.enabled and a.power_kw > HIGH_POWER_KW]


def hours_until_power_on(power_periods: Sequence[TimeRange], reference_hour: float) -> float:
    """Hours until the next grid-on period starts; 0 when the grid is already up, inf without periods."""
    if is_in_range(reference_hour, power_periods):
        return 0.0
    best = math.inf
    for p in power_periods:
        hours = p.start - reference_hour
        if hours <= 0:
            hours += 24
        best = min(best, hours)
    return best


def generate_recommendation_codes(
    battery: BatterySettings,
    appliances: Sequence[Appliance],
    hours_remaining: float,
    can_survive: bool,
    power_periods: Sequence[TimeRange],
    reference_hour: float,
) -> List[str]:
    """Ordered reason codes. Rules are independent; order is the display order."""
    codes: List[str] = []

    if not can_survive:
        codes.append(DEPLETION_BEFORE_POWER)

    if battery.current_charge < LOW_CHARGE_PCT:
        codes.append(LOW_CHARGE)

    if math.isfinite(hours_remaining) and 0 <= hours_remaining < SHORT_RUNTIME_H:
        codes.append(UNDER_4_HOURS)

    if high_power_appliances(appliances) and battery.current_charge < SHED_CHARGE_PCT:
        codes.append(SHED_HIGH_POWER)

    enabled_count = sum(1 for a in appliances if a.enabled)
    if hours_remaining < hours_until_power_on(power_periods, reference_hour) and enabled_count > 1:
        codes.append(MUST_SHED_LOAD)

    if not codes:
        codes.append(OPERATING_OPTIMALLY)
    return codes


def render_recommendations(codes: Sequence[str], appliances: Sequence[Appliance], locale: Locale = "en") -> List[str]:
    texts = MESSAGES[locale]
    names = ", ".join(a.display_name(locale) for a in high_power_appliances(appliances))
    return [texts[c].format(names=names) for c in codes]


def generate_recommendations(
    battery: BatterySettings,
    appliances: Sequence[Appliance],
    hours_remaining: float,
    can_survive: bool,
    power_periods: Sequence[TimeRange],
    reference_hour: float,
    locale: Locale = "en",
) -> List[str]:
    codes = generate_recommendation_codes(
        battery, appliances, hours_remaining, can_survive, power_periods, reference_hour
    )
    return render_recommendations(codes, appliances, locale=locale)
