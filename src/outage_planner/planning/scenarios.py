"""Candidate appliance configurations for the next 24 hours, simulated and ranked.

The catalog is declarative: each candidate names its tier, the situation in which
it is worth showing, and the appliance overrides it applies on top of the
household's current configuration. Every candidate is run through the battery
simulator and the results are ranked feasible-first, then comfort before economy.

Priority layers of the default household:
1. Heating: always on
2. Water: always, but may pause at night or during the working day
3. Elevator: morning and evening rush, longer when energy allows
4. Lighting: evening and night, lowest priority
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from outage_planner.dt.simulator import check_survival, simulate
from outage_planner.io.schema import (
    Appliance,
    BatterySettings,
    Locale,
    PlannerConfig,
    PowerSchedule,
    Scenario,
    ScenarioTag,
    SituationSummary,
    TimeRange,
)
from outage_planner.metrics.kpis import TimelineMetrics
from outage_planner.planning.situation import analyze_situation

log = logging.getLogger("outage_planner")

TAG_ORDER: Dict[str, int] = {"comfort": 0, "balanced": 1, "economy": 2, "emergency": 3}


@dataclass(frozen=True)
class Override:
    enabled: Optional[bool] = None
    schedule: Optional[Tuple[TimeRange, ...]] = None


@dataclass(frozen=True)
class ScenarioContext:
    battery: BatterySettings
    situation: SituationSummary
    start_hour: int

    @property
    def outage_hours(self) -> int:
        return self.situation.total_outage_hours

    @property
    def is_night(self) -> bool:
        return self.start_hour >= 23 or self.start_hour < 6

    @property
    def is_morning(self) -> bool:
        return 6 <= self.start_hour < 10

    @property
    def is_day(self) -> bool:
        return 10 <= self.start_hour < 17

    @property
    def is_evening(self) -> bool:
        return 17 <= self.start_hour < 23

    @property
    def battery_high(self) -> bool:
        return self.battery.current_charge >= 70

    @property
    def battery_medium(self) -> bool:
        return 40 <= self.battery.current_charge < 70

    @property
    def battery_low(self) -> bool:
        return self.battery.current_charge < 40

    @property
    def battery_critical(self) -> bool:
        return self.battery.current_charge < 20


@dataclass(frozen=True)
class ScenarioCandidate:
    id: str
    icon: str
    tag: ScenarioTag
    applies: Callable[[ScenarioContext], bool]
    overrides: Dict[str, Override] = field(default_factory=dict)


def _ranges(*spans: Tuple[float, float]) -> Tuple[TimeRange, ...]:
    return tuple(TimeRange(start=s, end=e) for s, e in spans)


ALWAYS_ON = Override(enabled=True, schedule=())
OFF = Override(enabled=False)


def _on(*spans: Tuple[float, float]) -> Override:
    return Override(enabled=True, schedule=_ranges(*spans))


def _always(ctx: ScenarioContext) -> bool:
    return True


HEATING_ONLY = {"heating": ALWAYS_ON, "water": OFF, "elevator": OFF, "lighting": OFF}

CATALOG: List[ScenarioCandidate] = [
    # emergency: heating only
    ScenarioCandidate(
        "critical", "🚨", "emergency",
        lambda c: c.battery_critical and c.outage_hours > 0,
        HEATING_ONLY,
    ),
    ScenarioCandidate(
        "heating-only", "🔥", "emergency",
        lambda c: not (c.battery_critical and c.outage_hours > 0),
        HEATING_ONLY,
    ),
    # economy: heating plus restricted water / elevator
    ScenarioCandidate(
        "basic-needs", "💧", "economy",
        _always,
        {"heating": ALWAYS_ON, "water": ALWAYS_ON, "elevator": OFF, "lighting": OFF},
    ),
    ScenarioCandidate(
        "water-night-off", "🌙", "economy",
        lambda c: c.outage_hours > 6,
        {"heating": ALWAYS_ON, "water": _on((6, 23)), "elevator": _on((7, 9), (18, 20)), "lighting": OFF},
    ),
    ScenarioCandidate(
        "workday", "💼", "economy",
        lambda c: c.is_day or c.is_morning,
        {"heating": ALWAYS_ON, "water": _on((0, 9), (17, 24)), "elevator": _on((7, 9), (17, 20)), "lighting": OFF},
    ),
    ScenarioCandidate(
        "long-outage", "🔋", "economy",
        lambda c: c.outage_hours >= 12,
        {"heating": ALWAYS_ON, "water": _on((6, 9), (17, 22)), "elevator": _on((7, 9), (18, 20)), "lighting": OFF},
    ),
    # balanced: heating and water around the clock, elevator variations
    ScenarioCandidate(
        "balanced", "⚖️", "balanced",
        _always,
        {"heating": ALWAYS_ON, "water": ALWAYS_ON, "elevator": _on((7, 9), (18, 20)), "lighting": OFF},
    ),
    ScenarioCandidate(
        "extended-elevator", "🏢", "balanced",
        lambda c: c.battery_high or c.battery_medium,
        {"heating": ALWAYS_ON, "water": ALWAYS_ON, "elevator": _on((6, 10), (17, 22)), "lighting": OFF},
    ),
    ScenarioCandidate(
        "morning-rush", "🌅", "balanced",
        lambda c: c.is_morning or (c.is_night and c.start_hour >= 4),
        {"heating": ALWAYS_ON, "water": ALWAYS_ON, "elevator": _on((6, 10)), "lighting": _on((0, 7))},
    ),
    ScenarioCandidate(
        "night-light", "🌃", "balanced",
        lambda c: c.is_night or c.is_evening,
        {"heating": ALWAYS_ON, "water": _on((5, 24)), "elevator": OFF, "lighting": _on((18, 24), (0, 7))},
    ),
    # comfort: most or all appliances
    ScenarioCandidate(
        "evening-comfort", "🌇", "comfort",
        lambda c: c.is_evening or c.is_day,
        {"heating": ALWAYS_ON, "water": ALWAYS_ON, "elevator": _on((7, 9), (17, 22)), "lighting": _on((18, 23))},
    ),
    ScenarioCandidate(
        "max-comfort", "✨", "comfort",
        _always,
        {"heating": ALWAYS_ON, "water": ALWAYS_ON, "elevator": _on((6, 22)), "lighting": _on((17, 24), (0, 7))},
    ),
    ScenarioCandidate(
        "full-power", "⚡", "comfort",
        lambda c: c.battery_high and 0 < c.outage_hours <= 8,
        {"heating": ALWAYS_ON, "water": ALWAYS_ON, "elevator": ALWAYS_ON, "lighting": ALWAYS_ON},
    ),
    ScenarioCandidate(
        "short-outage", "⏱️", "comfort",
        lambda c: 0 < c.outage_hours <= 3 and not c.battery_low,
        {"heating": ALWAYS_ON, "water": ALWAYS_ON, "elevator": _on((6, 23)), "lighting": _on((17, 24), (0, 7))},
    ),
]

SCENARIO_TEXT: Dict[Locale, Dict[str, Tuple[str, str]]] = {
    "en": {
        "critical": ("Critical mode", "Only {charge:.0f}% left! Heating only, to keep the building warm."),
        "heating-only": ("Heating only", "Minimum consumption: only heating runs around the clock."),
        "basic-needs": ("Heating + water", "Basic needs: heating and water supply run continuously."),
        "water-night-off": ("Night saver", "Water off 23:00–6:00. Elevator at rush hours. Saves the battery overnight."),
        "workday": ("Working day", "Water off 9–17 while everyone is at work. Elevator in the morning and evening."),
        "long-outage": ("Long blackout", "{outage} h without power. Water only in the morning and evening. Strict mode."),
        "balanced": ("Balanced", "Heating and water 24/7. Elevator at rush hours (7–9, 18–20)."),
        "extended-elevator": ("Extended elevator", "Elevator runs longer: 6–10 and 17–22."),
        "morning-rush": ("Morning rush", "Elevator 6–10 for the commute. Stairwell lighting until 7:00."),
        "night-light": ("Night lighting", "Stairwell lighting 18–7. Water 5:00–24:00. Elevator off."),
        "evening-comfort": ("Evening comfort", "Comfort after work: elevator 17–22, lighting 18–23."),
        "max-comfort": ("Maximum comfort", "Everything on: elevator all day (6–22), lighting evening and night."),
        "full-power": ("Full power", "Battery at {charge:.0f}%! All appliances without limits 24/7."),
        "short-outage": ("Short blackout", "Only {outage} h without power, so higher consumption is affordable."),
    },
    "uk": {
        "critical": ("Критичний режим", "Заряд лише {charge:.0f}%! Тільки опалення для збереження тепла."),
        "heating-only": ("Тільки опалення", "Мінімальне споживання — лише опалення працює цілодобово."),
        "basic-needs": ("Опалення + вода", "Базові потреби: опалення та водопостачання працюють постійно."),
        "water-night-off": ("Нічна економія", "Вода вимкнена 23:00–6:00. Ліфт у години пік. Економить батарею вночі."),
        "workday": ("Робочий день", "Вода вимкнена 9–17 (всі на роботі). Ліфт вранці та ввечері."),
        "long-outage": ("Довгий блекаут", "{outage} год без світла. Вода лише вранці та ввечері. Суворий режим."),
        "balanced": ("Збалансований", "Опалення та вода 24/7. Ліфт у годину пік (7–9, 18–20). Золота середина."),
        "extended-elevator": ("Розширений ліфт", "Ліфт працює довше: 6–10 та 17–22. Зручно для мешканців."),
        "morning-rush": ("Ранковий пік", "Ліфт працює вранці 6–10 для виходу на роботу. Освітлення під'їздів до 7:00."),
        "night-light": ("Нічне освітлення", "Освітлення під'їздів 18–7. Вода 5:00–24:00. Ліфт вимкнений."),
        "evening-comfort": ("Вечірній комфорт", "Комфорт після роботи: ліфт 17–22, освітлення 18–23."),
        "max-comfort": ("Максимальний комфорт", "Все на максимум: ліфт весь день (6–22), освітлення вечір та ніч."),
        "full-power": ("Повна потужність", "Батарея {charge:.0f}%! Усі прилади без обмежень 24/7."),
        "short-outage": ("Короткий блекаут", "Лише {outage} год без світла — можна дозволити більше споживання."),
    },
}


def apply_overrides(base: Sequence[Appliance], overrides: Dict[str, Override]) -> List[Appliance]:
    """Copy the base configuration with per-id overrides. Schedules are fresh lists, never shared."""
    out: List[Appliance] = []
    for a in base:
        o = overrides.get(a.id)
        if o is None:
            out.append(a.model_copy(update={"schedule": list(a.schedule)}))
            continue
        out.append(
            a.model_copy(
                update={
                    "enabled": a.enabled if o.enabled is None else o.enabled,
                    "schedule": list(a.schedule) if o.schedule is None else list(o.schedule),
                }
            )
        )
    return out


def evaluate_candidate(
    candidate: ScenarioCandidate,
    ctx: ScenarioContext,
    base_appliances: Sequence[Appliance],
    power_schedule: PowerSchedule,
    current_hour: float,
    locale: Locale = "en",
) -> Scenario:
    appliances = apply_overrides(base_appliances, candidate.overrides)
    timeline = simulate(ctx.battery, appliances, power_schedule.periods, current_hour, locale=locale)
    metrics = TimelineMetrics.from_timeline(timeline)

    name, template = SCENARIO_TEXT[locale][candidate.id]
    description = template.format(charge=ctx.battery.current_charge, outage=ctx.outage_hours)

    return Scenario(
        id=candidate.id,
        name=name,
        description=description,
        icon=candidate.icon,
        tag=candidate.tag,
        appliances=appliances,
        feasible=check_survival(timeline, ctx.battery.min_discharge),
        min_battery_level=metrics.min_level,
        min_battery_time=metrics.min_time,
        energy_used_kwh=metrics.energy_used_kwh,
    )


def rank_scenarios(scenarios: Sequence[Scenario]) -> List[Scenario]:
    """Feasible first, then comfort -> balanced -> economy -> emergency; ties keep catalog order."""
    return sorted(scenarios, key=lambda s: (not s.feasible, TAG_ORDER[s.tag]))


def generate_scenarios(
    battery: BatterySettings,
    base_appliances: Sequence[Appliance],
    power_schedule: PowerSchedule,
    current_hour: float,
    cfg: Optional[PlannerConfig] = None,
    catalog: Optional[Sequence[ScenarioCandidate]] = None,
) -> List[Scenario]:
    cfg = cfg or PlannerConfig()
    ctx = ScenarioContext(
        battery=battery,
        situation=analyze_situation(battery, power_schedule, current_hour),
        start_hour=math.floor(current_hour),
    )

    scenarios = [
        evaluate_candidate(c, ctx, base_appliances, power_schedule, current_hour, locale=cfg.locale)
        for c in (CATALOG if catalog is None else catalog)
        if c.applies(ctx)
    ]
    ranked = rank_scenarios(scenarios)
    log.debug(
        "Generated %d scenarios (%d feasible) for %02d:00, %d outage hours ahead",
        len(ranked),
        sum(1 for s in ranked if s.feasible),
        ctx.start_hour,
        ctx.outage_hours,
    )
    return ranked
