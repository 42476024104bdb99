from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

# Ensure src/ is importable when running this script without installing the package
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pandas as pd  # noqa: E402

from outage_planner.dt.simulator import calculate_battery_status  # noqa: E402
from outage_planner.io.defaults import default_appliances, default_battery_settings  # noqa: E402
from outage_planner.io.export import scenarios_to_frame, timeline_to_frame  # noqa: E402
from outage_planner.io.format import format_hours  # noqa: E402
from outage_planner.io.schema import PlannerConfig, PowerSchedule, TimeRange  # noqa: E402
from outage_planner.planning import analyze_situation, generate_scenarios  # noqa: E402


def parse_periods(text: str) -> List[TimeRange]:
    """'6-14,18-20.5' -> grid-on ranges. An empty string means no grid at all."""
    periods: List[TimeRange] = []
    for part in filter(None, (p.strip() for p in text.split(","))):
        try:
            start, end = part.split("-")
            periods.append(TimeRange(start=float(start), end=float(end)))
        except ValueError:
            raise ValueError(f"--grid expects ranges like 6-14, got {part!r}")
    return periods


def main():
    ap = argparse.ArgumentParser(description="Project battery charge through scheduled outages.")

    ap.add_argument("--hour", type=float, default=10.0, help="Reference hour of day (fraction = minutes)")
    ap.add_argument("--charge", type=float, default=50.0, help="Current battery charge (%%)")
    ap.add_argument("--grid", type=str, default="6-14", help="Grid-on periods, e.g. '6-14,18-20'")
    ap.add_argument("--locale", choices=["en", "uk"], default="en")
    ap.add_argument("--log-level", type=str, default="WARNING")

    args = ap.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if not 0 <= args.hour < 24:
        raise ValueError("--hour must be within [0, 24)")

    cfg = PlannerConfig(locale=args.locale)
    battery = default_battery_settings().model_copy(update={"current_charge": args.charge})
    appliances = default_appliances()
    schedule = PowerSchedule(periods=parse_periods(args.grid))

    result = calculate_battery_status(battery, appliances, schedule, args.hour, cfg)
    situation = analyze_situation(battery, schedule, args.hour)
    scenarios = generate_scenarios(battery, appliances, schedule, args.hour, cfg)

    pd.set_option("display.width", 160)
    print(f"Usable energy: {result.usable_energy:.1f} kWh, available now: {result.current_available_energy:.1f} kWh")
    print(f"Drawing {result.current_consumption:.1f} kW, remaining: {format_hours(result.hours_remaining, cfg.locale)}, "
          f"full charge in: {format_hours(result.charge_time, cfg.locale)}")
    print(f"Survives the next 24 h: {result.can_survive_outage}")
    for line in result.recommendations:
        print(" ", line)
    print()
    print(timeline_to_frame(result.timeline_data).to_string(index=False))
    print()
    print(situation.model_dump())
    print()
    print(scenarios_to_frame(scenarios).to_string(index=False))


if __name__ == "__main__":
    main()
