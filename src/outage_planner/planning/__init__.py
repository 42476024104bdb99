"""Outage planning: situation outlook and ranked appliance scenarios.

All outputs cover the 24 hours starting at the current hour and are
deterministic for identical inputs.
"""

from .scenarios import (
    CATALOG,
    ScenarioCandidate,
    ScenarioContext,
    apply_overrides,
    generate_scenarios,
    rank_scenarios,
)
from .situation import analyze_situation

__all__ = [
    "CATALOG",
    "ScenarioCandidate",
    "ScenarioContext",
    "analyze_situation",
    "apply_overrides",
    "generate_scenarios",
    "rank_scenarios",
]
