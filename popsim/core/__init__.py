"""
Core engine primitives.

This layer knows nothing about timers, speed modes or display.  It only knows:
- Immutable simulation parameters
- The fixed technology ladder
- The immutable per-tick state record
- Pure demographic formulas and the tick integrator
"""

from popsim.core.parameters import SECONDS_PER_YEAR, SimulationParameters
from popsim.core.technology import (
    MAX_TECH_LEVEL,
    TECHNOLOGY_LADDER,
    TechnologyTier,
    get_tier,
    tech_level_for_time,
)
from popsim.core.state import SimulationState
from popsim.core.integrator import multi_step, step, validate_sim_seconds

__all__ = [
    "SECONDS_PER_YEAR",
    "SimulationParameters",
    "MAX_TECH_LEVEL",
    "TECHNOLOGY_LADDER",
    "TechnologyTier",
    "get_tier",
    "tech_level_for_time",
    "SimulationState",
    "multi_step",
    "step",
    "validate_sim_seconds",
]
