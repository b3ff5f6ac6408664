"""
popsim: tick-driven demographic simulation.

A starting population evolves over simulated time under stochastic birth and
death rates modulated by a technology ladder, recurring wars and
carrying-capacity-driven overpopulation stress.  A driver calls
``SimulationEngine.step`` once per real-time interval with the simulated
seconds of the active speed mode.

Public API:
    SimulationParameters - immutable parameter pack
    SimulationState      - immutable per-tick state record
    TECHNOLOGY_LADDER    - the 12 technology tiers
    SimulationEngine     - owns the state; step() / reset()
    SimulationRunner     - headless driver with speed modes and pacing
    SpeedMode            - time-acceleration modes 1–8
    StateLogger          - trajectory recorder
"""

from .core.parameters import SECONDS_PER_YEAR, SimulationParameters
from .core.state import SimulationState
from .core.technology import MAX_TECH_LEVEL, TECHNOLOGY_LADDER, TechnologyTier
from .core.integrator import step, multi_step
from .simulation.engine import SimulationEngine
from .simulation.runner import SimulationRunner
from .simulation.speed import SpeedMode
from .analysis.logging import StateLogger
from .analysis.metrics import summary_statistics
from .loader import Scenario, load_scenario

__version__ = "0.1.0"

__all__ = [
    "SECONDS_PER_YEAR",
    "SimulationParameters",
    "SimulationState",
    "MAX_TECH_LEVEL",
    "TECHNOLOGY_LADDER",
    "TechnologyTier",
    "step",
    "multi_step",
    "SimulationEngine",
    "SimulationRunner",
    "SpeedMode",
    "StateLogger",
    "summary_statistics",
    "Scenario",
    "load_scenario",
    "__version__",
]
