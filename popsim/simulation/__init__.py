"""
Simulation drivers: the stateful engine, speed modes and the tick runner.
"""

from popsim.simulation.engine import SimulationEngine, StepHook
from popsim.simulation.runner import SimulationRunner
from popsim.simulation.speed import SpeedMode

__all__ = [
    "SimulationEngine",
    "StepHook",
    "SimulationRunner",
    "SpeedMode",
]
