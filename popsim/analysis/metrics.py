"""
Trajectory metrics.

Computes summary statistics over a trajectory of SimulationState objects.
All metric functions accept a list of SimulationState and return scalar,
list or dict values.  No side effects.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

from ..core.state import SimulationState


def peak_population(trajectory: List[SimulationState]) -> int:
    """Largest population reached over a trajectory (0 if empty)."""
    if not trajectory:
        return 0
    return max(s.population for s in trajectory)


def mean_wars(trajectory: List[SimulationState]) -> float:
    """Mean number of active wars per tick.

    The starting state (tick 0) carries no war draw and is excluded.
    """
    ticks = [s.wars_count for s in trajectory if s.tick > 0]
    if not ticks:
        return 0.0
    return float(np.mean(ticks))


def mean_net_growth(trajectory: List[SimulationState]) -> float:
    """Mean birth_rate - death_rate (percentage points) over applied ticks."""
    ticks = [s.net_growth_rate for s in trajectory if s.tick > 0]
    if not ticks:
        return 0.0
    return float(np.mean(ticks))


def max_overpopulation(trajectory: List[SimulationState]) -> float:
    """Largest overpopulation factor seen (1.0 if empty)."""
    if not trajectory:
        return 1.0
    return float(max(s.overpopulation_factor for s in trajectory))


def tech_advances(trajectory: List[SimulationState]) -> List[Tuple[int, int]]:
    """List of (tick, new_level) for every technology advance."""
    advances: List[Tuple[int, int]] = []
    for prev, curr in zip(trajectory, trajectory[1:]):
        if curr.tech_level > prev.tech_level:
            advances.append((curr.tick, curr.tech_level))
    return advances


def summary_statistics(trajectory: List[SimulationState]) -> Dict[str, Any]:
    """Compute a comprehensive summary over a trajectory.

    Args:
        trajectory: Ordered list of SimulationState objects.

    Returns:
        Dictionary of metric name → value.
    """
    final = trajectory[-1] if trajectory else None
    return {
        "n_ticks": final.tick if final else 0,
        "initial_population": trajectory[0].population if trajectory else 0,
        "final_population": final.population if final else 0,
        "peak_population": peak_population(trajectory),
        "final_tech_level": final.tech_level if final else 0,
        "final_technology": final.technology_name if final else "",
        "elapsed_years": final.elapsed_years if final else 0.0,
        "mean_wars": mean_wars(trajectory),
        "mean_net_growth": mean_net_growth(trajectory),
        "max_overpopulation": max_overpopulation(trajectory),
        "tech_advances": len(tech_advances(trajectory)),
        "extinct": final.is_extinct if final else False,
    }
