"""
Tick integrator for the demographic engine.

Pipeline per step:
  1. Advance technology from elapsed simulated time (never regresses).
  2. Draw active wars.
  3. Compute overpopulation factor and stress.
  4. Build base birth/death rates.
  5. Jitter both rates and apply the floor.
  6. Compute the clamped growth factor.
  7. Update the population (critical-size decline rule, floor at 1).
  8. Accumulate elapsed time and increment the tick counter.

``step`` is pure: it returns a new SimulationState and never mutates its
input.  An extinct state is returned unchanged.
"""

from __future__ import annotations

import math
from typing import List, Optional

import numpy as np

from .dynamics import (
    base_rates,
    draw_wars,
    growth_factor,
    net_growth_rate,
    next_population,
    overpopulation_factor,
    overpopulation_stress,
    vary_rate,
)
from .parameters import SimulationParameters
from .state import SimulationState
from .technology import get_tier, tech_level_for_time


def validate_sim_seconds(sim_seconds: float) -> float:
    """Return ``sim_seconds`` as float, rejecting non-positive or non-finite input.

    Raises:
        ValueError: If sim_seconds is not a finite number > 0.
    """
    try:
        value = float(sim_seconds)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"sim_seconds must be a number, got {sim_seconds!r}") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(f"sim_seconds must be finite and > 0, got {sim_seconds!r}")
    return value


def step(
    state: SimulationState,
    sim_seconds: float,
    params: SimulationParameters,
    rng: np.random.Generator,
) -> SimulationState:
    """Advance the simulation by one tick of ``sim_seconds`` simulated seconds.

    Args:
        state:       Current state.
        sim_seconds: Simulated time covered by this tick (> 0).
        params:      Simulation parameters.
        rng:         Random source; only ``rng.random()`` is used.
                     Draw order: war count, birth jitter, death jitter.

    Returns:
        The next SimulationState.

    Raises:
        ValueError: If sim_seconds is not finite and > 0.
    """
    dt = validate_sim_seconds(sim_seconds)

    if state.is_extinct:
        return state

    # 1. Technology
    tech_level = state.tech_level
    carrying_capacity = state.carrying_capacity
    implied_level = tech_level_for_time(state.elapsed_sim_time, params)
    if implied_level > tech_level:
        tech_level = implied_level
        carrying_capacity = get_tier(tech_level).capacity
    tier = get_tier(tech_level)

    # 2. Wars
    wars = draw_wars(state.population, params, rng)

    # 3. Overpopulation
    factor = overpopulation_factor(state.population, carrying_capacity)
    stress = overpopulation_stress(factor, params)

    # 4–5. Rates
    birth, death = base_rates(tier, wars, stress, params)
    birth = vary_rate(birth, params, rng)
    death = vary_rate(death, params, rng)

    # 6–7. Growth
    net_rate = net_growth_rate(birth, death)
    g = growth_factor(net_rate, dt, params)
    population = next_population(state.population, g, net_rate, params)

    # 8. Bookkeeping
    return SimulationState(
        population=population,
        birth_rate=birth,
        death_rate=death,
        elapsed_sim_time=state.elapsed_sim_time + dt,
        tech_level=tech_level,
        carrying_capacity=carrying_capacity,
        wars_count=wars,
        overpopulation_factor=factor,
        growth_factor=g,
        tick=state.tick + 1,
    )


def multi_step(
    state: SimulationState,
    sim_seconds: float,
    n_steps: int,
    params: SimulationParameters,
    rng: Optional[np.random.Generator] = None,
) -> List[SimulationState]:
    """Apply ``n_steps`` ticks of equal length.

    Args:
        state:       Starting state.
        sim_seconds: Simulated seconds per tick.
        n_steps:     Number of ticks (>= 0).
        params:      Simulation parameters.
        rng:         Random source; defaults to default_rng(params.seed).

    Returns:
        List of states after each tick (excludes the starting state).
    """
    if n_steps < 0:
        raise ValueError(f"n_steps must be >= 0, got {n_steps}")
    if rng is None:
        rng = np.random.default_rng(params.seed)

    states: List[SimulationState] = []
    current = state
    for _ in range(n_steps):
        current = step(current, sim_seconds, params, rng)
        states.append(current)
    return states
