"""
Demographic dynamics: pure per-tick formulas.

    wars      = floor(U[0, W)) + floor(P / P_war)
    m_war     = wars * war_mortality_per_war
    F         = max(1, P / K)
    S         = (F - 1)^a * s            if F > 1 else 0
    b_base    = b0 + tier.birth_bonus      - S * stress_birth_share
    d_base    = d0 - tier.death_reduction  + m_war + S
    rate'     = max(min_rate, rate + (U[0, 1) - 0.5) * 2 * variation)
    g         = 1 + clip((b' - d') / 100 * dt / year, -c, c)
    P'        = max(1, round(P * g))
                or max(1, P - 1) when P' < critical and b' < d'

Every random draw goes through ``rng.random()`` so any object exposing
that method (a numpy Generator, or a scripted stub in tests) can drive
the dynamics.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .parameters import SimulationParameters
from .technology import TechnologyTier


# ─────────────────────────────────────────────────────────────────────────── #
# War                                                                          #
# ─────────────────────────────────────────────────────────────────────────── #

def draw_wars(
    population: int,
    params: SimulationParameters,
    rng: np.random.Generator,
) -> int:
    """Draw the number of conflicts active this tick.

    Fresh every tick: larger populations sustain more simultaneous wars.
    """
    random_wars = int(math.floor(rng.random() * params.max_random_wars))
    return random_wars + population // params.population_per_war


def war_mortality(wars_count: int, params: SimulationParameters) -> float:
    """Death-rate points added by ``wars_count`` active wars."""
    return wars_count * params.war_mortality_per_war


# ─────────────────────────────────────────────────────────────────────────── #
# Overpopulation                                                               #
# ─────────────────────────────────────────────────────────────────────────── #

def overpopulation_factor(population: int, carrying_capacity: float) -> float:
    """Ratio of population to carrying capacity, floored at 1."""
    return max(1.0, population / carrying_capacity)


def overpopulation_stress(factor: float, params: SimulationParameters) -> float:
    """Non-linear stress term; zero at or below carrying capacity."""
    if factor <= 1.0:
        return 0.0
    return (factor - 1.0) ** params.stress_exponent * params.stress_scale


# ─────────────────────────────────────────────────────────────────────────── #
# Rates                                                                        #
# ─────────────────────────────────────────────────────────────────────────── #

def base_rates(
    tier: TechnologyTier,
    wars_count: int,
    stress: float,
    params: SimulationParameters,
) -> Tuple[float, float]:
    """Return (birth, death) before stochastic variation.

    Stress may push the birth rate negative here; the floor is applied
    after the jitter.
    """
    birth = params.base_birth_rate + tier.birth_bonus
    death = params.base_death_rate - tier.death_reduction

    death += war_mortality(wars_count, params)

    birth -= stress * params.stress_birth_share
    death += stress
    return birth, death


def vary_rate(
    rate: float,
    params: SimulationParameters,
    rng: np.random.Generator,
) -> float:
    """Apply uniform jitter of half-width ``rate_variation`` and the floor."""
    jitter = (rng.random() - 0.5) * params.rate_variation * 2.0
    return max(params.min_rate, rate + jitter)


# ─────────────────────────────────────────────────────────────────────────── #
# Growth                                                                       #
# ─────────────────────────────────────────────────────────────────────────── #

def net_growth_rate(birth_rate: float, death_rate: float) -> float:
    """Net growth as a fraction of population per year."""
    return (birth_rate - death_rate) / 100.0


def growth_factor(
    net_rate: float,
    sim_seconds: float,
    params: SimulationParameters,
) -> float:
    """Multiplicative population factor for one tick.

    Bounded to 1 ± max_change_per_tick whatever ``sim_seconds`` is.
    """
    raw = net_rate * sim_seconds / params.seconds_per_year
    limit = params.max_change_per_tick
    return 1.0 + float(np.clip(raw, -limit, limit))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def next_population(
    population: int,
    factor: float,
    net_rate: float,
    params: SimulationParameters,
) -> int:
    """Apply ``factor`` to ``population``.

    A small declining population loses exactly one individual per tick
    instead of following the multiplicative rule.  The result is never
    below 1.
    """
    updated = max(1, _round_half_up(population * factor))
    if updated < params.critical_population and net_rate < 0.0:
        return max(1, population - 1)
    return updated
