"""
Simulation parameters for the demographic engine.

All parameters are immutable, named constants.  The defaults reproduce the
reference model:

  - baselines: birth 2.1 %, death 1.8 % per 100 individuals per year
  - one technology tier every 500 simulated years
  - wars: floor(U[0, 5)) + floor(population / 10 000), 0.5 % mortality each
  - overpopulation stress: (factor - 1)^1.5 * 2, 30 % of it taken from births
  - rates jittered by ±0.2 and floored at 0.1
  - at most ±10 % population change per tick
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


SECONDS_PER_YEAR = 31_536_000
"""Simulated seconds in one (365-day) year."""


@dataclass(frozen=True)
class SimulationParameters:
    """Immutable, fully validated simulation parameters."""

    # ------------------------------------------------------------------ #
    # Biological baselines                                                 #
    # ------------------------------------------------------------------ #
    base_birth_rate: float = 2.1
    """Birth rate before technology, war and stress (% per year)."""

    base_death_rate: float = 1.8
    """Death rate before technology, war and stress (% per year)."""

    initial_population: int = 100
    """Population restored on reset (>= 1)."""

    # ------------------------------------------------------------------ #
    # Time                                                                 #
    # ------------------------------------------------------------------ #
    seconds_per_year: float = SECONDS_PER_YEAR
    """Simulated seconds per year (> 0)."""

    years_per_tech_tier: float = 500.0
    """Simulated years between technology tiers (> 0)."""

    # ------------------------------------------------------------------ #
    # War:  wars = floor(U[0, max_random_wars)) + floor(P / pop_per_war) #
    # ------------------------------------------------------------------ #
    max_random_wars: int = 5
    """Exclusive upper bound of the random war draw (>= 0)."""

    population_per_war: int = 10_000
    """Population that sustains one additional conflict (> 0)."""

    war_mortality_per_war: float = 0.5
    """Death-rate points added per active war (>= 0)."""

    # ------------------------------------------------------------------ #
    # Overpopulation:  stress = (F - 1)^stress_exponent * stress_scale   #
    # ------------------------------------------------------------------ #
    stress_exponent: float = 1.5
    """Non-linearity of overpopulation stress (> 0)."""

    stress_scale: float = 2.0
    """Death-rate points per unit of stress (>= 0)."""

    stress_birth_share: float = 0.3
    """Fraction of the stress term subtracted from the birth rate (>= 0)."""

    # ------------------------------------------------------------------ #
    # Stochastic variation and clamps                                      #
    # ------------------------------------------------------------------ #
    rate_variation: float = 0.2
    """Half-width of the uniform jitter applied to each rate (>= 0)."""

    min_rate: float = 0.1
    """Floor applied to both rates after jitter (> 0)."""

    max_change_per_tick: float = 0.1
    """Largest relative population change per tick, in (0, 1)."""

    critical_population: int = 10
    """Below this size a declining population loses one individual per tick."""

    # ------------------------------------------------------------------ #
    # Random seed                                                          #
    # ------------------------------------------------------------------ #
    seed: Optional[int] = None
    """PRNG seed; None draws fresh OS entropy (non-repeatable runs)."""

    def __post_init__(self) -> None:
        """Reject out-of-range values at construction time."""
        finite = {
            "base_birth_rate": self.base_birth_rate,
            "base_death_rate": self.base_death_rate,
            "seconds_per_year": self.seconds_per_year,
            "years_per_tech_tier": self.years_per_tech_tier,
            "war_mortality_per_war": self.war_mortality_per_war,
            "stress_exponent": self.stress_exponent,
            "stress_scale": self.stress_scale,
            "stress_birth_share": self.stress_birth_share,
            "rate_variation": self.rate_variation,
            "min_rate": self.min_rate,
            "max_change_per_tick": self.max_change_per_tick,
        }
        for name, value in finite.items():
            if not math.isfinite(value):
                raise ValueError(f"SimulationParameters.{name} must be finite, got {value}")

        positive = {
            "seconds_per_year": self.seconds_per_year,
            "years_per_tech_tier": self.years_per_tech_tier,
            "population_per_war": self.population_per_war,
            "stress_exponent": self.stress_exponent,
            "min_rate": self.min_rate,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"SimulationParameters.{name} must be > 0, got {value}")

        non_negative = {
            "max_random_wars": self.max_random_wars,
            "war_mortality_per_war": self.war_mortality_per_war,
            "stress_scale": self.stress_scale,
            "stress_birth_share": self.stress_birth_share,
            "rate_variation": self.rate_variation,
            "critical_population": self.critical_population,
        }
        for name, value in non_negative.items():
            if value < 0:
                raise ValueError(f"SimulationParameters.{name} must be >= 0, got {value}")

        if self.initial_population < 1:
            raise ValueError(
                f"SimulationParameters.initial_population must be >= 1, "
                f"got {self.initial_population}"
            )
        if not 0.0 < self.max_change_per_tick < 1.0:
            raise ValueError(
                f"SimulationParameters.max_change_per_tick must be in (0, 1), "
                f"got {self.max_change_per_tick}"
            )
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"SimulationParameters.seed must be >= 0, got {self.seed}")

    @property
    def seconds_per_tech_tier(self) -> float:
        """Simulated seconds between two technology tiers."""
        return self.years_per_tech_tier * self.seconds_per_year

    def copy_with(self, **kwargs: Any) -> "SimulationParameters":
        """Return a new SimulationParameters with selected fields overridden."""
        current = self.to_dict()
        current.update(kwargs)
        return SimulationParameters.from_dict(current)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationParameters":
        """Deserialise from plain dictionary, rejecting unknown keys."""
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(
                f"Unknown SimulationParameters fields: {sorted(unknown)}"
            )
        return cls(**data)
