"""
State container for the demographic engine.

SimulationState is immutable: every tick produces a new object, so a
snapshot handed to a reader never changes underneath it and no partially
updated tick is ever observable.

All fields are validated at construction time.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional

from .parameters import SECONDS_PER_YEAR, SimulationParameters
from .technology import MAX_TECH_LEVEL, TECHNOLOGY_LADDER


@dataclass(frozen=True)
class SimulationState:
    """Complete, immutable state of the engine after one tick.

    Attributes:
        population:            Head count (0 means extinct, terminal).
        birth_rate:            Births per 100 individuals per year (%).
        death_rate:            Deaths per 100 individuals per year (%).
        elapsed_sim_time:      Simulated seconds since reset.
        tech_level:            Index into TECHNOLOGY_LADDER.
        carrying_capacity:     Capacity of the tier at tech_level.
        wars_count:            Conflicts active during the last tick.
        overpopulation_factor: max(1, population / carrying_capacity).
        growth_factor:         Multiplicative factor applied on the last tick.
        tick:                  Number of applied ticks since reset.
    """

    population: int
    birth_rate: float
    death_rate: float
    elapsed_sim_time: float = 0.0
    tech_level: int = 0
    carrying_capacity: int = TECHNOLOGY_LADDER[0].capacity
    wars_count: int = 0
    overpopulation_factor: float = 1.0
    growth_factor: float = 1.0
    tick: int = 0

    def __post_init__(self) -> None:
        """Reject any out-of-range values at construction time."""
        if self.population < 0:
            raise ValueError(
                f"SimulationState.population must be >= 0, got {self.population}"
            )
        for name in ("birth_rate", "death_rate", "elapsed_sim_time",
                     "overpopulation_factor", "growth_factor"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"SimulationState.{name} must be finite, got {value}")
        if self.elapsed_sim_time < 0:
            raise ValueError(
                f"SimulationState.elapsed_sim_time must be >= 0, "
                f"got {self.elapsed_sim_time}"
            )
        if not 0 <= self.tech_level <= MAX_TECH_LEVEL:
            raise ValueError(
                f"SimulationState.tech_level must be in [0, {MAX_TECH_LEVEL}], "
                f"got {self.tech_level}"
            )
        expected_capacity = TECHNOLOGY_LADDER[self.tech_level].capacity
        if self.carrying_capacity != expected_capacity:
            raise ValueError(
                f"SimulationState.carrying_capacity must equal the capacity of "
                f"tech level {self.tech_level} ({expected_capacity}), "
                f"got {self.carrying_capacity}"
            )
        if self.wars_count < 0:
            raise ValueError(
                f"SimulationState.wars_count must be >= 0, got {self.wars_count}"
            )
        if self.overpopulation_factor < 1.0:
            raise ValueError(
                f"SimulationState.overpopulation_factor must be >= 1, "
                f"got {self.overpopulation_factor}"
            )
        if self.tick < 0:
            raise ValueError(f"SimulationState.tick must be >= 0, got {self.tick}")

    @property
    def is_extinct(self) -> bool:
        """True once the population has reached zero."""
        return self.population == 0

    @property
    def net_growth_rate(self) -> float:
        """birth_rate - death_rate, in percentage points per year."""
        return self.birth_rate - self.death_rate

    @property
    def elapsed_years(self) -> float:
        return self.elapsed_sim_time / SECONDS_PER_YEAR

    @property
    def technology_name(self) -> str:
        return TECHNOLOGY_LADDER[self.tech_level].name

    def copy_with(self, **kwargs: Any) -> "SimulationState":
        """Return a new SimulationState with selected fields overridden."""
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationState":
        """Deserialise from plain dictionary."""
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown SimulationState fields: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def initial(
        cls, params: Optional[SimulationParameters] = None
    ) -> "SimulationState":
        """Return the state restored by reset()."""
        params = params if params is not None else SimulationParameters()
        return cls(
            population=params.initial_population,
            birth_rate=params.base_birth_rate,
            death_rate=params.base_death_rate,
            elapsed_sim_time=0.0,
            tech_level=0,
            carrying_capacity=TECHNOLOGY_LADDER[0].capacity,
            wars_count=0,
            overpopulation_factor=1.0,
            growth_factor=1.0,
            tick=0,
        )
