"""
Technology ladder.

Twelve fixed tiers reached by simulated time alone: one tier every
``years_per_tech_tier`` years (500 by default).  Each tier grants an
additive birth bonus, a subtractive death reduction and a carrying capacity.

    level  tier                        birth  death  capacity
    0      Stone tools                 +0.0   -0.0         1 000
    1      Agriculture                 +0.3   -0.1         5 000
    ...
    11     AI & robotics               -0.5   -1.4   100 000 000

The ladder is process-wide immutable data: the engine only indexes into it.

Only the endpoints (Stone tools at 1 000, AI & robotics at 100 000 000) and
the Agriculture capacity of 5 000 are fixed reference values.  The birth,
death and capacity figures of the intermediate tiers are calibrated choices,
not historical data: capacities rise strictly and later tiers trade birth
bonus for death reduction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .parameters import SimulationParameters


@dataclass(frozen=True)
class TechnologyTier:
    """One rung of the technology ladder.

    Attributes:
        name:            Human-readable tier name.
        level:           Index of the tier in the ladder.
        birth_bonus:     Percentage points added to the birth rate.
        death_reduction: Percentage points subtracted from the death rate.
        capacity:        Carrying capacity granted by the tier (> 0).
    """

    name: str
    level: int
    birth_bonus: float
    death_reduction: float
    capacity: int

    def __post_init__(self) -> None:
        if self.level < 0:
            raise ValueError(f"TechnologyTier.level must be >= 0, got {self.level}")
        if self.capacity <= 0:
            raise ValueError(
                f"TechnologyTier.capacity must be > 0, got {self.capacity}"
            )


TECHNOLOGY_LADDER: Tuple[TechnologyTier, ...] = (
    TechnologyTier("Stone tools",             0,  0.0, 0.0,       1_000),
    TechnologyTier("Agriculture",             1,  0.3, 0.1,       5_000),
    TechnologyTier("Bronze working",          2,  0.3, 0.2,      15_000),
    TechnologyTier("Writing",                 3,  0.2, 0.3,      40_000),
    TechnologyTier("Iron working",            4,  0.4, 0.3,     100_000),
    TechnologyTier("Mathematics",             5,  0.3, 0.4,     250_000),
    TechnologyTier("Printing press",          6,  0.2, 0.5,     600_000),
    TechnologyTier("Scientific method",       7,  0.1, 0.7,   1_500_000),
    TechnologyTier("Steam power",             8,  0.2, 0.9,   5_000_000),
    TechnologyTier("Electricity",             9,  0.0, 1.1,  15_000_000),
    TechnologyTier("Modern medicine",        10, -0.3, 1.3,  40_000_000),
    TechnologyTier("AI & robotics",          11, -0.5, 1.4, 100_000_000),
)

MAX_TECH_LEVEL = len(TECHNOLOGY_LADDER) - 1


def get_tier(level: int) -> TechnologyTier:
    """Return the tier at ``level``.

    Raises:
        ValueError: If level is outside [0, MAX_TECH_LEVEL].
    """
    if not 0 <= level <= MAX_TECH_LEVEL:
        raise ValueError(
            f"tech level must be in [0, {MAX_TECH_LEVEL}], got {level}"
        )
    return TECHNOLOGY_LADDER[level]


def tech_level_for_time(
    elapsed_sim_time: float, params: SimulationParameters
) -> int:
    """Technology index implied by ``elapsed_sim_time`` seconds.

    floor(years / years_per_tech_tier), clamped to the last tier.
    """
    years = elapsed_sim_time / params.seconds_per_year
    level = int(math.floor(years / params.years_per_tech_tier))
    return max(0, min(level, MAX_TECH_LEVEL))
