"""
Display helpers for a presentation layer.

Population magnitudes are abbreviated (1.5K, 2.3M, ...), elapsed simulated
time is broken into its two most significant units, and the sign of the net
growth rate is mapped to a direction / trend label.
"""

from __future__ import annotations

import math
from enum import Enum

from ..core.parameters import SECONDS_PER_YEAR
from ..core.state import SimulationState

_MAGNITUDES = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)

TREND_BAND = 0.5
"""Net growth (percentage points) beyond which a trend is rising/falling."""


class GrowthDirection(Enum):
    GROWTH = "growth"
    DECLINE = "decline"
    STABLE = "stable"


class GrowthTrend(Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


def format_population(population: float) -> str:
    """Abbreviate a head count: 1234 → '1.2K', 5_600_000 → '5.6M'."""
    for threshold, suffix in _MAGNITUDES:
        if population >= threshold:
            return f"{population / threshold:.1f}{suffix}"
    return str(int(population))


def format_elapsed(seconds: float) -> str:
    """Render simulated seconds with their two most significant units.

    >>> format_elapsed(31_536_000 * 3 + 86_400 * 12)
    '3 years, 12 days'
    """
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(f"seconds must be finite and >= 0, got {seconds!r}")

    years = int(seconds // SECONDS_PER_YEAR)
    days = int((seconds % SECONDS_PER_YEAR) // 86_400)
    hours = int((seconds % 86_400) // 3_600)
    minutes = int((seconds % 3_600) // 60)

    if years > 0:
        return f"{years} years, {days} days"
    if days > 0:
        return f"{days} days, {hours} hours"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{seconds:g}s"


def growth_direction(net_growth: float) -> GrowthDirection:
    """Sign of the net growth rate."""
    if net_growth > 0:
        return GrowthDirection.GROWTH
    if net_growth < 0:
        return GrowthDirection.DECLINE
    return GrowthDirection.STABLE


def growth_trend(net_growth: float) -> GrowthTrend:
    """Net growth classified with a ±TREND_BAND dead zone."""
    if net_growth > TREND_BAND:
        return GrowthTrend.RISING
    if net_growth < -TREND_BAND:
        return GrowthTrend.FALLING
    return GrowthTrend.STABLE


def describe_state(state: SimulationState) -> str:
    """One-line human summary of a state."""
    net = state.net_growth_rate
    return (
        f"pop {format_population(state.population)} | "
        f"time {format_elapsed(state.elapsed_sim_time)} | "
        f"birth {state.birth_rate:.2f}% death {state.death_rate:.2f}% | "
        f"{growth_direction(net).value} {net:+.2f}% | "
        f"tech {state.technology_name} | wars {state.wars_count}"
    )
