"""
Analysis layer: trajectory recording, summary metrics and display helpers.
"""

from popsim.analysis.formatting import (
    GrowthDirection,
    GrowthTrend,
    describe_state,
    format_elapsed,
    format_population,
    growth_direction,
    growth_trend,
)
from popsim.analysis.logging import StateLogger
from popsim.analysis.metrics import (
    max_overpopulation,
    mean_net_growth,
    mean_wars,
    peak_population,
    summary_statistics,
    tech_advances,
)

__all__ = [
    "GrowthDirection",
    "GrowthTrend",
    "describe_state",
    "format_elapsed",
    "format_population",
    "growth_direction",
    "growth_trend",
    "StateLogger",
    "max_overpopulation",
    "mean_net_growth",
    "mean_wars",
    "peak_population",
    "summary_statistics",
    "tech_advances",
]
