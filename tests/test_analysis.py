"""
Tests for StateLogger, trajectory metrics and display formatting.
"""

import math

import pytest

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
    mean_wars,
    peak_population,
    summary_statistics,
    tech_advances,
)
from popsim.core.state import SimulationState
from popsim.core.technology import TECHNOLOGY_LADDER
from popsim.simulation.engine import SimulationEngine
from popsim.simulation.runner import SimulationRunner
from popsim.simulation.speed import SpeedMode

YEAR = 31_536_000


def _state(tick, population=100, tech_level=0, wars=0, factor=1.0):
    return SimulationState(
        population=population,
        birth_rate=2.1,
        death_rate=1.8,
        tech_level=tech_level,
        carrying_capacity=TECHNOLOGY_LADDER[tech_level].capacity,
        wars_count=wars,
        overpopulation_factor=factor,
        tick=tick,
    )


# --------------------------------------------------------------------------- #
# StateLogger                                                                  #
# --------------------------------------------------------------------------- #


def test_state_logger_records_via_hook(scripted):
    log = StateLogger()
    engine = SimulationEngine(rng=scripted(), post_step_hooks=[log.hook])
    SimulationRunner(engine, speed_mode=SpeedMode.YEAR).run(5)

    assert len(log) == 5
    assert [s.tick for s in log.records()] == [1, 2, 3, 4, 5]
    assert log.records()[-1] is engine.state


def test_state_logger_fifo_eviction():
    log = StateLogger(max_records=3)
    for t in range(6):
        log.record(_state(t))
    assert [s.tick for s in log.records()] == [3, 4, 5]


def test_state_logger_series_and_dicts():
    log = StateLogger()
    log.record(_state(1, population=10))
    log.record(_state(2, population=12))

    series = log.series()
    assert series["population"] == [10, 12]
    assert series["tech_level"] == [0, 0]
    assert series["tick"] == [1, 2]
    assert series["carrying_capacity"] == [1_000, 1_000]
    assert log.to_dicts()[1]["population"] == 12

    log.clear()
    assert len(log) == 0


def test_state_logger_rejects_bad_limit():
    with pytest.raises(ValueError):
        StateLogger(max_records=0)


# --------------------------------------------------------------------------- #
# Metrics                                                                      #
# --------------------------------------------------------------------------- #


def test_metrics_over_trajectory():
    trajectory = [
        _state(0, population=100),
        _state(1, population=150, wars=2, factor=1.0),
        _state(2, population=400, tech_level=1, wars=4, factor=1.5),
        _state(3, population=300, tech_level=1, wars=0),
        _state(4, population=320, tech_level=2, wars=0),
    ]
    assert peak_population(trajectory) == 400
    assert mean_wars(trajectory) == pytest.approx(1.5)
    assert max_overpopulation(trajectory) == pytest.approx(1.5)
    assert tech_advances(trajectory) == [(2, 1), (4, 2)]

    summary = summary_statistics(trajectory)
    assert summary["n_ticks"] == 4
    assert summary["initial_population"] == 100
    assert summary["final_population"] == 320
    assert summary["final_tech_level"] == 2
    assert summary["final_technology"] == "Bronze working"
    assert summary["tech_advances"] == 2
    assert summary["extinct"] is False


def test_metrics_on_empty_trajectory():
    summary = summary_statistics([])
    assert summary["n_ticks"] == 0
    assert summary["peak_population"] == 0
    assert summary["mean_wars"] == 0.0
    assert summary["max_overpopulation"] == 1.0


# --------------------------------------------------------------------------- #
# Formatting                                                                   #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize("population,expected", [
    (0, "0"),
    (999, "999"),
    (1_000, "1.0K"),
    (1_500, "1.5K"),
    (2_345_678, "2.3M"),
    (1_000_000_000, "1.0B"),
    (3_200_000_000_000, "3.2T"),
])
def test_format_population(population, expected):
    assert format_population(population) == expected


@pytest.mark.parametrize("seconds,expected", [
    (0, "0s"),
    (45, "45s"),
    (3_600 * 2 + 60 * 5, "2h 5m"),
    (86_400 * 3 + 3_600 * 4, "3 days, 4 hours"),
    (YEAR * 3 + 86_400 * 12, "3 years, 12 days"),
    (YEAR * 500, "500 years, 0 days"),
])
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected


@pytest.mark.parametrize("bad", [-1.0, math.nan, math.inf])
def test_format_elapsed_rejects_invalid(bad):
    with pytest.raises(ValueError):
        format_elapsed(bad)


def test_growth_direction_and_trend():
    assert growth_direction(0.3) is GrowthDirection.GROWTH
    assert growth_direction(-0.01) is GrowthDirection.DECLINE
    assert growth_direction(0.0) is GrowthDirection.STABLE

    assert growth_trend(0.6) is GrowthTrend.RISING
    assert growth_trend(0.5) is GrowthTrend.STABLE
    assert growth_trend(-0.5) is GrowthTrend.STABLE
    assert growth_trend(-0.6) is GrowthTrend.FALLING


def test_describe_state():
    text = describe_state(SimulationState.initial())
    assert "pop 100" in text
    assert "growth +0.30%" in text
    assert "Stone tools" in text
