"""
Tests for SimulationParameters, the technology ladder and SimulationState.
"""

import math

import pytest

from popsim.core.parameters import SECONDS_PER_YEAR, SimulationParameters
from popsim.core.state import SimulationState
from popsim.core.technology import (
    MAX_TECH_LEVEL,
    TECHNOLOGY_LADDER,
    get_tier,
    tech_level_for_time,
)


# --------------------------------------------------------------------------- #
# Parameters                                                                   #
# --------------------------------------------------------------------------- #


def test_default_parameters():
    """Defaults reproduce the reference model constants."""
    p = SimulationParameters()
    assert p.base_birth_rate == 2.1
    assert p.base_death_rate == 1.8
    assert p.seconds_per_year == 31_536_000
    assert p.years_per_tech_tier == 500
    assert p.max_random_wars == 5
    assert p.population_per_war == 10_000
    assert p.war_mortality_per_war == 0.5
    assert p.rate_variation == 0.2
    assert p.min_rate == 0.1
    assert p.max_change_per_tick == 0.1
    assert p.critical_population == 10
    assert p.initial_population == 100
    assert p.seed is None
    assert p.seconds_per_tech_tier == 500 * SECONDS_PER_YEAR


@pytest.mark.parametrize("field,value", [
    ("min_rate", 0.0),
    ("seconds_per_year", -1.0),
    ("population_per_war", 0),
    ("rate_variation", -0.1),
    ("initial_population", 0),
    ("max_change_per_tick", 1.0),
    ("max_change_per_tick", 0.0),
    ("base_birth_rate", math.nan),
    ("seed", -3),
])
def test_invalid_parameters_rejected(field, value):
    with pytest.raises(ValueError):
        SimulationParameters(**{field: value})


def test_parameters_copy_with_and_round_trip():
    p = SimulationParameters().copy_with(seed=9, war_mortality_per_war=1.0)
    assert p.seed == 9
    assert p.war_mortality_per_war == 1.0
    assert SimulationParameters.from_dict(p.to_dict()) == p


def test_parameters_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unknown"):
        SimulationParameters.from_dict({"warp_speed": 9})


# --------------------------------------------------------------------------- #
# Technology ladder                                                            #
# --------------------------------------------------------------------------- #


def test_ladder_shape():
    """Twelve tiers, levels equal to indices, capacities strictly increasing."""
    assert len(TECHNOLOGY_LADDER) == 12
    assert MAX_TECH_LEVEL == 11
    for i, tier in enumerate(TECHNOLOGY_LADDER):
        assert tier.level == i
    capacities = [t.capacity for t in TECHNOLOGY_LADDER]
    assert capacities == sorted(capacities)
    assert len(set(capacities)) == len(capacities)


def test_ladder_endpoints():
    assert TECHNOLOGY_LADDER[0].name == "Stone tools"
    assert TECHNOLOGY_LADDER[0].capacity == 1_000
    assert TECHNOLOGY_LADDER[1].name == "Agriculture"
    assert TECHNOLOGY_LADDER[1].capacity == 5_000
    assert TECHNOLOGY_LADDER[-1].name == "AI & robotics"
    assert TECHNOLOGY_LADDER[-1].capacity == 100_000_000


def test_get_tier_bounds():
    assert get_tier(0) is TECHNOLOGY_LADDER[0]
    with pytest.raises(ValueError):
        get_tier(-1)
    with pytest.raises(ValueError):
        get_tier(12)


def test_tech_level_for_time(params):
    tier = params.seconds_per_tech_tier
    assert tech_level_for_time(0.0, params) == 0
    assert tech_level_for_time(tier - 1, params) == 0
    assert tech_level_for_time(tier, params) == 1
    assert tech_level_for_time(5.5 * tier, params) == 5
    assert tech_level_for_time(1_000 * tier, params) == MAX_TECH_LEVEL


# --------------------------------------------------------------------------- #
# State                                                                        #
# --------------------------------------------------------------------------- #


def test_initial_state_matches_defaults():
    s = SimulationState.initial()
    assert s.population == 100
    assert s.birth_rate == 2.1
    assert s.death_rate == 1.8
    assert s.tech_level == 0
    assert s.elapsed_sim_time == 0.0
    assert s.wars_count == 0
    assert s.overpopulation_factor == 1.0
    assert s.carrying_capacity == 1_000
    assert s.growth_factor == 1.0
    assert s.tick == 0
    assert not s.is_extinct


def test_initial_state_uses_parameter_population():
    s = SimulationState.initial(SimulationParameters(initial_population=2_500))
    assert s.population == 2_500


@pytest.mark.parametrize("kwargs", [
    {"population": -1},
    {"elapsed_sim_time": -5.0},
    {"tech_level": 12},
    {"carrying_capacity": 0},
    {"tech_level": 3, "carrying_capacity": 7},
    {"tech_level": 3},
    {"carrying_capacity": 5_000},
    {"wars_count": -2},
    {"overpopulation_factor": 0.5},
    {"birth_rate": math.inf},
    {"tick": -1},
])
def test_invalid_state_rejected(kwargs):
    base = {"population": 100, "birth_rate": 2.1, "death_rate": 1.8}
    base.update(kwargs)
    with pytest.raises(ValueError):
        SimulationState(**base)


def test_capacity_follows_tech_level():
    """Capacity is derived from the tier and cannot drift on its own."""
    s = SimulationState.initial()
    with pytest.raises(ValueError, match="carrying_capacity"):
        s.copy_with(tech_level=3)
    with pytest.raises(ValueError, match="carrying_capacity"):
        SimulationState.from_dict({**s.to_dict(), "carrying_capacity": 7})

    advanced = s.copy_with(tech_level=3, carrying_capacity=TECHNOLOGY_LADDER[3].capacity)
    assert advanced.carrying_capacity == 40_000


def test_state_is_immutable():
    s = SimulationState.initial()
    with pytest.raises(AttributeError):
        s.population = 5  # type: ignore[misc]


def test_state_helpers():
    s = SimulationState.initial().copy_with(
        population=0, birth_rate=1.0, death_rate=3.0,
        elapsed_sim_time=2 * SECONDS_PER_YEAR,
    )
    assert s.is_extinct
    assert s.net_growth_rate == pytest.approx(-2.0)
    assert s.elapsed_years == pytest.approx(2.0)
    assert s.technology_name == "Stone tools"
    assert SimulationState.from_dict(s.to_dict()) == s
