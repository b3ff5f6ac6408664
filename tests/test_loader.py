"""
Tests for YAML scenario discovery and loading.
"""

import pytest

from popsim.loader import build_scenario, find_scenario, list_scenarios, load_scenario
from popsim.simulation.speed import SpeedMode

YEAR = 31_536_000


def test_packaged_scenarios_are_listed():
    names = {s["name"] for s in list_scenarios()}
    assert {"default", "long_march", "crowded_valley"} <= names


def test_load_default_by_name():
    scenario = load_scenario("default")
    assert scenario.name == "default"
    assert scenario.speed_mode is SpeedMode.YEAR
    assert scenario.ticks == 1000
    assert scenario.params.seed is None
    assert scenario.initial_state.population == 100
    assert scenario.initial_state.tech_level == 0
    assert scenario.path == find_scenario("default")


def test_load_schedule_and_overrides():
    march = load_scenario("long_march")
    assert march.params.seed == 2024
    assert march.speed_mode is SpeedMode.DECADE
    assert march.speed_schedule == {150: SpeedMode.CENTURY}

    valley = load_scenario("crowded_valley")
    assert valley.initial_state.population == 20_000
    assert valley.params.initial_population == 20_000


def test_load_from_path(tmp_path):
    path = tmp_path / "island.yaml"
    path.write_text(
        "speed_mode: 6\n"
        "ticks: 12\n"
        "seed: 3\n"
        "parameters:\n"
        "  base_birth_rate: 2.5\n"
        "initial_state:\n"
        "  population: 40\n"
        "  elapsed_years: 1200\n"
    )
    scenario = load_scenario(path)
    assert scenario.name == "island"
    assert scenario.speed_mode is SpeedMode.CENTURY
    assert scenario.ticks == 12
    assert scenario.params.base_birth_rate == 2.5
    assert scenario.initial_state.population == 40
    assert scenario.initial_state.elapsed_sim_time == pytest.approx(1200 * YEAR)
    assert scenario.initial_state.tech_level == 2
    assert scenario.initial_state.carrying_capacity == 15_000


def test_missing_scenario():
    with pytest.raises(FileNotFoundError):
        load_scenario("no_such_scenario")
    with pytest.raises(FileNotFoundError):
        load_scenario("missing/dir/file.yaml")


@pytest.mark.parametrize("raw,match", [
    ({"warp": 1}, "Unknown scenario keys"),
    ({"initial_state": {"tech_level": 3}}, "Unknown initial_state keys"),
    ({"parameters": {"gravity": 9.8}}, "Unknown SimulationParameters"),
    ({"speed_mode": "ludicrous"}, "speed_mode"),
    ({"speed_schedule": {10: 99}}, "speed_schedule"),
    ({"ticks": -5}, "ticks"),
    ({"initial_state": {"elapsed_years": -1}}, "elapsed_years"),
    ({"parameters": [1, 2]}, "mapping"),
    ({"ticks": None}, "ticks"),
    ({"ticks": "many"}, "ticks"),
    ({"seed": "lucky"}, "seed"),
    ({"initial_state": {"population": None}}, "population"),
    ({"initial_state": {"elapsed_years": "ages"}}, "elapsed_years"),
    ({"parameters": {"stress_scale": "abc"}}, "parameters"),
    ({"speed_schedule": {"soon": "century"}}, "speed_schedule"),
])
def test_invalid_scenarios_rejected(raw, match):
    with pytest.raises(ValueError, match=match):
        build_scenario(raw)


def test_malformed_yaml_rejected(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("name: [unclosed\n")
    with pytest.raises(ValueError, match="Malformed scenario YAML"):
        load_scenario(path)


def test_build_scenario_defaults():
    scenario = build_scenario({})
    assert scenario.name == "unnamed"
    assert scenario.speed_mode is SpeedMode.YEAR
    assert scenario.ticks == 1000
    assert scenario.speed_schedule == {}
