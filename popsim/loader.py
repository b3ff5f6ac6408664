"""
Scenario loader for popsim.

Loads YAML scenario files and converts them to the objects the engine and
runner consume.

Scenario format:

    name: stone_age
    description: Default start, one simulated year per tick.
    speed_mode: year            # id 1–8 or name
    ticks: 1000
    seed: 7                     # optional
    parameters:                 # optional SimulationParameters overrides
      war_mortality_per_war: 0.5
    initial_state:              # optional
      population: 100           # becomes parameters.initial_population
      elapsed_years: 0
    speed_schedule:             # optional: engine tick → speed mode
      500: century

Public API:
    find_scenario(name)       -> Path
    list_scenarios()          -> list of {"name", "path"} dicts
    load_scenario(path_or_name) -> Scenario
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .core.parameters import SimulationParameters
from .core.state import SimulationState
from .core.technology import get_tier, tech_level_for_time
from .simulation.speed import SpeedMode

logger = logging.getLogger("popsim.loader")

_PACKAGE_SCENARIOS = Path(__file__).resolve().parent / "scenarios"

_TOP_LEVEL_KEYS = {
    "name",
    "description",
    "speed_mode",
    "ticks",
    "seed",
    "parameters",
    "initial_state",
    "speed_schedule",
}
_INITIAL_STATE_KEYS = {"population", "elapsed_years"}


# ─────────────────────────────────────────────────────────────────────────── #
# Scenario container                                                           #
# ─────────────────────────────────────────────────────────────────────────── #

@dataclass(frozen=True)
class Scenario:
    """A fully validated scenario.

    Attributes:
        name:           Scenario name.
        description:    Free text.
        params:         Simulation parameters (seed included).
        initial_state:  State the run starts from.
        speed_mode:     Initial speed mode.
        ticks:          Number of ticks to run.
        speed_schedule: Engine tick count → speed mode.
        path:           Source file, if loaded from disk.
    """

    name: str
    description: str
    params: SimulationParameters
    initial_state: SimulationState
    speed_mode: SpeedMode = SpeedMode.YEAR
    ticks: int = 1000
    speed_schedule: Dict[int, SpeedMode] = field(default_factory=dict)
    path: Optional[Path] = None


# ─────────────────────────────────────────────────────────────────────────── #
# Discovery                                                                    #
# ─────────────────────────────────────────────────────────────────────────── #

def _scenario_search_paths() -> List[Path]:
    """Packaged scenarios first, then ./scenarios in the working directory."""
    paths = [_PACKAGE_SCENARIOS, Path.cwd() / "scenarios"]
    seen = set()
    result = []
    for p in paths:
        key = str(p.resolve())
        if key not in seen:
            seen.add(key)
            result.append(p)
    return result


def find_scenario(name: str) -> Path:
    """Locate a scenario YAML by name (without extension).

    Raises:
        FileNotFoundError: If no matching scenario found.
    """
    candidates = []
    for search_dir in _scenario_search_paths():
        for ext in (".yaml", ".yml"):
            candidate = search_dir / f"{name}{ext}"
            candidates.append(candidate)
            if candidate.exists():
                return candidate

    raise FileNotFoundError(
        f"Scenario '{name}' not found. Searched:\n"
        + "\n".join(f"  - {c}" for c in candidates)
    )


def list_scenarios() -> List[Dict[str, str]]:
    """List all available scenarios as dicts with 'name' and 'path' keys."""
    scenarios = []
    seen = set()
    for search_dir in _scenario_search_paths():
        if not search_dir.exists():
            continue
        for f in sorted(search_dir.glob("*.yaml")) + sorted(search_dir.glob("*.yml")):
            if f.stem not in seen:
                seen.add(f.stem)
                scenarios.append({"name": f.stem, "path": str(f)})
    return scenarios


# ─────────────────────────────────────────────────────────────────────────── #
# Parsing                                                                      #
# ─────────────────────────────────────────────────────────────────────────── #

def _require_mapping(value: Any, what: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _to_int(value: Any, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{what} must be an integer, got {value!r}") from exc


def _to_float(value: Any, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{what} must be a number, got {value!r}") from exc


def _parse_speed(value: Any, what: str) -> SpeedMode:
    try:
        return SpeedMode.from_id(value)
    except ValueError as exc:
        raise ValueError(f"{what}: {exc}") from None


def build_scenario(raw: Dict[str, Any], path: Optional[Path] = None) -> Scenario:
    """Validate a raw scenario mapping and build a Scenario.

    Raises:
        ValueError: On unknown keys or invalid values.
    """
    raw = _require_mapping(raw, "Scenario")
    unknown = set(raw) - _TOP_LEVEL_KEYS
    if unknown:
        raise ValueError(f"Unknown scenario keys: {sorted(unknown)}")

    name = str(raw.get("name") or (path.stem if path else "unnamed"))

    overrides = dict(_require_mapping(raw.get("parameters"), "'parameters'"))
    initial = _require_mapping(raw.get("initial_state"), "'initial_state'")
    unknown = set(initial) - _INITIAL_STATE_KEYS
    if unknown:
        raise ValueError(f"Unknown initial_state keys: {sorted(unknown)}")

    if "population" in initial:
        overrides["initial_population"] = _to_int(
            initial["population"], "initial_state.population"
        )
    if raw.get("seed") is not None:
        overrides["seed"] = _to_int(raw["seed"], "seed")
    try:
        params = SimulationParameters.from_dict(overrides)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid 'parameters': {exc}") from exc

    state = SimulationState.initial(params)
    elapsed_years = _to_float(
        initial.get("elapsed_years", 0.0), "initial_state.elapsed_years"
    )
    if elapsed_years < 0:
        raise ValueError(f"initial_state.elapsed_years must be >= 0, got {elapsed_years}")
    if elapsed_years > 0:
        elapsed = elapsed_years * params.seconds_per_year
        level = tech_level_for_time(elapsed, params)
        state = state.copy_with(
            elapsed_sim_time=elapsed,
            tech_level=level,
            carrying_capacity=get_tier(level).capacity,
        )

    ticks = _to_int(raw.get("ticks", 1000), "ticks")
    if ticks < 0:
        raise ValueError(f"ticks must be >= 0, got {ticks}")

    schedule = {
        _to_int(t, "speed_schedule tick"): _parse_speed(m, f"speed_schedule[{t}]")
        for t, m in _require_mapping(raw.get("speed_schedule"), "'speed_schedule'").items()
    }

    return Scenario(
        name=name,
        description=str(raw.get("description", "")).strip(),
        params=params,
        initial_state=state,
        speed_mode=_parse_speed(raw.get("speed_mode", SpeedMode.YEAR), "speed_mode"),
        ticks=ticks,
        speed_schedule=schedule,
        path=path,
    )


def load_scenario(path_or_name: Union[str, Path]) -> Scenario:
    """Load a scenario from a YAML path or a discoverable scenario name.

    Raises:
        FileNotFoundError: If the file cannot be found.
        ValueError:        If the YAML content is invalid.
    """
    path = Path(path_or_name)
    if not path.exists():
        if path.suffix in (".yaml", ".yml") or path.parent != Path("."):
            raise FileNotFoundError(f"Scenario not found: {path.resolve()}")
        path = find_scenario(str(path_or_name))

    with open(path, "r") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ValueError(f"Malformed scenario YAML in {path}: {exc}") from exc

    scenario = build_scenario(raw, path=path)
    logger.info(f"Loaded scenario '{scenario.name}' from {path}")
    return scenario
