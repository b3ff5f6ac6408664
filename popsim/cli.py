"""
Command-line interface for the popsim demographic engine.

Usage:
    python -m popsim.cli [--log-level LEVEL] command [options]

Commands:
    run         Run a scenario (or ad-hoc settings) and print a summary.
    list        List scenarios, speed modes or technology tiers.
    info        Print default simulation parameters.

Examples:
    python -m popsim.cli run default
    python -m popsim.cli run --population 500 --speed century --ticks 400 --seed 1
    python -m popsim.cli run --speed day --ticks 30 --realtime
    python -m popsim.cli list technologies
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .analysis.formatting import describe_state, format_elapsed, format_population
from .analysis.logging import StateLogger
from .analysis.metrics import summary_statistics
from .core.parameters import SimulationParameters
from .core.technology import TECHNOLOGY_LADDER
from .loader import Scenario, build_scenario, list_scenarios, load_scenario
from .simulation.engine import SimulationEngine
from .simulation.runner import SimulationRunner
from .simulation.speed import SpeedMode

logger = logging.getLogger("popsim.cli")


def _build_subparsers(parser: argparse.ArgumentParser) -> None:
    """Register all sub-commands on the root parser."""
    sub = parser.add_subparsers(dest="command")

    # ------------------------------------------------------------------ run --
    run_p = sub.add_parser("run", help="Run a simulation")
    run_p.add_argument(
        "scenario", nargs="?", default=None,
        help="Scenario name or YAML path (default: ad-hoc from flags)"
    )
    run_p.add_argument(
        "--population", type=int, default=None, metavar="N",
        help="Starting population (overrides scenario)"
    )
    run_p.add_argument(
        "--speed", type=str, default=None, metavar="MODE",
        help="Speed mode id (1-8) or name, e.g. 'century' (overrides scenario)"
    )
    run_p.add_argument(
        "--ticks", type=int, default=None, metavar="T",
        help="Number of ticks (overrides scenario)"
    )
    run_p.add_argument(
        "--seed", type=int, default=None, metavar="SEED",
        help="Random seed for a repeatable run (overrides scenario)"
    )
    run_p.add_argument(
        "--realtime", action="store_true",
        help="Pace ticks to one per --interval wall-clock seconds"
    )
    run_p.add_argument(
        "--interval", type=float, default=1.0, metavar="SEC",
        help="Wall-clock seconds per tick with --realtime (default: 1.0)"
    )
    run_p.add_argument(
        "--every", type=int, default=0, metavar="K",
        help="Print a status line every K ticks (default: off)"
    )
    run_p.add_argument(
        "--json", action="store_true",
        help="Output summary statistics as JSON"
    )
    run_p.add_argument(
        "--output", type=str, default=None, metavar="PATH",
        help="Save the recorded trajectory as JSON to this path"
    )

    # ----------------------------------------------------------------- list --
    list_p = sub.add_parser("list", help="List scenarios, speeds or technologies")
    list_p.add_argument("what", choices=["scenarios", "speeds", "technologies"])

    # ----------------------------------------------------------------- info --
    sub.add_parser("info", help="Print default parameters")


def _resolve_scenario(args: argparse.Namespace) -> Scenario:
    """Build the scenario for ``run`` from a file and/or CLI overrides."""
    if args.scenario:
        base = load_scenario(args.scenario)
        raw = {
            "name": base.name,
            "description": base.description,
            "speed_mode": int(base.speed_mode),
            "ticks": base.ticks,
            "seed": base.params.seed,
            "parameters": {
                k: v for k, v in base.params.to_dict().items()
                if k not in ("seed", "initial_population")
            },
            "initial_state": {
                "population": base.params.initial_population,
                "elapsed_years": base.initial_state.elapsed_years,
            },
            "speed_schedule": {t: int(m) for t, m in base.speed_schedule.items()},
        }
        path = base.path
    else:
        raw = {"name": "ad-hoc", "initial_state": {}}
        path = None

    if args.population is not None:
        raw.setdefault("initial_state", {})["population"] = args.population
    if args.speed is not None:
        raw["speed_mode"] = args.speed
    if args.ticks is not None:
        raw["ticks"] = args.ticks
    if args.seed is not None:
        raw["seed"] = args.seed
    return build_scenario(raw, path=path)


def _cmd_run(args: argparse.Namespace) -> None:
    """Execute the run sub-command."""
    scenario = _resolve_scenario(args)

    engine = SimulationEngine(params=scenario.params, initial_state=scenario.initial_state)
    state_log = StateLogger()
    state_log.record(engine.state)
    engine.register_post_hook(state_log.hook)

    if args.every > 0:
        def _report(before, after) -> None:
            if after.tick % args.every == 0:
                print(f"  [{after.tick:>6}] {describe_state(after)}")
        engine.register_post_hook(_report)

    runner = SimulationRunner(
        engine,
        speed_mode=scenario.speed_mode,
        tick_interval=args.interval,
        realtime=args.realtime,
        speed_schedule=scenario.speed_schedule,
    )

    if not args.json:
        print(f"\n  popsim: {scenario.name}")
        print(f"  Speed: {runner.speed_mode.label}, ticks: {scenario.ticks}, "
              f"seed: {scenario.params.seed}")
        print()

    try:
        runner.run_headless(scenario.ticks)
    except KeyboardInterrupt:
        runner.pause()
        logger.warning(f"Interrupted at tick {engine.state.tick}")

    trajectory = state_log.records()
    stats = summary_statistics(trajectory)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(state_log.to_dicts(), f, indent=2)
        if not args.json:
            print(f"  Trajectory saved to {output_path}")

    if args.json:
        print(json.dumps(stats, indent=2))
        return

    final = engine.state
    print(f"  Simulation completed: {stats['n_ticks']} ticks")
    print(f"  Elapsed:            {format_elapsed(final.elapsed_sim_time)}")
    print(f"  Final population:   {format_population(stats['final_population'])}")
    print(f"  Peak population:    {format_population(stats['peak_population'])}")
    print(f"  Technology:         {stats['final_technology']} "
          f"(level {stats['final_tech_level']})")
    print(f"  Mean wars per tick: {stats['mean_wars']:.3f}")
    print(f"  Mean net growth:    {stats['mean_net_growth']:+.3f}%")
    print(f"  Max overpopulation: {stats['max_overpopulation']:.2f}x")


def _cmd_list(args: argparse.Namespace) -> None:
    """Execute the list sub-command."""
    if args.what == "scenarios":
        scenarios = list_scenarios()
        print(f"\n  Available scenarios ({len(scenarios)}):")
        for s in scenarios:
            print(f"    - {s['name']:<20s}  {s['path']}")
    elif args.what == "speeds":
        print("\n  Speed modes:")
        for mode in SpeedMode:
            print(f"    {int(mode)}  {mode.name.lower():<14s} {mode.label:<14s} "
                  f"{mode.multiplier:>15,d} sim s / real s")
    else:
        print("\n  Technology ladder:")
        for tier in TECHNOLOGY_LADDER:
            print(f"    {tier.level:>2}  {tier.name:<20s} "
                  f"birth {tier.birth_bonus:+.1f}  death -{tier.death_reduction:.1f}  "
                  f"capacity {tier.capacity:>12,d}")
    print()


def _cmd_info(_args: argparse.Namespace) -> None:
    """Execute the info sub-command."""
    params = SimulationParameters()
    print("popsim demographic engine")
    print("Default SimulationParameters:")
    for name, value in params.to_dict().items():
        print(f"  {name}: {value}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="popsim",
        description="Tick-driven demographic simulation",
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    _build_subparsers(parser)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.command == "run":
        _cmd_run(args)
    elif args.command == "list":
        _cmd_list(args)
    elif args.command == "info":
        _cmd_info(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
