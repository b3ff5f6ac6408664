"""
Simulation runner.

Provides SimulationRunner, a headless driver that owns the active speed
mode and the running/paused flag, calls ``engine.step(multiplier)`` once per
tick, and collects the trajectory.

Usage:
    from popsim.simulation.engine import SimulationEngine
    from popsim.simulation.runner import SimulationRunner
    from popsim.simulation.speed import SpeedMode

    runner = SimulationRunner(SimulationEngine(), speed_mode=SpeedMode.CENTURY)
    trajectory = runner.run(n_ticks=200)

With ``realtime=True`` each tick is paced to ``tick_interval`` wall-clock
seconds, reproducing the one-tick-per-second cadence of an interactive
front end.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Union

from ..core.state import SimulationState
from .engine import SimulationEngine
from .speed import SpeedMode

logger = logging.getLogger("popsim.runner")

SpeedLike = Union[int, str, SpeedMode]


class SimulationRunner:
    """Drives a SimulationEngine at a fixed cadence.

    The speed mode may be changed between ticks (directly, from a hook, or
    through ``speed_schedule``); a change takes effect on the next tick.

    Attributes:
        engine:             The engine being driven.
        tick_interval:      Wall-clock seconds per tick when pacing.
        realtime:           Whether to pace ticks to tick_interval.
        stop_on_extinction: Halt a run once the population is extinct.
    """

    def __init__(
        self,
        engine: Optional[SimulationEngine] = None,
        speed_mode: SpeedLike = SpeedMode.REAL_TIME,
        tick_interval: float = 1.0,
        realtime: bool = False,
        stop_on_extinction: bool = True,
        speed_schedule: Optional[Dict[int, SpeedLike]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialise the runner.

        Args:
            engine:             Engine to drive (defaults to SimulationEngine()).
            speed_mode:         Initial speed mode (id, name or SpeedMode).
            tick_interval:      Wall-clock seconds per tick (> 0).
            realtime:           If True, sleep so each tick lasts tick_interval.
            stop_on_extinction: If True, halt when the population is extinct.
            speed_schedule:     Mapping engine tick count → speed mode, applied
                                before the tick that follows that count.
            clock:              Monotonic clock used for pacing.
            sleep:              Sleep function used for pacing.
        """
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be > 0, got {tick_interval}")
        self.engine: SimulationEngine = (
            engine if engine is not None else SimulationEngine()
        )
        self.tick_interval: float = tick_interval
        self.realtime: bool = realtime
        self.stop_on_extinction: bool = stop_on_extinction
        self._speed_mode: SpeedMode = SpeedMode.from_id(speed_mode)
        self._schedule: Dict[int, SpeedMode] = {
            int(t): SpeedMode.from_id(m) for t, m in (speed_schedule or {}).items()
        }
        for t in self._schedule:
            if t < 0:
                raise ValueError(f"speed_schedule ticks must be >= 0, got {t}")
        self._clock = clock
        self._sleep = sleep
        self._running: bool = False

    # ------------------------------------------------------------------ #
    # Speed                                                                #
    # ------------------------------------------------------------------ #

    @property
    def speed_mode(self) -> SpeedMode:
        return self._speed_mode

    def set_speed_mode(self, mode: SpeedLike) -> None:
        """Select the speed mode used from the next tick on."""
        new_mode = SpeedMode.from_id(mode)
        if new_mode != self._speed_mode:
            logger.info(f"Speed mode changed to {new_mode.label}")
        self._speed_mode = new_mode

    # ------------------------------------------------------------------ #
    # Run / pause / reset                                                  #
    # ------------------------------------------------------------------ #

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True

    def pause(self) -> None:
        self._running = False

    def toggle(self) -> bool:
        """Flip between running and paused; return the new running flag."""
        self._running = not self._running
        return self._running

    def reset(self) -> SimulationState:
        """Pause the run and restore the engine's initial state."""
        self._running = False
        return self.engine.reset()

    # ------------------------------------------------------------------ #
    # Ticking                                                              #
    # ------------------------------------------------------------------ #

    def tick(self) -> SimulationState:
        """Apply one tick at the active speed, honouring the schedule."""
        scheduled = self._schedule.get(self.engine.state.tick)
        if scheduled is not None:
            self.set_speed_mode(scheduled)
        return self.engine.step(self._speed_mode.multiplier)

    def _should_stop(self) -> bool:
        if not self._running:
            return True
        return self.stop_on_extinction and not self.engine.is_alive

    def _paced_tick(self) -> SimulationState:
        started = self._clock()
        state = self.tick()
        if self.realtime:
            remaining = self.tick_interval - (self._clock() - started)
            if remaining > 0:
                self._sleep(remaining)
        return state

    def run(self, n_ticks: int) -> List[SimulationState]:
        """Run up to ``n_ticks`` ticks and return the full trajectory.

        The run stops early if a hook pauses the runner or, with
        stop_on_extinction, when the population is extinct.

        Args:
            n_ticks: Maximum number of ticks (>= 0).

        Returns:
            Ordered list of states including the starting state.
        """
        if n_ticks < 0:
            raise ValueError(f"n_ticks must be >= 0, got {n_ticks}")

        trajectory: List[SimulationState] = [self.engine.state]
        self.start()
        try:
            for _ in range(n_ticks):
                if self._should_stop():
                    break
                trajectory.append(self._paced_tick())
        finally:
            self.pause()

        logger.info(
            f"Run finished after {len(trajectory) - 1} ticks: "
            f"population {self.engine.state.population}"
        )
        return trajectory

    def run_headless(self, n_ticks: int) -> SimulationState:
        """Run and return only the final state (no trajectory stored).

        Args:
            n_ticks: Maximum number of ticks (>= 0).

        Returns:
            Final SimulationState.
        """
        if n_ticks < 0:
            raise ValueError(f"n_ticks must be >= 0, got {n_ticks}")

        self.start()
        try:
            for _ in range(n_ticks):
                if self._should_stop():
                    break
                self._paced_tick()
        finally:
            self.pause()
        return self.engine.state
