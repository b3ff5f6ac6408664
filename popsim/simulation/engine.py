"""
Stateful simulation engine.

The engine owns the single SimulationState of a run and exposes:
  - step(elapsed_sim_seconds)  - apply one tick
  - reset()                    - restore the initial state
  - state                      - read-only snapshot of the current state

Data flow:
    Driver → step(multiplier) → pre hooks → integrator.step → post hooks
    → engine.state replaced in one assignment

The engine is not reentrant: the driver must serialise calls.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import numpy as np

from ..core.integrator import step as integrate_step
from ..core.integrator import validate_sim_seconds
from ..core.parameters import SimulationParameters
from ..core.state import SimulationState
from ..core.technology import get_tier

logger = logging.getLogger("popsim.engine")

# Type alias for pre/post-step hooks:  hook(state_before, state_after) -> None
StepHook = Callable[[SimulationState, SimulationState], None]


class SimulationEngine:
    """Owns the simulation state and applies ticks to it.

    Attributes:
        params: Simulation parameters used for every tick.
    """

    def __init__(
        self,
        params: Optional[SimulationParameters] = None,
        rng: Optional[np.random.Generator] = None,
        initial_state: Optional[SimulationState] = None,
        pre_step_hooks: Optional[List[StepHook]] = None,
        post_step_hooks: Optional[List[StepHook]] = None,
    ) -> None:
        """Initialise the engine.

        Args:
            params:          Simulation parameters (defaults to SimulationParameters()).
            rng:             Random source.  Defaults to default_rng(params.seed).
            initial_state:   Starting state; defaults to SimulationState.initial().
                             reset() always returns to SimulationState.initial().
            pre_step_hooks:  Callables invoked with (state_before, state_before)
                             before each applied tick.
            post_step_hooks: Callables invoked with (state_before, state_after)
                             after each applied tick.
        """
        self.params: SimulationParameters = (
            params if params is not None else SimulationParameters()
        )
        self._rng = rng if rng is not None else np.random.default_rng(self.params.seed)
        self._pre_hooks: List[StepHook] = list(pre_step_hooks or [])
        self._post_hooks: List[StepHook] = list(post_step_hooks or [])
        self._state: SimulationState = (
            initial_state
            if initial_state is not None
            else SimulationState.initial(self.params)
        )

    # ------------------------------------------------------------------ #
    # Operations                                                           #
    # ------------------------------------------------------------------ #

    def step(self, elapsed_sim_seconds: float) -> SimulationState:
        """Advance the simulation by one tick.

        An extinct population is terminal: the call is a no-op and hooks
        are not fired.

        Args:
            elapsed_sim_seconds: Simulated time since the previous tick (> 0).

        Returns:
            The current state after the tick.

        Raises:
            ValueError: If elapsed_sim_seconds is not finite and > 0.  The
                        state is left untouched.
        """
        try:
            dt = validate_sim_seconds(elapsed_sim_seconds)
        except ValueError:
            logger.warning(f"Rejected tick with elapsed_sim_seconds={elapsed_sim_seconds!r}")
            raise

        state_before = self._state
        if state_before.is_extinct:
            logger.debug("Population extinct; tick ignored")
            return state_before

        for hook in self._pre_hooks:
            hook(state_before, state_before)

        state_after = integrate_step(state_before, dt, self.params, self._rng)

        if state_after.tech_level > state_before.tech_level:
            tier = get_tier(state_after.tech_level)
            logger.info(
                f"Technology advanced to {tier.name} (level {tier.level}) "
                f"at tick {state_after.tick}; carrying capacity {tier.capacity}"
            )
        logger.debug(
            f"tick={state_after.tick} pop={state_after.population} "
            f"birth={state_after.birth_rate:.3f} death={state_after.death_rate:.3f} "
            f"wars={state_after.wars_count} g={state_after.growth_factor:.6f}"
        )

        self._state = state_after

        for hook in self._post_hooks:
            hook(state_before, state_after)

        return self._state

    def reset(self) -> SimulationState:
        """Restore the initial state.  Idempotent.

        Returns:
            The freshly initialised state.
        """
        self._state = SimulationState.initial(self.params)
        logger.info(f"Simulation reset to population {self._state.population}")
        return self._state

    # ------------------------------------------------------------------ #
    # State access                                                         #
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> SimulationState:
        """Current immutable state snapshot."""
        return self._state

    @property
    def is_alive(self) -> bool:
        return not self._state.is_extinct

    def register_pre_hook(self, hook: StepHook) -> None:
        """Add a pre-step callback.

        Args:
            hook: Callable(state_before, state_before) → None.
        """
        self._pre_hooks.append(hook)

    def register_post_hook(self, hook: StepHook) -> None:
        """Add a post-step callback.

        Args:
            hook: Callable(state_before, state_after) → None.
        """
        self._post_hooks.append(hook)
