"""
Trajectory recorder.

A run is a sequence of immutable SimulationState snapshots.  StateLogger
keeps them as they are produced so a driver can dump the trajectory to JSON
or pull per-field series (population, rates, tech level...) for summaries,
without holding the engine itself.

Attach it as a post-step hook:

    trajectory = StateLogger(max_records=10_000)
    engine.register_post_hook(trajectory.hook)

With ``max_records`` set, only the most recent ticks are kept.
"""

from __future__ import annotations

from collections import deque
from dataclasses import fields
from typing import Any, Deque, Dict, List, Optional

from ..core.state import SimulationState

# Every numeric field of a snapshot is exported as a series; tick is the index.
_SERIES_FIELDS = tuple(f.name for f in fields(SimulationState) if f.name != "tick")


class StateLogger:
    """Bounded in-memory trajectory of SimulationState snapshots.

    Attributes:
        max_records: Number of most recent snapshots kept (None = all).
    """

    def __init__(self, max_records: Optional[int] = None) -> None:
        if max_records is not None and max_records <= 0:
            raise ValueError(
                f"max_records must be > 0 or None, got {max_records}"
            )
        self.max_records: Optional[int] = max_records
        self._trajectory: Deque[SimulationState] = deque(maxlen=max_records)

    def record(self, state: SimulationState) -> None:
        self._trajectory.append(state)

    def hook(self, state_before: SimulationState, state_after: SimulationState) -> None:
        """Engine post-step hook: keep the state the tick produced."""
        self.record(state_after)

    def records(self) -> List[SimulationState]:
        """Snapshots in tick order, as a new list."""
        return list(self._trajectory)

    def clear(self) -> None:
        self._trajectory.clear()

    def __len__(self) -> int:
        return len(self._trajectory)

    def to_dicts(self) -> List[Dict[str, Any]]:
        """JSON-ready rows, one per recorded tick."""
        return [s.to_dict() for s in self._trajectory]

    def series(self) -> Dict[str, List[Any]]:
        """Per-field columns keyed by field name, plus ``tick``."""
        columns: Dict[str, List[Any]] = {
            "tick": [s.tick for s in self._trajectory]
        }
        for name in _SERIES_FIELDS:
            columns[name] = [getattr(s, name) for s in self._trajectory]
        return columns
