"""
Speed modes: how much simulated time one real second represents.

The engine never chooses a speed: the driver picks a mode and passes its
multiplier to ``step`` on every tick.
"""

from __future__ import annotations

from enum import IntEnum, unique
from typing import Dict, Tuple, Union

from ..core.parameters import SECONDS_PER_YEAR

_DAY = 86_400


@unique
class SpeedMode(IntEnum):
    """Time-acceleration modes, ids 1–8."""

    REAL_TIME = 1
    DAY = 2
    MONTH = 3
    YEAR = 4
    DECADE = 5
    CENTURY = 6
    MILLENNIUM = 7
    TEN_MILLENNIA = 8

    @property
    def multiplier(self) -> int:
        """Simulated seconds per real second."""
        return _SPEED_TABLE[self][0]

    @property
    def label(self) -> str:
        return _SPEED_TABLE[self][1]

    @property
    def unit(self) -> str:
        return _SPEED_TABLE[self][2]

    @classmethod
    def from_id(cls, mode: Union[int, str, "SpeedMode"]) -> "SpeedMode":
        """Resolve a mode from its id (1–8) or name (case-insensitive).

        Raises:
            ValueError: If no mode matches.
        """
        if isinstance(mode, cls):
            return mode
        if isinstance(mode, str):
            key = mode.strip().upper().replace("-", "_")
            if key.isdigit():
                return cls.from_id(int(key))
            try:
                return cls[key]
            except KeyError:
                raise ValueError(
                    f"Unknown speed mode {mode!r}. "
                    f"Available: {[m.name.lower() for m in cls]}"
                ) from None
        try:
            return cls(mode)
        except ValueError:
            raise ValueError(
                f"Speed mode id must be in [1, {len(cls)}], got {mode!r}"
            ) from None


# mode → (multiplier, label, unit)
_SPEED_TABLE: Dict[SpeedMode, Tuple[int, str, str]] = {
    SpeedMode.REAL_TIME:     (1,                         "Real time",        "s"),
    SpeedMode.DAY:           (_DAY,                      "1 day/s",          "days"),
    SpeedMode.MONTH:         (30 * _DAY,                 "1 month/s",        "months"),
    SpeedMode.YEAR:          (SECONDS_PER_YEAR,          "1 year/s",         "years"),
    SpeedMode.DECADE:        (10 * SECONDS_PER_YEAR,     "10 years/s",       "decades"),
    SpeedMode.CENTURY:       (100 * SECONDS_PER_YEAR,    "100 years/s",      "centuries"),
    SpeedMode.MILLENNIUM:    (1_000 * SECONDS_PER_YEAR,  "1000 years/s",     "millennia"),
    SpeedMode.TEN_MILLENNIA: (10_000 * SECONDS_PER_YEAR, "10000 years/s",    "10k years"),
}
