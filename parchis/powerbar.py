"""Power bar of a player."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class PowerBar:
    """Accumulated power, capped at MAX_POWER."""

    power: int = 0
    MAX_POWER: ClassVar[int] = 100

    def increase(self, amount: int) -> None:
        """Add ``amount`` to the bar without exceeding the maximum."""
        self.power = min(self.power + amount, self.MAX_POWER)

    def empty(self) -> None:
        """Drain the bar."""
        self.power = 0