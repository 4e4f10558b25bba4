"""Stat models for characters and equipment."""
from __future__ import annotations

from dataclasses import dataclass, replace

from questforge.core.types import STAT_NAMES, StatName


@dataclass(frozen=True, slots=True)
class Stats:
    """The six named attributes used by every resolution formula."""

    strength: int = 0
    dexterity: int = 0
    wisdom: int = 0
    charisma: int = 0
    defense: int = 0
    luck: int = 0

    def value(self, stat: StatName) -> int:
        if stat not in STAT_NAMES:
            raise KeyError(stat)
        return getattr(self, stat)

    @property
    def total(self) -> int:
        return sum(self.value(stat) for stat in STAT_NAMES)

    def with_bonus(self, stat: StatName, amount: int) -> "Stats":
        return replace(self, **{stat: self.value(stat) + amount})

    def plus(self, other: "Stats") -> "Stats":
        return Stats(**{stat: self.value(stat) + other.value(stat) for stat in STAT_NAMES})

    def clamped(self) -> "Stats":
        return Stats(**{stat: max(0, self.value(stat)) for stat in STAT_NAMES})

    @classmethod
    def uniform(cls, amount: int) -> "Stats":
        return cls(**{stat: amount for stat in STAT_NAMES})
