"""Run modifier configuration."""
from __future__ import annotations

from dataclasses import dataclass

from questforge.core.types import StatName


@dataclass(frozen=True, slots=True)
class RunModifiers:
    """Multipliers and overrides applied to a simulated run.

    Every field defaults to the neutral value, so ``RunModifiers()`` changes
    nothing.
    """

    damage_deal_multiplier: float = 1.0
    damage_taken_multiplier: float = 1.0
    starting_hp_override: int | None = None
    hp_regen_per_step: int = 0
    gold_multiplier: float = 1.0
    exp_multiplier: float = 1.0
    all_boss_encounters: bool = False
    stat_focus: StatName | None = None
    stat_focus_multiplier: float = 1.0

    def focus_multiplier_for(self, stat: StatName | None) -> float:
        if self.stat_focus is not None and stat == self.stat_focus:
            return self.stat_focus_multiplier
        return 1.0

    @property
    def is_neutral(self) -> bool:
        return self == NEUTRAL


NEUTRAL = RunModifiers()
