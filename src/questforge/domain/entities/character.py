"""Character snapshot consumed and written through by the simulators."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List

from .equipment import Equipment, TemporaryBuff
from .stats import Stats

MAX_LEVEL = 100
EXP_CURVE_BASE = 100.0
EXP_CURVE_EXPONENT = 1.5
LEVEL_UP_GOLD_PER_LEVEL = 10


def exp_required(level: int) -> int:
    """Cumulative EXP needed to reach ``level``."""
    if level <= 1:
        return 0
    return int(EXP_CURVE_BASE * (level - 1) ** EXP_CURVE_EXPONENT)


@dataclass(slots=True)
class LevelUpReward:
    level: int
    gold: int
    stat_points: int = 1


@dataclass(slots=True)
class Character:
    """Mutable character record owned by the caller.

    The engine reads stats and HP at the start of a run and writes EXP, gold
    and current HP back after every resolved step. ``equipment`` is what is
    worn; ``inventory`` holds unequipped drops and purchases.
    """

    id: str
    name: str
    level: int = 1
    stats: Stats = field(default_factory=lambda: Stats.uniform(5))
    equipment: List[Equipment] = field(default_factory=list)
    inventory: List[Equipment] = field(default_factory=list)
    buffs: List[TemporaryBuff] = field(default_factory=list)
    current_hp: int = 100
    max_hp: int = 100
    gold: int = 0
    exp: int = 0
    unspent_stat_points: int = 0
    arena_best_wave: int = 0
    arena_attempts_today: int = 0
    last_arena_date: date | None = None

    def gain_exp(self, amount: int) -> List[LevelUpReward]:
        self.exp += max(0, amount)
        rewards: List[LevelUpReward] = []
        while self.level < MAX_LEVEL and self.exp >= exp_required(self.level + 1):
            self.level += 1
            gold = self.level * LEVEL_UP_GOLD_PER_LEVEL
            self.gold += gold
            self.unspent_stat_points += 1
            rewards.append(LevelUpReward(level=self.level, gold=gold))
        return rewards

    def arena_attempts_on(self, day: date) -> int:
        """Arena attempts already used on ``day``; the counter resets daily."""
        if self.last_arena_date != day:
            return 0
        return self.arena_attempts_today

    def record_arena_attempt(self, day: date) -> None:
        self.arena_attempts_today = self.arena_attempts_on(day) + 1
        self.last_arena_date = day

    def set_hp(self, value: int) -> None:
        self.current_hp = min(max(0, value), max(0, self.max_hp))
