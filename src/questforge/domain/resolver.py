"""Encounter resolution: success chance, roll, rewards and failure damage."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from questforge.core.rng import RandomSource
from questforge.domain import curves
from questforge.domain.defs import ApproachDef
from questforge.domain.modifiers import NEUTRAL, RunModifiers

SUCCESS_CHANCE_FLOOR = 0.05
SUCCESS_CHANCE_CAP = 0.99
RISKY_POWER_THRESHOLD = 1.1
RISKY_BONUS_SCALE = 0.5
MIN_FAILURE_DAMAGE = 5


@dataclass(frozen=True, slots=True)
class Resolution:
    success: bool
    roll: float
    success_chance: float
    exp: int = 0
    gold: int = 0
    damage: int = 0


def success_chance(power: int, difficulty: int) -> float:
    """Chance from the power/difficulty ratio, clamped to [0.05, 0.99]."""
    if difficulty <= 0:
        return SUCCESS_CHANCE_CAP
    ratio = max(0, power) / difficulty
    return min(SUCCESS_CHANCE_CAP, max(SUCCESS_CHANCE_FLOOR, ratio))


def resolve(
    power: int,
    difficulty: int,
    approach: ApproachDef | None,
    modifiers: RunModifiers,
    rng: RandomSource,
    *,
    index: int = 1,
) -> Resolution:
    """Roll one encounter at progression ``index``. Always yields a definite outcome.

    A success carries the EXP and gold for ``approach``; a failure carries the
    damage taken. Only the success roll is drawn from ``rng``.
    """
    chance = success_chance(power, difficulty)
    roll = rng.random()
    if roll <= chance:
        exp, gold = success_rewards(index, approach, modifiers)
        return Resolution(success=True, roll=roll, success_chance=chance, exp=exp, gold=gold)
    damage = failure_damage(power, difficulty, approach, modifiers, index)
    return Resolution(success=False, roll=roll, success_chance=chance, damage=damage)


def risky_bonus_multiplier(approach: ApproachDef | None) -> float:
    if approach is None or approach.stat_focus is None:
        return 1.0
    if approach.power_modifier > RISKY_POWER_THRESHOLD:
        return 1.0 + (approach.power_modifier - 1.0) * RISKY_BONUS_SCALE
    return 1.0


def success_rewards(
    index: int, approach: ApproachDef | None, modifiers: RunModifiers = NEUTRAL
) -> Tuple[int, int]:
    """EXP and gold for clearing ``index`` with ``approach``."""
    bonus = risky_bonus_multiplier(approach)
    exp = curves.exp_reward(index, modifiers)
    gold = curves.gold_reward(index, modifiers)
    if bonus != 1.0:
        exp = int(exp * bonus)
        gold = int(gold * bonus)
    return exp, gold


def failure_damage(
    power: int,
    difficulty: int,
    approach: ApproachDef | None,
    modifiers: RunModifiers,
    index: int,
) -> int:
    base = max(MIN_FAILURE_DAMAGE, difficulty - power)
    risk = approach.risk_modifier if approach is not None else 1.0
    scaled = base * max(0.0, risk) * max(0.0, modifiers.damage_taken_multiplier) * curves.wave_scaling_factor(index)
    return max(0, int(scaled))
