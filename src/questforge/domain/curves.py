"""Difficulty and reward curves keyed by progression index."""
from __future__ import annotations

from dataclasses import dataclass

from questforge.core.types import STAT_NAMES, EncounterCategory, StatName
from questforge.domain.modifiers import NEUTRAL, RunModifiers

# Linear region: 15 + 5 * index up to the threshold, then compounding.
BASE_DIFFICULTY = 15
DIFFICULTY_PER_INDEX = 5
LINEAR_THRESHOLD = 10
COMPOUND_RATE = 1.09

EXP_PER_INDEX = 15
GOLD_PER_INDEX = 10

# Failure damage grows 5% per step.
WAVE_DAMAGE_GROWTH = 1.05

MILESTONE_DENSE_LIMIT = 25
MILESTONE_DENSE_STEP = 5
MILESTONE_SPARSE_STEP = 10

ENCOUNTER_CYCLE: tuple[EncounterCategory, ...] = ("combat", "combat", "combat", "puzzle", "trap")
BOSS_LOOT_CHANCE = 0.5
REGULAR_LOOT_CHANCE = 0.1

MILESTONE_BASE_GOLD = 300
MILESTONE_GOLD_PER_TIER = 100
MILESTONE_DROP_CAP = 0.5


@dataclass(frozen=True, slots=True)
class MilestoneRewardDef:
    index: int
    gold: int
    epic_chance: float
    legendary_chance: float


_MILESTONE_TABLE: dict[int, MilestoneRewardDef] = {
    5: MilestoneRewardDef(index=5, gold=50, epic_chance=0.05, legendary_chance=0.0),
    10: MilestoneRewardDef(index=10, gold=100, epic_chance=0.10, legendary_chance=0.0),
    15: MilestoneRewardDef(index=15, gold=150, epic_chance=0.15, legendary_chance=0.02),
    20: MilestoneRewardDef(index=20, gold=200, epic_chance=0.20, legendary_chance=0.05),
    25: MilestoneRewardDef(index=25, gold=300, epic_chance=0.25, legendary_chance=0.08),
}


def difficulty(index: int) -> int:
    index = max(0, index)
    linear_cap = BASE_DIFFICULTY + DIFFICULTY_PER_INDEX * LINEAR_THRESHOLD
    if index <= LINEAR_THRESHOLD:
        return BASE_DIFFICULTY + DIFFICULTY_PER_INDEX * index
    return int(linear_cap * COMPOUND_RATE ** (index - LINEAR_THRESHOLD))


def exp_reward(index: int, modifiers: RunModifiers = NEUTRAL) -> int:
    return max(0, int(EXP_PER_INDEX * index * modifiers.exp_multiplier))


def gold_reward(index: int, modifiers: RunModifiers = NEUTRAL) -> int:
    return max(0, int(GOLD_PER_INDEX * index * modifiers.gold_multiplier))


def wave_scaling_factor(index: int) -> float:
    return WAVE_DAMAGE_GROWTH ** max(0, index - 1)


def is_milestone(index: int) -> bool:
    if index <= 0:
        return False
    if index <= MILESTONE_DENSE_LIMIT:
        return index % MILESTONE_DENSE_STEP == 0
    return index % MILESTONE_SPARSE_STEP == 0


def milestone_reward(index: int) -> MilestoneRewardDef | None:
    """Reward for a milestone index; open-ended past the fixed table."""
    if not is_milestone(index):
        return None
    if index in _MILESTONE_TABLE:
        return _MILESTONE_TABLE[index]
    tier = (index - MILESTONE_DENSE_LIMIT) // MILESTONE_SPARSE_STEP
    top = _MILESTONE_TABLE[MILESTONE_DENSE_LIMIT]
    return MilestoneRewardDef(
        index=index,
        gold=MILESTONE_BASE_GOLD + MILESTONE_GOLD_PER_TIER * tier,
        epic_chance=min(MILESTONE_DROP_CAP, top.epic_chance + 0.05 * tier),
        legendary_chance=min(MILESTONE_DROP_CAP, top.legendary_chance + 0.02 * tier),
    )


def encounter_category(index: int, *, all_boss: bool = False) -> EncounterCategory:
    if all_boss or is_milestone(index):
        return "boss"
    return ENCOUNTER_CYCLE[index % len(ENCOUNTER_CYCLE)]


def primary_stat_for(index: int) -> StatName:
    return STAT_NAMES[index % len(STAT_NAMES)]


def bonus_loot_chance(category: EncounterCategory) -> float:
    return BOSS_LOOT_CHANCE if category == "boss" else REGULAR_LOOT_CHANCE


def loot_tier_for(index: int) -> int:
    return 1 + max(0, index) // 10
