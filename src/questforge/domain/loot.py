"""Rarity-weighted loot rolls and templated equipment generation."""
from __future__ import annotations

from typing import Dict, Tuple

from questforge.core.rng import RandomSource
from questforge.core.types import EQUIPMENT_SLOTS, STAT_NAMES, EquipmentSlot, StatName
from questforge.domain.defs import LootNamesDef
from questforge.domain.entities import Equipment
from questforge.domain.rarity import (
    BASE_RARITY_WEIGHTS,
    PRIMARY_BONUS_RANGES,
    SECONDARY_STAT_TABLE,
    ItemRarity,
    max_rarity_for_tier,
)

ROLL_SPAN = 100.0
LUCK_SHIFT_PER_POINT = 0.5
TIER_SHIFT_PER_TIER = 3.0
RUN_DROP_LUCK_PER_POINT = 0.005
RUN_DROP_CAP = 0.8
FALLBACK_DESCRIPTION = "A mysterious piece of equipment."


def rarity_weights(tier: int, luck: int) -> Dict[ItemRarity, float]:
    """Probability mass (out of 100) per rarity for a tier/luck pair.

    Luck and tier slide a 0-100 roll toward the rare end of the line; mass that
    lands above the tier's cap is folded into the cap itself.
    """
    shift = max(0, luck) * LUCK_SHIFT_PER_POINT + max(1, tier) * TIER_SHIFT_PER_TIER
    cap = max_rarity_for_tier(tier)
    weights: Dict[ItemRarity, float] = {rarity: 0.0 for rarity in ItemRarity}
    lower = 0.0
    for rarity in ItemRarity:
        upper = lower + BASE_RARITY_WEIGHTS[rarity]
        lo = -float("inf") if rarity is ItemRarity.COMMON else lower
        hi = float("inf") if rarity is ItemRarity.LEGENDARY else upper
        # Portion of the raw roll range [0, 100] that lands in [lo, hi) after shifting.
        start = max(0.0, lo - shift)
        end = min(ROLL_SPAN, hi - shift)
        mass = max(0.0, end - start)
        weights[min(rarity, cap)] += mass
        lower = upper
    return weights


def roll_rarity(tier: int, luck: int, rng: RandomSource) -> ItemRarity:
    weights = rarity_weights(tier, luck)
    total = sum(weights.values())
    target = rng.random() * total
    cumulative = 0.0
    chosen = ItemRarity.COMMON
    for rarity in ItemRarity:
        weight = weights[rarity]
        if weight <= 0:
            continue
        chosen = rarity
        cumulative += weight
        if target < cumulative:
            break
    return chosen


def roll_stat_bonus(rarity: ItemRarity, rng: RandomSource) -> int:
    low, high = PRIMARY_BONUS_RANGES[rarity]
    return rng.randint(low, high)


def roll_secondary_stat(
    rarity: ItemRarity, excluding: StatName, rng: RandomSource
) -> Tuple[StatName, int] | None:
    chance, (low, high) = SECONDARY_STAT_TABLE[rarity]
    if chance <= 0:
        return None
    if rng.random() > chance:
        return None
    candidates = [stat for stat in STAT_NAMES if stat != excluding]
    return rng.choice(candidates), rng.randint(low, high)


def level_requirement(tier: int, primary_bonus: int) -> int:
    return max(1, (max(1, tier) - 1) * 5 + primary_bonus // 2)


def run_drop_chance(bonus_loot_chance: float, luck: int) -> float:
    return min(RUN_DROP_CAP, max(0.0, bonus_loot_chance) + max(0, luck) * RUN_DROP_LUCK_PER_POINT)


class LootRoller:
    """Generates equipment using the catalog's name pools."""

    def __init__(self, names: LootNamesDef | None = None) -> None:
        self._names = names

    def generate_name(
        self, slot: EquipmentSlot, rarity: ItemRarity, primary_stat: StatName, rng: RandomSource
    ) -> str:
        prefix = self._pick(self._names.prefixes.get(rarity) if self._names else None, "", rng)
        base = self._pick(self._names.bases.get(slot) if self._names else None, slot.capitalize(), rng)
        suffix = self._pick(self._names.suffixes.get(primary_stat) if self._names else None, "", rng)
        if rarity is ItemRarity.COMMON:
            parts = (prefix, base)
        else:
            parts = (prefix, base, suffix)
        return " ".join(part for part in parts if part)

    def generate_description(self, rarity: ItemRarity, rng: RandomSource) -> str:
        pool = self._names.descriptions.get(rarity) if self._names else None
        return self._pick(pool, FALLBACK_DESCRIPTION, rng)

    def generate_equipment(
        self,
        *,
        tier: int,
        luck: int,
        rng: RandomSource,
        slot: EquipmentSlot | None = None,
        rarity: ItemRarity | None = None,
    ) -> Equipment:
        """Roll a full item; ``rarity`` pins the tier (milestone drops)."""
        chosen_slot = slot if slot is not None else rng.choice(EQUIPMENT_SLOTS)
        chosen_rarity = rarity if rarity is not None else roll_rarity(tier, luck, rng)
        primary_stat = rng.choice(STAT_NAMES)
        primary_bonus = roll_stat_bonus(chosen_rarity, rng)
        secondary = roll_secondary_stat(chosen_rarity, primary_stat, rng)
        name = self.generate_name(chosen_slot, chosen_rarity, primary_stat, rng)
        description = self.generate_description(chosen_rarity, rng)
        return Equipment(
            name=name,
            description=description,
            slot=chosen_slot,
            rarity=chosen_rarity,
            primary_stat=primary_stat,
            stat_bonus=primary_bonus,
            level_requirement=level_requirement(tier, primary_bonus),
            secondary_stat=secondary[0] if secondary else None,
            secondary_bonus=secondary[1] if secondary else 0,
        )

    @staticmethod
    def _pick(pool: Tuple[str, ...] | None, fallback: str, rng: RandomSource) -> str:
        if not pool:
            return fallback
        return rng.choice(pool)
