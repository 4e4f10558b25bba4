"""Item rarity tiers and per-tier roll tables."""
from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple


class ItemRarity(IntEnum):
    """Ordered rarity tiers; comparison follows the ordinal."""

    COMMON = 0
    UNCOMMON = 1
    RARE = 2
    EPIC = 3
    LEGENDARY = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Width of each tier on the 0-100 roll line before luck/tier shift the roll.
BASE_RARITY_WEIGHTS: Dict[ItemRarity, float] = {
    ItemRarity.COMMON: 40.0,
    ItemRarity.UNCOMMON: 25.0,
    ItemRarity.RARE: 17.0,
    ItemRarity.EPIC: 13.0,
    ItemRarity.LEGENDARY: 5.0,
}

PRIMARY_BONUS_RANGES: Dict[ItemRarity, Tuple[int, int]] = {
    ItemRarity.COMMON: (1, 3),
    ItemRarity.UNCOMMON: (2, 5),
    ItemRarity.RARE: (4, 8),
    ItemRarity.EPIC: (7, 12),
    ItemRarity.LEGENDARY: (10, 18),
}

# (chance, (min_bonus, max_bonus)); commons never roll a secondary stat.
SECONDARY_STAT_TABLE: Dict[ItemRarity, Tuple[float, Tuple[int, int]]] = {
    ItemRarity.COMMON: (0.0, (0, 0)),
    ItemRarity.UNCOMMON: (0.3, (1, 2)),
    ItemRarity.RARE: (0.6, (2, 4)),
    ItemRarity.EPIC: (0.8, (3, 6)),
    ItemRarity.LEGENDARY: (1.0, (5, 10)),
}

SHOP_PRICE_BASE: Dict[ItemRarity, int] = {
    ItemRarity.COMMON: 25,
    ItemRarity.UNCOMMON: 60,
    ItemRarity.RARE: 150,
    ItemRarity.EPIC: 400,
    ItemRarity.LEGENDARY: 1000,
}


def max_rarity_for_tier(tier: int) -> ItemRarity:
    """Highest rarity a loot tier may produce (tier 1 caps at rare)."""
    return ItemRarity(min(int(ItemRarity.LEGENDARY), max(1, tier) + 1))
