from collections import Counter

import pytest

from questforge.core.rng import RNG
from questforge.domain.defs import LootNamesDef
from questforge.domain.loot import (
    FALLBACK_DESCRIPTION,
    LootRoller,
    level_requirement,
    rarity_weights,
    roll_rarity,
    roll_secondary_stat,
    run_drop_chance,
)
from questforge.domain.rarity import ItemRarity, max_rarity_for_tier


def test_tier_one_never_exceeds_rare_over_ten_thousand_rolls() -> None:
    rng = RNG(2024)
    cap = max_rarity_for_tier(1)
    counts = Counter(roll_rarity(1, 0, rng) for _ in range(10_000))

    assert cap is ItemRarity.RARE
    assert max(counts) <= cap
    assert counts[ItemRarity.COMMON] > 0


@pytest.mark.parametrize("tier", [1, 2, 3, 6])
@pytest.mark.parametrize("luck", [0, 10, 80, 400])
def test_rarity_weights_are_a_full_distribution(tier: int, luck: int) -> None:
    weights = rarity_weights(tier, luck)

    assert all(weight >= 0 for weight in weights.values())
    assert sum(weights.values()) == pytest.approx(100.0)
    assert all(weights[rarity] == 0 for rarity in ItemRarity if rarity > max_rarity_for_tier(tier))


def test_tier_one_weights_fold_excess_into_rare() -> None:
    weights = rarity_weights(1, 0)

    assert weights[ItemRarity.COMMON] == pytest.approx(37.0)
    assert weights[ItemRarity.UNCOMMON] == pytest.approx(25.0)
    assert weights[ItemRarity.RARE] == pytest.approx(38.0)
    assert weights[ItemRarity.EPIC] == 0


def test_luck_moves_mass_toward_rarer_tiers() -> None:
    unlucky = rarity_weights(4, 0)
    lucky = rarity_weights(4, 40)

    assert lucky[ItemRarity.COMMON] < unlucky[ItemRarity.COMMON]
    assert lucky[ItemRarity.LEGENDARY] > unlucky[ItemRarity.LEGENDARY]


def test_secondary_stat_never_matches_primary() -> None:
    rng = RNG(5)
    for _ in range(500):
        secondary = roll_secondary_stat(ItemRarity.LEGENDARY, "luck", rng)
        assert secondary is not None
        assert secondary[0] != "luck"
        assert 5 <= secondary[1] <= 10


def test_common_items_have_no_secondary_stat() -> None:
    assert roll_secondary_stat(ItemRarity.COMMON, "strength", _ExplodingRNG()) is None


def test_generate_equipment_is_deterministic_for_a_seed() -> None:
    roller = LootRoller(_names())

    item_a = roller.generate_equipment(tier=3, luck=12, rng=RNG(77))
    item_b = roller.generate_equipment(tier=3, luck=12, rng=RNG(77))

    assert item_a == item_b


def test_generate_equipment_uses_name_pools() -> None:
    roller = LootRoller(_names())

    item = roller.generate_equipment(tier=1, luck=0, rng=RNG(3), slot="weapon", rarity=ItemRarity.COMMON)

    assert item.name == "Worn Sword"
    assert item.description == "Plain but serviceable."
    assert item.slot == "weapon"
    assert item.secondary_stat is None
    assert 1 <= item.stat_bonus <= 3


def test_generate_equipment_falls_back_without_catalog() -> None:
    item = LootRoller().generate_equipment(tier=1, luck=0, rng=RNG(3), slot="armor", rarity=ItemRarity.COMMON)

    assert item.name == "Armor"
    assert item.description == FALLBACK_DESCRIPTION


def test_level_requirement_scales_with_tier_and_bonus() -> None:
    assert level_requirement(1, 1) == 1
    assert level_requirement(3, 8) == 14


def test_run_drop_chance_is_capped() -> None:
    assert run_drop_chance(0.1, 0) == pytest.approx(0.1)
    assert run_drop_chance(0.5, 20) == pytest.approx(0.6)
    assert run_drop_chance(0.5, 1000) == 0.8


class _ExplodingRNG:
    def random(self) -> float:
        raise AssertionError("no draw expected")

    def randint(self, a: int, b: int) -> int:
        raise AssertionError("no draw expected")

    def choice(self, seq):
        raise AssertionError("no draw expected")


def _names() -> LootNamesDef:
    return LootNamesDef(
        prefixes={ItemRarity.COMMON: ("Worn",), ItemRarity.RARE: ("Runic",), ItemRarity.EPIC: ("Mythril",)},
        bases={"weapon": ("Sword",), "armor": ("Plate",), "accessory": ("Ring",)},
        suffixes={"strength": ("of Power",), "luck": ("of Fortune",)},
        descriptions={ItemRarity.COMMON: ("Plain but serviceable.",)},
    )
