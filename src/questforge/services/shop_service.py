"""Daily equipment shop with stock seeded from the calendar date."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Tuple

from questforge.core.rng import XorShiftRNG
from questforge.core.types import EquipmentSlot
from questforge.domain.entities import Character, Equipment
from questforge.domain.loot import LootRoller
from questforge.domain.rarity import SHOP_PRICE_BASE

logger = logging.getLogger("questforge.shop")

DAILY_SLOTS: Tuple[EquipmentSlot, ...] = ("weapon", "armor", "accessory", "weapon")
SHOP_LUCK_RANGE = (5, 15)
PRICE_PER_STAT_POINT = 8


def shop_tier(level: int) -> int:
    return max(1, level // 10 + 1)


def price_for(item: Equipment) -> int:
    """Rarity base price plus 8 gold per point of total stat bonus."""
    return SHOP_PRICE_BASE[item.rarity] + item.total_stat_bonus * PRICE_PER_STAT_POINT


@dataclass(slots=True)
class ShopEvent:
    """Base class for shop-related events."""


@dataclass(slots=True)
class ShopPurchaseEvent(ShopEvent):
    item_name: str
    price: int
    total_gold: int


@dataclass(slots=True)
class ShopActionFailedEvent(ShopEvent):
    reason: str
    message: str


@dataclass(slots=True)
class ShopEntryView:
    index: int
    item: Equipment
    price: int
    sold: bool = False


@dataclass(slots=True)
class DailyShop:
    day: date
    level: int
    entries: List[ShopEntryView] = field(default_factory=list)


class ShopService:
    """Deterministic daily stock: the same date always yields the same items."""

    def __init__(self, *, loot_roller: LootRoller | None = None) -> None:
        self._loot_roller = loot_roller or LootRoller()

    def daily_equipment(self, level: int, day: date) -> List[Equipment]:
        rng = XorShiftRNG.for_date(day)
        tier = shop_tier(level)
        items: List[Equipment] = []
        for slot in DAILY_SLOTS:
            luck = rng.randint(*SHOP_LUCK_RANGE)
            items.append(self._loot_roller.generate_equipment(tier=tier, luck=luck, rng=rng, slot=slot))
        return items

    def open_shop(self, level: int, day: date) -> DailyShop:
        items = self.daily_equipment(level, day)
        logger.debug("Daily shop for %s (level %d): %d items", day.isoformat(), level, len(items))
        return DailyShop(
            day=day,
            level=level,
            entries=[ShopEntryView(index=i, item=item, price=price_for(item)) for i, item in enumerate(items)],
        )

    def buy(self, shop: DailyShop, character: Character, index: int) -> List[ShopEvent]:
        if not 0 <= index < len(shop.entries):
            return [ShopActionFailedEvent(reason="not_in_stock", message="Item is not available here.")]
        entry = shop.entries[index]
        if entry.sold:
            return [ShopActionFailedEvent(reason="out_of_stock", message="Item is sold out.")]
        if character.gold < entry.price:
            return [ShopActionFailedEvent(reason="insufficient_gold", message="Not enough gold.")]
        character.gold -= entry.price
        character.inventory.append(entry.item)
        entry.sold = True
        logger.info("%s bought %s for %d gold", character.id, entry.item.name, entry.price)
        return [ShopPurchaseEvent(item_name=entry.item.name, price=entry.price, total_gold=character.gold)]
