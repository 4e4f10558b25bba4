"""Equipment runtime models."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from questforge.core.types import EquipmentSlot, StatName
from questforge.domain.rarity import ItemRarity


@dataclass(frozen=True, slots=True)
class Equipment:
    """A generated piece of gear with a primary and optional secondary bonus."""

    name: str
    description: str
    slot: EquipmentSlot
    rarity: ItemRarity
    primary_stat: StatName
    stat_bonus: int
    level_requirement: int = 1
    secondary_stat: StatName | None = None
    secondary_bonus: int = 0

    @property
    def total_stat_bonus(self) -> int:
        return self.stat_bonus + (self.secondary_bonus if self.secondary_stat else 0)


@dataclass(frozen=True, slots=True)
class TemporaryBuff:
    """A timed stat boost (consumables, party perks)."""

    stat: StatName
    amount: int
    expires_at: datetime | None = None

    def is_active(self, now: datetime | None) -> bool:
        if now is None or self.expires_at is None:
            return True
        return now < self.expires_at
