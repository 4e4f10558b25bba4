"""Raid boss template definitions."""
from __future__ import annotations

from dataclasses import dataclass

from questforge.core.types import StatName


@dataclass(frozen=True, slots=True)
class RaidBossTemplateDef:
    id: str
    name: str
    description: str
    modifier_name: str = ""
    modifier_description: str = ""
    stat_penalty: StatName | None = None
    penalty_value: float = 0.0
    stat_bonus: StatName | None = None
    bonus_value: float = 0.0
    base_hp_per_tier: int = 3000
    gold_reward_per_tier: int = 150
    exp_reward_per_tier: int = 200
    equip_drop_chance: float = 0.20
    guaranteed_consumable: str | None = None

    def modified_damage(self, base_damage: int, stat: StatName | None) -> int:
        """Apply the boss's stat penalty/bonus to an attack."""
        if stat is None:
            return base_damage
        multiplier = 1.0
        if self.stat_penalty == stat:
            multiplier -= self.penalty_value
        if self.stat_bonus == stat:
            multiplier += self.bonus_value
        return max(1, int(base_damage * multiplier))
