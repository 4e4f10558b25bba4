"""Repository for raid boss templates."""
from __future__ import annotations

from typing import Dict

from questforge.data.errors import DataValidationError
from questforge.data.repositories.base import RepositoryBase
from questforge.domain.defs import RaidBossTemplateDef


class RaidBossesRepository(RepositoryBase[RaidBossTemplateDef]):
    """Loads raid boss templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("raid_bosses.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, RaidBossTemplateDef]:
        templates: Dict[str, RaidBossTemplateDef] = {}
        for boss_id, payload in raw.items():
            context = f"raid_bosses.{boss_id}"
            data = self._require_mapping(payload, context)
            base_hp = self._require_int(data.get("base_hp_per_tier", 3000), f"{context}.base_hp_per_tier")
            if base_hp <= 0:
                raise DataValidationError(f"{context}.base_hp_per_tier must be positive.")
            drop_chance = self._require_float(data.get("equip_drop_chance", 0.2), f"{context}.equip_drop_chance")
            if not (0.0 <= drop_chance <= 1.0):
                raise DataValidationError(f"{context}.equip_drop_chance must be between 0 and 1.")
            consumable = data.get("guaranteed_consumable")
            templates[boss_id] = RaidBossTemplateDef(
                id=boss_id,
                name=self._require_str(data.get("name"), f"{context}.name"),
                description=self._require_str(data.get("description", ""), f"{context}.description"),
                modifier_name=self._require_str(data.get("modifier_name", ""), f"{context}.modifier_name"),
                modifier_description=self._require_str(
                    data.get("modifier_description", ""), f"{context}.modifier_description"
                ),
                stat_penalty=self._optional_stat(data.get("stat_penalty"), f"{context}.stat_penalty"),
                penalty_value=self._require_float(data.get("penalty_value", 0.0), f"{context}.penalty_value"),
                stat_bonus=self._optional_stat(data.get("stat_bonus"), f"{context}.stat_bonus"),
                bonus_value=self._require_float(data.get("bonus_value", 0.0), f"{context}.bonus_value"),
                base_hp_per_tier=base_hp,
                gold_reward_per_tier=self._require_int(
                    data.get("gold_reward_per_tier", 150), f"{context}.gold_reward_per_tier"
                ),
                exp_reward_per_tier=self._require_int(data.get("exp_reward_per_tier", 200), f"{context}.exp_reward_per_tier"),
                equip_drop_chance=drop_chance,
                guaranteed_consumable=(
                    self._require_str(consumable, f"{context}.guaranteed_consumable") if consumable is not None else None
                ),
            )
        return templates
