"""Repository for AFK mission definitions."""
from __future__ import annotations

from typing import Dict

from questforge.data.errors import DataValidationError
from questforge.data.repositories.base import RepositoryBase
from questforge.domain.defs import MissionDef, StatRequirementDef


class MissionsRepository(RepositoryBase[MissionDef]):
    """Loads AFK mission definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("missions.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, MissionDef]:
        missions: Dict[str, MissionDef] = {}
        for mission_id, payload in raw.items():
            context = f"missions.{mission_id}"
            data = self._require_mapping(payload, context)
            base_rate = self._require_float(data.get("base_success_rate"), f"{context}.base_success_rate")
            if not (0.0 <= base_rate <= 1.0):
                raise DataValidationError(f"{context}.base_success_rate must be between 0 and 1.")
            duration = self._require_int(data.get("duration_seconds"), f"{context}.duration_seconds")
            if duration <= 0:
                raise DataValidationError(f"{context}.duration_seconds must be positive.")
            requirements = []
            for index, entry in enumerate(self._require_list(data.get("stat_requirements", []), f"{context}.stat_requirements")):
                req_ctx = f"{context}.stat_requirements[{index}]"
                req = self._require_mapping(entry, req_ctx)
                requirements.append(
                    StatRequirementDef(
                        stat=self._require_stat(req.get("stat"), f"{req_ctx}.stat"),
                        minimum=self._require_int(req.get("minimum"), f"{req_ctx}.minimum"),
                    )
                )
            missions[mission_id] = MissionDef(
                id=mission_id,
                name=self._require_str(data.get("name"), f"{context}.name"),
                description=self._require_str(data.get("description", ""), f"{context}.description"),
                primary_stat=self._require_stat(data.get("primary_stat"), f"{context}.primary_stat"),
                rarity=self._require_rarity(data.get("rarity", "common"), f"{context}.rarity"),
                duration_seconds=duration,
                base_success_rate=base_rate,
                exp_reward=self._require_int(data.get("exp_reward", 0), f"{context}.exp_reward"),
                gold_reward=self._require_int(data.get("gold_reward", 0), f"{context}.gold_reward"),
                stat_requirements=tuple(requirements),
                level_requirement=self._require_int(data.get("level_requirement", 1), f"{context}.level_requirement"),
                can_drop_equipment=self._require_bool(
                    data.get("can_drop_equipment", False), f"{context}.can_drop_equipment"
                ),
            )
        return missions
