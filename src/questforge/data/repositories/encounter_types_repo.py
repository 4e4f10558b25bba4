"""Repository for encounter categories, their approaches and narratives."""
from __future__ import annotations

from typing import Dict, get_args

from questforge.core.types import EncounterCategory
from questforge.data.errors import DataReferenceError, DataValidationError
from questforge.data.repositories.base import RepositoryBase
from questforge.domain.defs import ApproachDef, EncounterTypeDef

_CATEGORIES = get_args(EncounterCategory)


class EncounterTypesRepository(RepositoryBase[EncounterTypeDef]):
    """Loads encounter type definitions keyed by category."""

    def __init__(self, base_path=None) -> None:
        super().__init__("encounter_types.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EncounterTypeDef]:
        definitions: Dict[str, EncounterTypeDef] = {}
        for category, payload in raw.items():
            context = f"encounter_types.{category}"
            if category not in _CATEGORIES:
                raise DataReferenceError(f"{context} is not a known encounter category.")
            data = self._require_mapping(payload, context)
            approaches = tuple(
                self._build_approach(entry, f"{context}.approaches[{index}]")
                for index, entry in enumerate(self._require_list(data.get("approaches", []), f"{context}.approaches"))
            )
            definitions[category] = EncounterTypeDef(
                category=category,  # type: ignore[arg-type]
                approaches=approaches,
                success_narratives=self._require_str_tuple(data.get("success_narratives"), f"{context}.success_narratives"),
                failure_narratives=self._require_str_tuple(data.get("failure_narratives"), f"{context}.failure_narratives"),
            )
        return definitions

    def _build_approach(self, entry: object, context: str) -> ApproachDef:
        data = self._require_mapping(entry, context)
        power_modifier = self._require_float(data.get("power_modifier", 1.0), f"{context}.power_modifier")
        risk_modifier = self._require_float(data.get("risk_modifier", 1.0), f"{context}.risk_modifier")
        if power_modifier <= 0 or risk_modifier < 0:
            raise DataValidationError(f"{context} modifiers must be positive.")
        return ApproachDef(
            name=self._require_str(data.get("name"), f"{context}.name"),
            description=self._require_str(data.get("description", ""), f"{context}.description"),
            stat_focus=self._optional_stat(data.get("stat_focus"), f"{context}.stat_focus"),
            power_modifier=power_modifier,
            risk_modifier=risk_modifier,
        )
