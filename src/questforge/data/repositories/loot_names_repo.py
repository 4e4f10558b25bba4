"""Repository for equipment name and description pools."""
from __future__ import annotations

from typing import Dict

from questforge.core.types import EQUIPMENT_SLOTS
from questforge.data.errors import DataReferenceError
from questforge.data.repositories.base import RepositoryBase
from questforge.domain.defs import LootNamesDef

_DEFAULT_ID = "default"


class LootNamesRepository(RepositoryBase[LootNamesDef]):
    """Loads the single loot naming table."""

    def __init__(self, base_path=None) -> None:
        super().__init__("loot_names.json", base_path)

    def names(self) -> LootNamesDef:
        return self.get(_DEFAULT_ID)

    def _build(self, raw: dict[str, object]) -> Dict[str, LootNamesDef]:
        prefixes = self._require_mapping(raw.get("prefixes", {}), "loot_names.prefixes")
        bases = self._require_mapping(raw.get("bases", {}), "loot_names.bases")
        suffixes = self._require_mapping(raw.get("suffixes", {}), "loot_names.suffixes")
        descriptions = self._require_mapping(raw.get("descriptions", {}), "loot_names.descriptions")
        for slot in bases:
            if slot not in EQUIPMENT_SLOTS:
                raise DataReferenceError(f"loot_names.bases references unknown slot '{slot}'.")
        names = LootNamesDef(
            prefixes={
                self._require_rarity(key, "loot_names.prefixes"): self._require_str_tuple(value, f"loot_names.prefixes.{key}")
                for key, value in prefixes.items()
            },
            bases={
                slot: self._require_str_tuple(value, f"loot_names.bases.{slot}")  # type: ignore[misc]
                for slot, value in bases.items()
            },
            suffixes={
                self._require_stat(key, "loot_names.suffixes"): self._require_str_tuple(value, f"loot_names.suffixes.{key}")
                for key, value in suffixes.items()
            },
            descriptions={
                self._require_rarity(key, "loot_names.descriptions"): self._require_str_tuple(
                    value, f"loot_names.descriptions.{key}"
                )
                for key, value in descriptions.items()
            },
        )
        return {_DEFAULT_ID: names}
