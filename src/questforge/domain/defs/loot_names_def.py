"""Templated name/description pools for generated equipment."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from questforge.core.types import EquipmentSlot, StatName
from questforge.domain.rarity import ItemRarity


@dataclass(frozen=True, slots=True)
class LootNamesDef:
    prefixes: Dict[ItemRarity, Tuple[str, ...]]
    bases: Dict[EquipmentSlot, Tuple[str, ...]]
    suffixes: Dict[StatName, Tuple[str, ...]]
    descriptions: Dict[ItemRarity, Tuple[str, ...]]
