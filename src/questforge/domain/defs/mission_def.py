"""AFK mission definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from questforge.core.types import StatName
from questforge.domain.rarity import ItemRarity


@dataclass(frozen=True, slots=True)
class StatRequirementDef:
    stat: StatName
    minimum: int


@dataclass(frozen=True, slots=True)
class MissionDef:
    id: str
    name: str
    description: str
    primary_stat: StatName
    rarity: ItemRarity
    duration_seconds: int
    base_success_rate: float
    exp_reward: int
    gold_reward: int
    stat_requirements: Tuple[StatRequirementDef, ...] = ()
    level_requirement: int = 1
    can_drop_equipment: bool = False
