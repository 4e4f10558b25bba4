"""Repository exports for catalog definition types."""

from .encounter_types_repo import EncounterTypesRepository
from .loot_names_repo import LootNamesRepository
from .missions_repo import MissionsRepository
from .modifier_presets_repo import ModifierPresetsRepository
from .name_pools_repo import NamePoolsRepository
from .raid_bosses_repo import RaidBossesRepository

__all__ = [
    "EncounterTypesRepository",
    "LootNamesRepository",
    "MissionsRepository",
    "ModifierPresetsRepository",
    "NamePoolsRepository",
    "RaidBossesRepository",
]
