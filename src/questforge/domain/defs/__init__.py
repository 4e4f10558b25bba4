"""Domain definition exports."""

from .approach_def import ApproachDef
from .encounter_def import EncounterTypeDef, NamePoolDef
from .loot_names_def import LootNamesDef
from .mission_def import MissionDef, StatRequirementDef
from .modifier_preset_def import ModifierPresetDef
from .raid_boss_def import RaidBossTemplateDef

__all__ = [
    "ApproachDef",
    "EncounterTypeDef",
    "LootNamesDef",
    "MissionDef",
    "ModifierPresetDef",
    "NamePoolDef",
    "RaidBossTemplateDef",
    "StatRequirementDef",
]
