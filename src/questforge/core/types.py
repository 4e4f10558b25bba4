"""Shared type aliases for the core and domain layers."""
from typing import Literal

StatName = Literal["strength", "dexterity", "wisdom", "charisma", "defense", "luck"]
EncounterCategory = Literal["combat", "puzzle", "trap", "treasure", "boss"]
EquipmentSlot = Literal["weapon", "armor", "accessory"]
RunStatus = Literal["in_progress", "completed", "failed"]

STAT_NAMES: tuple[StatName, ...] = ("strength", "dexterity", "wisdom", "charisma", "defense", "luck")
EQUIPMENT_SLOTS: tuple[EquipmentSlot, ...] = ("weapon", "armor", "accessory")

__all__ = [
    "EQUIPMENT_SLOTS",
    "STAT_NAMES",
    "EncounterCategory",
    "EquipmentSlot",
    "RunStatus",
    "StatName",
]
