"""Synthetic encounter generation and greedy approach selection."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple

from questforge.core.types import EncounterCategory, StatName
from questforge.domain import curves
from questforge.domain.defs import ApproachDef, EncounterTypeDef, NamePoolDef
from questforge.domain.entities import Stats
from questforge.domain.modifiers import NEUTRAL, RunModifiers

DEFAULT_SUCCESS_NARRATIVE = "Success!"
DEFAULT_FAILURE_NARRATIVE = "Failed!"


@dataclass(frozen=True, slots=True)
class Encounter:
    """One immutable combat/challenge unit."""

    index: int
    name: str
    description: str
    category: EncounterCategory
    primary_stat: StatName
    difficulty: int
    is_boss: bool
    bonus_loot_chance: float
    approaches: Tuple[ApproachDef, ...]
    success_narratives: Tuple[str, ...] = ()
    failure_narratives: Tuple[str, ...] = ()


def default_approach(primary_stat: StatName) -> ApproachDef:
    return ApproachDef(name="Direct", description="A straightforward attempt", stat_focus=primary_stat)


def generate_encounter(
    index: int,
    *,
    modifiers: RunModifiers = NEUTRAL,
    encounter_types: Mapping[str, EncounterTypeDef] | None = None,
    name_pool: NamePoolDef | None = None,
) -> Encounter:
    """Build the encounter for a progression index from the curve functions."""
    category = curves.encounter_category(index, all_boss=modifiers.all_boss_encounters)
    primary_stat = curves.primary_stat_for(index)
    is_boss = category == "boss"
    type_def = (encounter_types or {}).get(category)
    approaches = type_def.approaches if type_def and type_def.approaches else (default_approach(primary_stat),)
    name = name_pool.name_for(index) if name_pool else f"Wave {index} Champion"
    description = f"Arena Wave {index}" + (" - BOSS WAVE" if is_boss else "")
    return Encounter(
        index=index,
        name=name,
        description=description,
        category=category,
        primary_stat=primary_stat,
        difficulty=curves.difficulty(index),
        is_boss=is_boss,
        bonus_loot_chance=curves.bonus_loot_chance(category),
        approaches=approaches,
        success_narratives=type_def.success_narratives if type_def else (),
        failure_narratives=type_def.failure_narratives if type_def else (),
    )


def focus_stat(approach: ApproachDef, encounter: Encounter) -> StatName:
    return approach.stat_focus if approach.stat_focus is not None else encounter.primary_stat


def select_best_approach(stats: Stats, encounter: Encounter, modifiers: RunModifiers = NEUTRAL) -> ApproachDef:
    """Greedy pick: the approach whose focus stat is highest for this character.

    Ties keep the earliest approach in catalog order.
    """
    approaches = encounter.approaches or (default_approach(encounter.primary_stat),)
    best = approaches[0]
    best_value = -1.0
    for approach in approaches:
        stat = focus_stat(approach, encounter)
        value = stats.value(stat) * modifiers.focus_multiplier_for(stat)
        if value > best_value:
            best = approach
            best_value = value
    return best


def compute_power(
    stats: Stats, encounter: Encounter, approach: ApproachDef, modifiers: RunModifiers = NEUTRAL
) -> int:
    """Effective power for an approach.

    An approach without a stat focus falls back to the encounter's primary stat
    with a power modifier of 1.0.
    """
    if approach.stat_focus is None:
        stat = encounter.primary_stat
        power_modifier = 1.0
    else:
        stat = approach.stat_focus
        power_modifier = approach.power_modifier
    raw = stats.value(stat) * power_modifier
    raw *= modifiers.damage_deal_multiplier * modifiers.focus_multiplier_for(stat)
    return max(0, int(raw))
