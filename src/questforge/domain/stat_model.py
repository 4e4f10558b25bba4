"""Effective stat aggregation and power scoring."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from questforge.core.types import StatName
from questforge.domain.entities import Character, Equipment, Stats, TemporaryBuff

HERO_POWER_PER_STAT = 10
HERO_POWER_PER_LEVEL = 5
HERO_POWER_PER_EQUIP_BONUS = 8


@dataclass(frozen=True, slots=True)
class StatBreakdown:
    base: Stats
    equipment: Stats
    buffs: Stats
    effective: Stats


def equipment_bonus(equipment: Sequence[Equipment]) -> Stats:
    bonus = Stats()
    for item in equipment:
        bonus = bonus.with_bonus(item.primary_stat, item.stat_bonus)
        if item.secondary_stat is not None:
            bonus = bonus.with_bonus(item.secondary_stat, item.secondary_bonus)
    return bonus


def buff_bonus(buffs: Sequence[TemporaryBuff], *, now: datetime | None = None) -> Stats:
    bonus = Stats()
    for buff in buffs:
        if buff.is_active(now):
            bonus = bonus.with_bonus(buff.stat, buff.amount)
    return bonus


def build_stat_breakdown(
    base: Stats,
    equipment: Sequence[Equipment],
    buffs: Sequence[TemporaryBuff],
    *,
    now: datetime | None = None,
) -> StatBreakdown:
    equip = equipment_bonus(equipment)
    buff = buff_bonus(buffs, now=now)
    return StatBreakdown(
        base=base,
        equipment=equip,
        buffs=buff,
        effective=base.plus(equip).plus(buff).clamped(),
    )


def compute_effective_stats(character: Character, *, now: datetime | None = None) -> Stats:
    """Base + equipment + active buffs, clamped to non-negative."""
    return build_stat_breakdown(character.stats, character.equipment, character.buffs, now=now).effective


def compute_focus_power(stats: Stats, focus: StatName, *, multiplier: float = 1.0) -> int:
    return max(0, int(stats.value(focus) * multiplier))


def compute_hero_power(character: Character, *, now: datetime | None = None) -> int:
    effective = compute_effective_stats(character, now=now)
    equip_total = sum(item.total_stat_bonus for item in character.equipment)
    return (
        effective.total * HERO_POWER_PER_STAT
        + character.level * HERO_POWER_PER_LEVEL
        + equip_total * HERO_POWER_PER_EQUIP_BONUS
    )
