"""Weekly raid bosses: shared HP pools whittled down by capped daily attacks."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import List, Tuple

from questforge.core.rng import RNG, RandomSource
from questforge.core.types import StatName
from questforge.data.repositories import RaidBossesRepository
from questforge.domain.defs import RaidBossTemplateDef
from questforge.domain.entities import Character, Equipment
from questforge.domain.loot import LootRoller
from questforge.domain.stat_model import compute_effective_stats
from questforge.services.errors import RewardAlreadyClaimedError
from questforge.services.factories import make_instance_id

logger = logging.getLogger("questforge.raid")

DAILY_ATTACK_CAP = 5
MIN_RAID_DAMAGE = 10
DAMAGE_PER_LEVEL = 2
BOND_EXP_PER_TIER = 15
LEVELS_PER_TIER = 10
MIN_RAID_LOOT_TIER = 2
_PARTY_SCALE = {1: 1.0, 2: 1.8, 3: 2.4, 4: 3.0}
_MAX_PARTY_SCALE = 3.0


def tier_for_level(average_level: int) -> int:
    return max(1, math.ceil(average_level / LEVELS_PER_TIER))


def party_scale_factor(member_count: int) -> float:
    """Sublinear HP scaling: solo 1x, then 1.8x, 2.4x, and 3x for four or more."""
    return _PARTY_SCALE.get(max(1, member_count), _MAX_PARTY_SCALE)


def raid_damage(character: Character, *, now: datetime | None = None) -> int:
    stats = compute_effective_stats(character, now=now)
    return max(MIN_RAID_DAMAGE, character.level * DAMAGE_PER_LEVEL + stats.total)


def week_bounds(now: datetime) -> Tuple[datetime, datetime]:
    """Monday 00:00 of ``now``'s week and the following Monday."""
    monday = now.date() - timedelta(days=now.weekday())
    start = datetime.combine(monday, time.min, tzinfo=now.tzinfo)
    return start, start + timedelta(days=7)


@dataclass(frozen=True, slots=True)
class RaidAttack:
    player_id: str
    player_name: str
    damage: int
    timestamp: datetime
    source: str = ""


@dataclass(frozen=True, slots=True)
class RaidBossLoot:
    gold: int
    exp: int
    bond_exp: int
    guaranteed_consumable: str | None = None
    equipment: Equipment | None = None


@dataclass(slots=True)
class WeeklyRaidBoss:
    """One week's boss; defeat is one-way and HP never drops below zero."""

    id: str
    template_id: str
    name: str
    description: str
    tier: int
    max_hp: int
    current_hp: int
    week_start: datetime
    week_end: datetime
    party_scale: float = 1.0
    is_defeated: bool = False
    rewards_claimed: bool = False
    attack_log: List[RaidAttack] = field(default_factory=list)

    def is_expired(self, now: datetime) -> bool:
        return now > self.week_end

    def is_active(self, now: datetime) -> bool:
        return not self.is_defeated and not self.is_expired(now)

    def attacks_on(self, player_id: str, day: date) -> int:
        return sum(1 for attack in self.attack_log if attack.player_id == player_id and attack.timestamp.date() == day)

    def has_reached_daily_cap(self, player_id: str, day: date) -> bool:
        return self.attacks_on(player_id, day) >= DAILY_ATTACK_CAP

    def take_damage(self, attack: RaidAttack) -> None:
        self.attack_log.append(attack)
        self.current_hp = max(0, self.current_hp - attack.damage)
        if self.current_hp <= 0:
            self.is_defeated = True


@dataclass(slots=True)
class RaidEvent:
    """Base class for raid events."""


@dataclass(slots=True)
class RaidAttackEvent(RaidEvent):
    boss_id: str
    damage: int
    boss_hp: int
    boss_max_hp: int
    attacks_today: int


@dataclass(slots=True)
class RaidBossDefeatedEvent(RaidEvent):
    boss_id: str
    boss_name: str
    finishing_player_id: str


@dataclass(slots=True)
class RaidRewardsClaimedEvent(RaidEvent):
    boss_id: str
    loot: RaidBossLoot


@dataclass(slots=True)
class RaidActionFailedEvent(RaidEvent):
    reason: str
    message: str


class RaidService:
    """Spawns weekly bosses from templates and applies attacks."""

    def __init__(self, *, raid_bosses_repo: RaidBossesRepository, loot_roller: LootRoller | None = None) -> None:
        self._raid_bosses_repo = raid_bosses_repo
        self._loot_roller = loot_roller or LootRoller()

    def spawn_boss(
        self,
        *,
        average_level: int,
        party_size: int,
        now: datetime,
        rng: RandomSource,
        template_id: str | None = None,
    ) -> WeeklyRaidBoss:
        template = self._pick_template(template_id, rng)
        tier = tier_for_level(average_level)
        scale = party_scale_factor(party_size)
        max_hp = int(template.base_hp_per_tier * tier * scale)
        start, end = week_bounds(now)
        boss = WeeklyRaidBoss(
            id=make_instance_id("raid", RNG()),
            template_id=template.id,
            name=template.name,
            description=template.description,
            tier=tier,
            max_hp=max_hp,
            current_hp=max_hp,
            week_start=start,
            week_end=end,
            party_scale=scale,
        )
        logger.info("Spawned raid boss %s (%s) tier %d with %d HP", boss.id, template.id, tier, max_hp)
        return boss

    def attack(
        self,
        boss: WeeklyRaidBoss,
        character: Character,
        *,
        now: datetime,
        stat: StatName | None = None,
        source: str = "",
    ) -> List[RaidEvent]:
        """Apply one attack; rejected attacks return a failure event."""
        if boss.is_defeated:
            return [RaidActionFailedEvent(reason="boss_defeated", message="The boss has already fallen.")]
        if boss.is_expired(now):
            return [RaidActionFailedEvent(reason="boss_expired", message="This week's raid has ended.")]
        if boss.has_reached_daily_cap(character.id, now.date()):
            logger.warning("%s hit the daily raid attack cap on %s", character.id, boss.id)
            return [
                RaidActionFailedEvent(
                    reason="daily_cap_reached",
                    message=f"Only {DAILY_ATTACK_CAP} attacks are allowed per day.",
                )
            ]
        template = self._raid_bosses_repo.find(boss.template_id)
        damage = raid_damage(character, now=now)
        if template is not None:
            damage = template.modified_damage(damage, stat)
        boss.take_damage(
            RaidAttack(player_id=character.id, player_name=character.name, damage=damage, timestamp=now, source=source)
        )
        logger.debug("%s hit %s for %d (%d HP left)", character.id, boss.id, damage, boss.current_hp)
        events: List[RaidEvent] = [
            RaidAttackEvent(
                boss_id=boss.id,
                damage=damage,
                boss_hp=boss.current_hp,
                boss_max_hp=boss.max_hp,
                attacks_today=boss.attacks_on(character.id, now.date()),
            )
        ]
        if boss.is_defeated:
            logger.info("Raid boss %s defeated by %s", boss.id, character.id)
            events.append(RaidBossDefeatedEvent(boss_id=boss.id, boss_name=boss.name, finishing_player_id=character.id))
        return events

    def claim_rewards(self, boss: WeeklyRaidBoss, character: Character, *, rng: RandomSource) -> List[RaidEvent]:
        """Grant defeat loot once; raises :class:`RewardAlreadyClaimedError` on repeats."""
        if not boss.is_defeated:
            return [RaidActionFailedEvent(reason="not_defeated", message="The boss is still standing.")]
        if boss.rewards_claimed:
            raise RewardAlreadyClaimedError(f"Rewards for raid '{boss.id}' have already been claimed.")
        loot = self.roll_loot(boss, luck=compute_effective_stats(character).luck, rng=rng)
        boss.rewards_claimed = True
        character.gain_exp(loot.exp)
        character.gold += loot.gold
        if loot.equipment is not None:
            character.inventory.append(loot.equipment)
        return [RaidRewardsClaimedEvent(boss_id=boss.id, loot=loot)]

    def roll_loot(self, boss: WeeklyRaidBoss, *, luck: int, rng: RandomSource) -> RaidBossLoot:
        template = self._raid_bosses_repo.find(boss.template_id) or _fallback_template(boss)
        equipment = None
        if rng.random() <= template.equip_drop_chance:
            equipment = self._loot_roller.generate_equipment(
                tier=max(MIN_RAID_LOOT_TIER, boss.tier), luck=luck, rng=rng
            )
        return RaidBossLoot(
            gold=template.gold_reward_per_tier * boss.tier,
            exp=template.exp_reward_per_tier * boss.tier,
            bond_exp=boss.tier * BOND_EXP_PER_TIER,
            guaranteed_consumable=template.guaranteed_consumable,
            equipment=equipment,
        )

    def _pick_template(self, template_id: str | None, rng: RandomSource) -> RaidBossTemplateDef:
        if template_id is not None:
            return self._raid_bosses_repo.get(template_id)
        templates = self._raid_bosses_repo.all()
        if not templates:
            raise KeyError("raid_bosses catalog is empty")
        return rng.choice(templates)


def _fallback_template(boss: WeeklyRaidBoss) -> RaidBossTemplateDef:
    logger.debug("Raid template %s missing; using default rewards", boss.template_id)
    return RaidBossTemplateDef(id=boss.template_id, name=boss.name, description=boss.description)
