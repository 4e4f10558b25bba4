"""AFK missions: timed, stat-gated jobs resolved with a single success roll."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List

from questforge.core.rng import RNG, RandomSource
from questforge.data.repositories import MissionsRepository
from questforge.domain.defs import MissionDef
from questforge.domain.entities import Character, Equipment, Stats
from questforge.domain.loot import LootRoller
from questforge.domain.rarity import ItemRarity
from questforge.domain.stat_model import compute_effective_stats
from questforge.services.errors import (
    MissionAlreadyActiveError,
    MissionNotReadyError,
    RequirementsNotMetError,
    RewardAlreadyClaimedError,
)
from questforge.services.factories import make_instance_id

logger = logging.getLogger("questforge.missions")

SUCCESS_PER_EXCESS_POINT = 0.01
SUCCESS_PER_LUCK_POINT = 0.005
SUCCESS_RATE_CAP = 0.99
ITEM_DROP_BASE = 0.10
ITEM_DROP_PER_LUCK = 0.01
ITEM_DROP_CAP = 0.50

_STAT_REWARD_CHANCE: Dict[ItemRarity, float] = {
    ItemRarity.COMMON: 0.50,
    ItemRarity.UNCOMMON: 0.60,
    ItemRarity.RARE: 0.70,
    ItemRarity.EPIC: 0.80,
    ItemRarity.LEGENDARY: 0.90,
}

_DROP_TIER: Dict[ItemRarity, int] = {
    ItemRarity.COMMON: 1,
    ItemRarity.UNCOMMON: 1,
    ItemRarity.RARE: 2,
    ItemRarity.EPIC: 3,
    ItemRarity.LEGENDARY: 4,
}


def mission_success_rate(mission: MissionDef, stats: Stats) -> float:
    """Base rate plus 1% per point above each requirement and 0.5% per luck."""
    rate = mission.base_success_rate
    for requirement in mission.stat_requirements:
        excess = stats.value(requirement.stat) - requirement.minimum
        if excess > 0:
            rate += excess * SUCCESS_PER_EXCESS_POINT
    rate += max(0, stats.luck) * SUCCESS_PER_LUCK_POINT
    return min(rate, SUCCESS_RATE_CAP)


def stat_reward_chance(mission: MissionDef) -> float:
    return _STAT_REWARD_CHANCE[mission.rarity]


def drop_tier(mission: MissionDef) -> int:
    return _DROP_TIER[mission.rarity]


def item_drop_chance(mission: MissionDef, luck: int) -> float:
    if not mission.can_drop_equipment:
        return 0.0
    return min(ITEM_DROP_BASE + max(0, luck) * ITEM_DROP_PER_LUCK, ITEM_DROP_CAP)


@dataclass(slots=True)
class ActiveMission:
    """A started mission; ``reward_claimed`` guards against double resolution."""

    id: str
    mission_id: str
    character_id: str
    started_at: datetime
    completes_at: datetime
    reward_claimed: bool = False
    was_successful: bool | None = None
    earned_exp: int = 0
    earned_gold: int = 0
    earned_item: Equipment | None = None

    def is_complete(self, now: datetime) -> bool:
        return now >= self.completes_at


@dataclass(slots=True)
class MissionEvent:
    """Base class for mission events."""


@dataclass(slots=True)
class MissionSucceededEvent(MissionEvent):
    mission_id: str
    exp: int
    gold: int
    success_rate: float
    roll: float


@dataclass(slots=True)
class MissionFailedEvent(MissionEvent):
    mission_id: str
    success_rate: float
    roll: float


@dataclass(slots=True)
class MissionStatGainedEvent(MissionEvent):
    stat: str
    amount: int


@dataclass(slots=True)
class MissionItemDroppedEvent(MissionEvent):
    item: Equipment


class MissionService:
    """Starts missions and resolves them once their timer has elapsed.

    Each character may have one unclaimed mission at a time.
    """

    def __init__(self, *, missions_repo: MissionsRepository, loot_roller: LootRoller | None = None) -> None:
        self._missions_repo = missions_repo
        self._loot_roller = loot_roller or LootRoller()
        self._active_by_character: Dict[str, ActiveMission] = {}

    def active_mission(self, character_id: str) -> ActiveMission | None:
        return self._active_by_character.get(character_id)

    def available_missions(self, character: Character, *, now: datetime | None = None) -> List[MissionDef]:
        return [mission for mission in self._missions_repo.all() if self.meets_requirements(mission, character, now=now)]

    def meets_requirements(self, mission: MissionDef, character: Character, *, now: datetime | None = None) -> bool:
        if character.level < mission.level_requirement:
            return False
        stats = compute_effective_stats(character, now=now)
        return all(stats.value(req.stat) >= req.minimum for req in mission.stat_requirements)

    def start_mission(
        self,
        character: Character,
        mission_id: str,
        *,
        now: datetime,
        mission_run_id: str | None = None,
    ) -> ActiveMission:
        current = self._active_by_character.get(character.id)
        if current is not None and not current.reward_claimed:
            logger.warning("%s already has mission %s in progress", character.id, current.id)
            raise MissionAlreadyActiveError(
                f"Character '{character.id}' is already on mission '{current.mission_id}'."
            )
        mission = self._missions_repo.get(mission_id)
        if not self.meets_requirements(mission, character, now=now):
            logger.warning("%s does not meet the requirements for mission %s", character.id, mission_id)
            raise RequirementsNotMetError(f"Character '{character.id}' cannot start mission '{mission_id}'.")
        active = ActiveMission(
            id=mission_run_id or make_instance_id("mission", RNG()),
            mission_id=mission.id,
            character_id=character.id,
            started_at=now,
            completes_at=now + timedelta(seconds=mission.duration_seconds),
        )
        self._active_by_character[character.id] = active
        logger.info("Mission %s (%s) started; completes at %s", active.id, mission.id, active.completes_at.isoformat())
        return active

    def complete_mission(
        self,
        active: ActiveMission,
        character: Character,
        *,
        now: datetime,
        rng: RandomSource,
    ) -> List[MissionEvent]:
        """Roll the mission outcome and write rewards through to ``character``."""
        if active.character_id != character.id:
            raise ValueError(f"Mission '{active.id}' belongs to character '{active.character_id}'.")
        if active.reward_claimed:
            logger.warning("Rejected second claim of mission %s", active.id)
            raise RewardAlreadyClaimedError(f"Mission '{active.id}' has already been claimed.")
        if not active.is_complete(now):
            raise MissionNotReadyError(
                f"Mission '{active.id}' completes at {active.completes_at.isoformat()}."
            )
        mission = self._missions_repo.get(active.mission_id)
        stats = compute_effective_stats(character, now=now)
        rate = mission_success_rate(mission, stats)
        roll = rng.random()
        success = roll <= rate
        active.reward_claimed = True
        active.was_successful = success
        if self._active_by_character.get(character.id) is active:
            del self._active_by_character[character.id]
        if not success:
            logger.info("Mission %s failed (roll %.3f > %.3f)", active.id, roll, rate)
            return [MissionFailedEvent(mission_id=mission.id, success_rate=rate, roll=roll)]

        events: List[MissionEvent] = [
            MissionSucceededEvent(
                mission_id=mission.id,
                exp=mission.exp_reward,
                gold=mission.gold_reward,
                success_rate=rate,
                roll=roll,
            )
        ]
        character.gain_exp(mission.exp_reward)
        character.gold += mission.gold_reward
        active.earned_exp = mission.exp_reward
        active.earned_gold = mission.gold_reward

        if rng.random() <= stat_reward_chance(mission):
            character.stats = character.stats.with_bonus(mission.primary_stat, 1)
            events.append(MissionStatGainedEvent(stat=mission.primary_stat, amount=1))

        chance = item_drop_chance(mission, stats.luck)
        if chance > 0 and rng.random() <= chance:
            item = self._loot_roller.generate_equipment(tier=drop_tier(mission), luck=stats.luck, rng=rng)
            active.earned_item = item
            character.inventory.append(item)
            events.append(MissionItemDroppedEvent(item=item))
        logger.info("Mission %s succeeded (+%d exp, +%d gold)", active.id, mission.exp_reward, mission.gold_reward)
        return events
