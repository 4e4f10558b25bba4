"""Wave/run simulator: drives the resolver across a sequence of encounters."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Sequence, Tuple, Union

from questforge.core.rng import RandomSource
from questforge.domain import curves
from questforge.domain.encounters import (
    DEFAULT_FAILURE_NARRATIVE,
    DEFAULT_SUCCESS_NARRATIVE,
    Encounter,
    compute_power,
    select_best_approach,
)
from questforge.domain.entities import Character, Equipment, Stats
from questforge.domain.loot import LootRoller, run_drop_chance
from questforge.domain.modifiers import NEUTRAL, RunModifiers
from questforge.domain.rarity import ItemRarity
from questforge.domain.resolver import resolve
from questforge.domain.run_models import DEFAULT_SECONDS_PER_STEP, EncounterResult, MilestoneRecord, RunState
from questforge.domain.stat_model import compute_effective_stats

logger = logging.getLogger("questforge.run")

EncounterSource = Union[Callable[[int], Encounter], Sequence[Encounter]]

# Unbounded runs stop here as completed.
UNBOUNDED_STEP_CEILING = 500


def starting_hp(character: Character, modifiers: RunModifiers = NEUTRAL) -> int:
    """HP the run opens with: the override when set, else the character's current HP."""
    value = modifiers.starting_hp_override if modifiers.starting_hp_override is not None else character.current_hp
    return min(max(0, value), max(0, character.max_hp))


def new_run_state(
    character: Character,
    *,
    run_id: str,
    modifiers: RunModifiers = NEUTRAL,
    started_at: datetime | None = None,
    seconds_per_step: int = DEFAULT_SECONDS_PER_STEP,
) -> RunState:
    return RunState(
        run_id=run_id,
        character_id=character.id,
        current_hp=starting_hp(character, modifiers),
        max_hp=character.max_hp,
        started_at=started_at,
        seconds_per_step=seconds_per_step,
    )


class RunSimulator:
    """Resolves a whole run in one synchronous pass.

    The simulator writes EXP, gold and HP through to the character after every
    step. Callers must not simulate two runs against one character at once.
    """

    def __init__(self, *, loot_roller: LootRoller | None = None, step_ceiling: int = UNBOUNDED_STEP_CEILING) -> None:
        self._loot_roller = loot_roller or LootRoller()
        self._step_ceiling = step_ceiling

    def simulate(
        self,
        state: RunState,
        character: Character,
        encounters: EncounterSource,
        *,
        rng: RandomSource,
        modifiers: RunModifiers = NEUTRAL,
        max_steps: int | None = None,
        now: datetime | None = None,
    ) -> RunState:
        """Run ``state`` to a terminal status and return it.

        ``encounters`` is either a sequence (bounded by its length) or a callable
        mapping a 1-based index to an encounter. ``max_steps=None`` means
        unbounded, up to the step ceiling.
        """
        limit = self._step_limit(encounters, max_steps)
        logger.info(
            "Run %s started for %s (hp=%d/%d, limit=%d)",
            state.run_id,
            character.id,
            state.current_hp,
            state.max_hp,
            limit,
        )
        if state.max_hp <= 0 or state.current_hp <= 0:
            state.finish("failed")
            logger.info("Run %s failed before the first step (no HP)", state.run_id)
            return state
        if limit <= 0:
            state.finish("completed")
            logger.info("Run %s completed with no steps", state.run_id)
            return state

        stats = compute_effective_stats(character, now=now)
        for step in range(limit):
            encounter = self._encounter_at(encounters, step)
            result = self._resolve_step(state, stats, encounter, rng=rng, modifiers=modifiers)
            state.record(result)
            state.set_hp(result.hp_after)
            self._write_through(character, result)
            if state.current_hp <= 0:
                state.finish("failed")
                logger.info("Run %s failed at index %d", state.run_id, encounter.index)
                return state
        state.finish("completed")
        logger.info(
            "Run %s completed: %d steps, exp=%d gold=%d",
            state.run_id,
            len(state.results),
            state.total_exp,
            state.total_gold,
        )
        return state

    def _resolve_step(
        self,
        state: RunState,
        stats: Stats,
        encounter: Encounter,
        *,
        rng: RandomSource,
        modifiers: RunModifiers,
    ) -> EncounterResult:
        approach = select_best_approach(stats, encounter, modifiers)
        power = compute_power(stats, encounter, approach, modifiers)
        resolution = resolve(power, encounter.difficulty, approach, modifiers, rng, index=encounter.index)
        regen = max(0, modifiers.hp_regen_per_step)
        if resolution.success:
            narrative = self._narrative(encounter.success_narratives, DEFAULT_SUCCESS_NARRATIVE, rng)
            milestone = self._claim_milestone(state, encounter.index, stats.luck, rng)
            loot = self._roll_loot(encounter, stats.luck, rng)
            hp_lost = 0
            hp_after = min(state.max_hp, state.current_hp + regen)
        else:
            narrative = self._narrative(encounter.failure_narratives, DEFAULT_FAILURE_NARRATIVE, rng)
            milestone = None
            loot = ()
            hp_lost = min(state.current_hp, resolution.damage)
            hp_after = state.current_hp - hp_lost
            if hp_after > 0:
                hp_after = min(state.max_hp, hp_after + regen)
        return EncounterResult(
            index=encounter.index,
            encounter_name=encounter.name,
            success=resolution.success,
            power=power,
            required_power=encounter.difficulty,
            success_chance=resolution.success_chance,
            roll=resolution.roll,
            exp_earned=resolution.exp,
            gold_earned=resolution.gold,
            hp_lost=hp_lost,
            hp_after=hp_after,
            narrative=narrative,
            approach_name=approach.name,
            milestone=milestone,
            loot=loot,
        )

    def _claim_milestone(
        self, state: RunState, index: int, luck: int, rng: RandomSource
    ) -> MilestoneRecord | None:
        reward = curves.milestone_reward(index)
        if reward is None or state.milestones.is_claimed(index):
            return None
        roll = rng.random()
        rarity: ItemRarity | None = None
        if roll < reward.legendary_chance:
            rarity = ItemRarity.LEGENDARY
        elif roll < reward.legendary_chance + reward.epic_chance:
            rarity = ItemRarity.EPIC
        item: Equipment | None = None
        if rarity is not None:
            item = self._loot_roller.generate_equipment(
                tier=curves.loot_tier_for(index), luck=luck, rng=rng, rarity=rarity
            )
        record = state.milestones.claim(index, MilestoneRecord(index=index, gold=reward.gold, item=item))
        if record is not None:
            logger.debug(
                "Run %s claimed milestone %d (gold=%d, item=%s)",
                state.run_id,
                index,
                record.gold,
                item.name if item else None,
            )
        return record

    def _roll_loot(self, encounter: Encounter, luck: int, rng: RandomSource) -> Tuple[Equipment, ...]:
        if rng.random() >= run_drop_chance(encounter.bonus_loot_chance, luck):
            return ()
        item = self._loot_roller.generate_equipment(tier=curves.loot_tier_for(encounter.index), luck=luck, rng=rng)
        return (item,)

    def _write_through(self, character: Character, result: EncounterResult) -> None:
        gold = result.gold_earned + (result.milestone.gold if result.milestone else 0)
        for reward in character.gain_exp(result.exp_earned):
            logger.info("%s reached level %d (+%d gold)", character.id, reward.level, reward.gold)
        character.gold += gold
        if result.milestone is not None and result.milestone.item is not None:
            character.inventory.append(result.milestone.item)
        character.inventory.extend(result.loot)
        character.set_hp(result.hp_after)

    def _step_limit(self, encounters: EncounterSource, max_steps: int | None) -> int:
        limit = self._step_ceiling if max_steps is None else max_steps
        if not callable(encounters):
            limit = min(limit, len(encounters))
        return limit

    @staticmethod
    def _encounter_at(encounters: EncounterSource, step: int) -> Encounter:
        if callable(encounters):
            return encounters(step + 1)
        return encounters[step]

    @staticmethod
    def _narrative(pool: Sequence[str], fallback: str, rng: RandomSource) -> str:
        if not pool:
            return fallback
        return rng.choice(pool)
