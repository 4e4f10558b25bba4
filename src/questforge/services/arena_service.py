"""Arena runs: bounded or endless wave sequences over generated encounters."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, List

from questforge.core.rng import RNG, RandomSource
from questforge.data.repositories import (
    EncounterTypesRepository,
    LootNamesRepository,
    ModifierPresetsRepository,
    NamePoolsRepository,
)
from questforge.domain.defs import ModifierPresetDef
from questforge.domain.encounters import Encounter, generate_encounter
from questforge.domain.entities import Character
from questforge.domain.loot import LootRoller
from questforge.domain.modifiers import NEUTRAL, RunModifiers
from questforge.domain.run_models import DEFAULT_SECONDS_PER_STEP, RunState
from questforge.services.errors import InsufficientGoldError, RunAlreadyResolvedError
from questforge.services.factories import make_instance_id
from questforge.services.run_simulator import RunSimulator, new_run_state

logger = logging.getLogger("questforge.arena")

ARENA_NAME_POOL = "arena"
FREE_ATTEMPTS_PER_DAY = 1
ADDITIONAL_ATTEMPT_COST = 50


@dataclass(slots=True)
class ArenaEvent:
    """Base class for arena-related events."""


@dataclass(slots=True)
class ArenaRunResolvedEvent(ArenaEvent):
    run_id: str
    status: str
    waves_cleared: int
    highest_index_reached: int
    total_exp: int
    total_gold: int
    loot_count: int


@dataclass(slots=True)
class ArenaNewBestWaveEvent(ArenaEvent):
    previous_best: int
    new_best: int


@dataclass(slots=True)
class ArenaRun:
    """An arena run and the options it was started with."""

    state: RunState
    modifiers: RunModifiers
    max_waves: int | None
    entry_cost: int = 0

    @property
    def run_id(self) -> str:
        return self.state.run_id

    @property
    def is_resolved(self) -> bool:
        return self.state.is_terminal


class ArenaService:
    """Builds arena encounters from the catalog and resolves runs once."""

    def __init__(
        self,
        *,
        encounter_types_repo: EncounterTypesRepository,
        name_pools_repo: NamePoolsRepository,
        loot_names_repo: LootNamesRepository | None = None,
        presets_repo: ModifierPresetsRepository | None = None,
        seconds_per_step: int = DEFAULT_SECONDS_PER_STEP,
    ) -> None:
        self._encounter_types_repo = encounter_types_repo
        self._name_pools_repo = name_pools_repo
        self._presets_repo = presets_repo
        self._seconds_per_step = seconds_per_step
        names = loot_names_repo.names() if loot_names_repo is not None else None
        self._simulator = RunSimulator(loot_roller=LootRoller(names))

    def list_presets(self) -> List[ModifierPresetDef]:
        if self._presets_repo is None:
            return []
        return self._presets_repo.all()

    def preset_modifiers(self, preset_id: str | None) -> RunModifiers:
        """Modifiers for a named preset; ``None`` means neutral."""
        if preset_id is None:
            return NEUTRAL
        if self._presets_repo is None:
            raise KeyError(preset_id)
        return self._presets_repo.get(preset_id).modifiers

    def build_encounter(self, index: int, modifiers: RunModifiers = NEUTRAL) -> Encounter:
        return self._encounter_factory(modifiers)(index)

    def start_run(
        self,
        character: Character,
        *,
        max_waves: int | None,
        modifiers: RunModifiers = NEUTRAL,
        started_at: datetime | None = None,
        run_id: str | None = None,
    ) -> ArenaRun:
        """Open a run; ``max_waves=None`` starts an endless run.

        The first attempt each day is free; later ones cost gold. Raises
        :class:`InsufficientGoldError` when the character cannot pay.
        """
        day = (started_at or datetime.now()).date()
        cost = attempt_cost(character, day)
        if character.gold < cost:
            logger.warning("%s cannot pay %d gold for another arena attempt", character.id, cost)
            raise InsufficientGoldError(f"Another arena attempt today costs {cost} gold.")
        character.gold -= cost
        character.record_arena_attempt(day)
        state = new_run_state(
            character,
            run_id=run_id or make_instance_id("arena", RNG()),
            modifiers=modifiers,
            started_at=started_at,
            seconds_per_step=self._seconds_per_step,
        )
        logger.info(
            "%s opened arena run %s (attempt %d, cost %d)",
            character.id,
            state.run_id,
            character.arena_attempts_today,
            cost,
        )
        return ArenaRun(state=state, modifiers=modifiers, max_waves=max_waves, entry_cost=cost)

    def resolve_run(
        self,
        run: ArenaRun,
        character: Character,
        *,
        rng: RandomSource,
        now: datetime | None = None,
    ) -> List[ArenaEvent]:
        """Pre-simulate every wave of ``run`` at once.

        Raises :class:`RunAlreadyResolvedError` when the run is already terminal.
        """
        if run.is_resolved:
            logger.warning("Rejected second resolution of run %s (%s)", run.run_id, run.state.status)
            raise RunAlreadyResolvedError(f"Run '{run.run_id}' is already {run.state.status}.")
        if run.state.character_id != character.id:
            raise ValueError(f"Run '{run.run_id}' belongs to character '{run.state.character_id}'.")
        state = self._simulator.simulate(
            run.state,
            character,
            self._encounter_factory(run.modifiers),
            rng=rng,
            modifiers=run.modifiers,
            max_steps=run.max_waves,
            now=now,
        )
        waves_cleared = best_cleared_wave(state)
        events: List[ArenaEvent] = [
            ArenaRunResolvedEvent(
                run_id=state.run_id,
                status=state.status,
                waves_cleared=waves_cleared,
                highest_index_reached=state.highest_index_reached,
                total_exp=state.total_exp,
                total_gold=state.total_gold,
                loot_count=len(state.loot),
            )
        ]
        if waves_cleared > character.arena_best_wave:
            events.append(ArenaNewBestWaveEvent(previous_best=character.arena_best_wave, new_best=waves_cleared))
            logger.info("%s set a new arena best: wave %d", character.id, waves_cleared)
            character.arena_best_wave = waves_cleared
        return events

    def _encounter_factory(self, modifiers: RunModifiers) -> Callable[[int], Encounter]:
        encounter_types = self._encounter_types_repo.as_mapping()
        name_pool = self._name_pools_repo.find(ARENA_NAME_POOL)
        if name_pool is None:
            logger.debug("No '%s' name pool in catalog; using fallback names", ARENA_NAME_POOL)

        def encounter_for(index: int) -> Encounter:
            return generate_encounter(
                index, modifiers=modifiers, encounter_types=encounter_types, name_pool=name_pool
            )

        return encounter_for


def attempt_cost(character: Character, day: date) -> int:
    """Gold owed for the next arena attempt on ``day``."""
    if character.arena_attempts_on(day) < FREE_ATTEMPTS_PER_DAY:
        return 0
    return ADDITIONAL_ATTEMPT_COST


def best_cleared_wave(state: RunState) -> int:
    """Highest wave index the run cleared successfully (0 when none)."""
    cleared = [result.index for result in state.results if result.success]
    return max(cleared, default=0)
