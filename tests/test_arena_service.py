from datetime import datetime, timedelta

import pytest

from questforge.core.rng import RNG
from questforge.data.repositories import (
    EncounterTypesRepository,
    LootNamesRepository,
    ModifierPresetsRepository,
    NamePoolsRepository,
)
from questforge.domain.entities import Character, Stats
from questforge.domain.modifiers import NEUTRAL
from questforge.services.arena_service import (
    ArenaNewBestWaveEvent,
    ArenaRunResolvedEvent,
    ADDITIONAL_ATTEMPT_COST,
    ArenaService,
    attempt_cost,
    best_cleared_wave,
)
from questforge.services.errors import InsufficientGoldError, RunAlreadyResolvedError

_START = datetime(2024, 2, 1, 18, 0, 0)


def test_build_encounter_uses_catalog_names_and_approaches() -> None:
    service = _build_service()

    first = service.build_encounter(1)
    late = service.build_encounter(11)

    assert first.name == "Arena Challenger"
    assert [approach.name for approach in first.approaches] == [
        "Aggressive Strike",
        "Defensive Stance",
        "Tactical Maneuver",
    ]
    assert first.success_narratives
    assert late.name == "Wave 11 Champion"


def test_presets_resolve_to_modifiers() -> None:
    service = _build_service()

    boss_rush = service.preset_modifiers("boss_rush")

    assert service.preset_modifiers(None) is NEUTRAL
    assert boss_rush.all_boss_encounters is True
    assert service.build_encounter(2, boss_rush).is_boss is True
    with pytest.raises(KeyError):
        service.preset_modifiers("missing")


def test_resolve_run_reports_summary_and_new_best() -> None:
    service = _build_service()
    character = _character(stat=40)
    run = service.start_run(character, max_waves=8, started_at=_START, run_id="arena_1")

    events = service.resolve_run(run, character, rng=RNG(11))

    summary = events[0]
    assert isinstance(summary, ArenaRunResolvedEvent)
    assert summary.run_id == "arena_1"
    assert summary.status == run.state.status
    assert summary.waves_cleared == best_cleared_wave(run.state)
    assert run.is_resolved
    if summary.waves_cleared > 0:
        assert isinstance(events[1], ArenaNewBestWaveEvent)
        assert character.arena_best_wave == summary.waves_cleared


def test_second_resolution_is_rejected() -> None:
    service = _build_service()
    character = _character(stat=40)
    run = service.start_run(character, max_waves=3, run_id="arena_2")
    service.resolve_run(run, character, rng=RNG(1))
    results_before = list(run.state.results)

    with pytest.raises(RunAlreadyResolvedError):
        service.resolve_run(run, character, rng=RNG(1))
    assert run.state.results == results_before


def test_best_wave_only_moves_up() -> None:
    service = _build_service()
    character = _character(stat=40)
    character.arena_best_wave = 500

    run = service.start_run(character, max_waves=5, run_id="arena_3")
    events = service.resolve_run(run, character, rng=RNG(2))

    assert character.arena_best_wave == 500
    assert not any(isinstance(event, ArenaNewBestWaveEvent) for event in events)


def test_same_seed_same_arena_results() -> None:
    service = _build_service()
    hero_a = _character(stat=30)
    hero_b = _character(stat=30)
    run_a = service.start_run(hero_a, max_waves=15, run_id="a")
    run_b = service.start_run(hero_b, max_waves=15, run_id="b")

    service.resolve_run(run_a, hero_a, rng=RNG(404))
    service.resolve_run(run_b, hero_b, rng=RNG(404))

    assert run_a.state.results == run_b.state.results


def test_endless_run_ends_in_defeat_for_a_weak_character() -> None:
    service = _build_service()
    character = _character(stat=1)
    run = service.start_run(character, max_waves=None, run_id="endless")

    service.resolve_run(run, character, rng=RNG(6))

    assert run.state.status == "failed"
    assert character.current_hp == 0


def test_run_cannot_be_resolved_for_another_character() -> None:
    service = _build_service()
    owner = _character(stat=10)
    other = Character(id="other", name="Other")
    run = service.start_run(owner, max_waves=3, run_id="arena_4")

    with pytest.raises(ValueError):
        service.resolve_run(run, other, rng=RNG(1))


def test_first_daily_attempt_is_free_then_costs_gold() -> None:
    service = _build_service()
    character = _character(stat=10)
    character.gold = 120

    first = service.start_run(character, max_waves=1, started_at=_START, run_id="day1_a")
    second = service.start_run(character, max_waves=1, started_at=_START, run_id="day1_b")

    assert first.entry_cost == 0
    assert second.entry_cost == ADDITIONAL_ATTEMPT_COST
    assert character.gold == 120 - ADDITIONAL_ATTEMPT_COST
    assert character.arena_attempts_today == 2
    assert attempt_cost(character, _START.date()) == ADDITIONAL_ATTEMPT_COST


def test_extra_attempt_without_gold_is_rejected() -> None:
    service = _build_service()
    character = _character(stat=10)
    character.gold = ADDITIONAL_ATTEMPT_COST - 1
    service.start_run(character, max_waves=1, started_at=_START, run_id="free")

    with pytest.raises(InsufficientGoldError):
        service.start_run(character, max_waves=1, started_at=_START, run_id="paid")

    assert character.gold == ADDITIONAL_ATTEMPT_COST - 1
    assert character.arena_attempts_today == 1


def test_attempt_counter_resets_on_a_new_day() -> None:
    service = _build_service()
    character = _character(stat=10)
    service.start_run(character, max_waves=1, started_at=_START, run_id="today")

    tomorrow = _START + timedelta(days=1)
    run = service.start_run(character, max_waves=1, started_at=tomorrow, run_id="tomorrow")

    assert run.entry_cost == 0
    assert character.gold == 0
    assert character.arena_attempts_on(tomorrow.date()) == 1
    assert character.last_arena_date == tomorrow.date()


def _build_service() -> ArenaService:
    return ArenaService(
        encounter_types_repo=EncounterTypesRepository(),
        name_pools_repo=NamePoolsRepository(),
        loot_names_repo=LootNamesRepository(),
        presets_repo=ModifierPresetsRepository(),
    )


def _character(stat: int) -> Character:
    return Character(id="hero", name="Hero", stats=Stats.uniform(stat))
