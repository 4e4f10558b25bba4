from datetime import datetime, timedelta

import pytest

from questforge.core.rng import RNG
from questforge.domain import curves
from questforge.domain.defs import ApproachDef
from questforge.domain.encounters import Encounter, generate_encounter
from questforge.domain.entities import Character, Stats
from questforge.domain.modifiers import RunModifiers
from questforge.services.run_simulator import RunSimulator, new_run_state

_START = datetime(2024, 1, 1, 9, 0, 0)


def test_twelve_linear_steps_complete_with_exp_from_successes_only() -> None:
    character = _character(strength=100)
    state = _simulate(character, _linear_encounters(12), rng=RNG(1234))

    assert state.status == "completed"
    assert [result.index for result in state.results] == list(range(1, 13))
    assert all(result.power == 100 for result in state.results)
    assert [result.required_power for result in state.results] == [15 + 5 * i for i in range(1, 13)]
    assert state.total_exp == sum(15 * result.index for result in state.results if result.success)


def test_same_seed_reproduces_identical_results() -> None:
    first = _simulate(_character(strength=40), _linear_encounters(12), rng=RNG(99))
    second = _simulate(_character(strength=40), _linear_encounters(12), rng=RNG(99))

    assert first.results == second.results
    assert first.status == second.status
    assert first.loot == second.loot


def test_forced_failures_stop_when_hp_runs_out() -> None:
    character = _character(strength=10, current_hp=40, max_hp=40)

    state = _simulate(character, _linear_encounters(12), rng=_FixedRNG(1.0))

    # Damage per step: 10, 15, 22 -> cumulative 47 >= 40 at index 3.
    assert state.status == "failed"
    assert [result.hp_lost for result in state.results] == [10, 15, 15]
    assert state.highest_index_reached == 3
    assert state.current_hp == 0
    assert character.current_hp == 0
    assert all(not result.success for result in state.results)


def test_hp_always_within_bounds() -> None:
    modifiers = RunModifiers(hp_regen_per_step=7, damage_taken_multiplier=1.5)
    for seed in range(20):
        character = _character(strength=30, current_hp=60, max_hp=60)
        state = new_run_state(character, run_id=f"run_{seed}", modifiers=modifiers)
        RunSimulator().simulate(
            state,
            character,
            lambda index: generate_encounter(index, modifiers=modifiers),
            rng=RNG(seed),
            modifiers=modifiers,
            max_steps=40,
        )
        assert all(0 <= result.hp_after <= 60 for result in state.results)
        assert 0 <= state.current_hp <= 60


def test_milestone_claimed_at_most_once() -> None:
    character = _character(strength=1000)
    encounters = [_encounter(5), _encounter(5), _encounter(10)]

    state = _simulate(character, encounters, rng=_FixedRNG(0.0))

    assert state.results[0].milestone_triggered
    assert not state.results[1].milestone_triggered
    assert state.results[2].milestone_triggered
    assert state.milestones.claimed == {5, 10}
    assert state.total_gold == 50 + 50 + 100 + 50 + 100


def test_milestone_drop_rolls_epic_item_under_chance() -> None:
    state = _simulate(_character(strength=1000), [_encounter(5)], rng=_FixedRNG(0.0))

    record = state.results[0].milestone
    assert record is not None
    assert record.item is not None
    assert record.item.rarity.label == "Epic"
    assert record.item in state.loot


def test_zero_steps_completes_immediately() -> None:
    state = _simulate(_character(), _linear_encounters(5), rng=_ExplodingRNG(), max_steps=0)

    assert state.status == "completed"
    assert state.results == []


def test_non_positive_max_hp_fails_immediately() -> None:
    character = _character(current_hp=0, max_hp=0)

    state = _simulate(character, _linear_encounters(5), rng=_ExplodingRNG())

    assert state.status == "failed"
    assert state.results == []


def test_unbounded_run_stops_at_ceiling() -> None:
    character = _character(strength=10**6, current_hp=100, max_hp=100)
    state = new_run_state(character, run_id="endless")

    RunSimulator(step_ceiling=20).simulate(state, character, lambda index: _encounter(index), rng=RNG(8))

    assert state.status == "completed"
    assert len(state.results) == 20


def test_sequence_length_bounds_the_run() -> None:
    state = _simulate(_character(strength=100), _linear_encounters(3), rng=RNG(4), max_steps=10)

    assert len(state.results) == 3


def test_rewards_write_through_to_character() -> None:
    character = _character(strength=60)

    state = _simulate(character, _linear_encounters(8), rng=RNG(21))

    assert character.exp == state.total_exp
    assert character.current_hp == state.current_hp
    assert character.inventory == state.loot
    level_up_gold = sum(level * 10 for level in range(2, character.level + 1))
    assert character.gold == state.total_gold + level_up_gold


def test_starting_hp_override_and_regen() -> None:
    character = _character(strength=1000, current_hp=100, max_hp=100)
    modifiers = RunModifiers(starting_hp_override=50, hp_regen_per_step=5)
    state = new_run_state(character, run_id="regen", modifiers=modifiers)

    assert state.current_hp == 50
    RunSimulator().simulate(state, character, [_encounter(1)], rng=_FixedRNG(0.0), modifiers=modifiers)

    assert state.results[0].hp_after == 55
    assert character.current_hp == 55


def test_reveal_throttle_tracks_virtual_time() -> None:
    character = _character(strength=100)
    state = new_run_state(character, run_id="reveal", started_at=_START, seconds_per_step=30)
    RunSimulator().simulate(state, character, _linear_encounters(4), rng=RNG(3), max_steps=4)

    assert state.virtual_duration_seconds == 120
    assert state.completes_at == _START + timedelta(seconds=120)
    assert state.revealed_count(_START) == 0
    assert len(state.revealed_results(_START + timedelta(seconds=65))) == 2
    assert state.revealed_count(_START + timedelta(hours=1)) == 4


def test_terminal_run_rejects_further_mutation() -> None:
    character = _character(strength=100)
    state = _simulate(character, _linear_encounters(2), rng=RNG(5))

    with pytest.raises(ValueError):
        state.set_hp(10)
    with pytest.raises(ValueError):
        state.finish("failed")


class _FixedRNG:
    def __init__(self, value: float) -> None:
        self._value = value

    def random(self) -> float:
        return self._value

    def randint(self, a: int, b: int) -> int:
        return a

    def choice(self, seq):
        return seq[0]


class _ExplodingRNG:
    def random(self) -> float:
        raise AssertionError("no draw expected")

    def randint(self, a: int, b: int) -> int:
        raise AssertionError("no draw expected")

    def choice(self, seq):
        raise AssertionError("no draw expected")


def _simulate(character: Character, encounters, *, rng, max_steps=None):
    state = new_run_state(character, run_id="test_run")
    return RunSimulator().simulate(state, character, encounters, rng=rng, max_steps=max_steps)


def _character(strength: int = 10, current_hp: int = 100, max_hp: int = 100) -> Character:
    return Character(
        id="hero",
        name="Hero",
        stats=Stats(strength=strength),
        current_hp=current_hp,
        max_hp=max_hp,
    )


def _encounter(index: int, difficulty: int | None = None) -> Encounter:
    return Encounter(
        index=index,
        name=f"Step {index}",
        description="",
        category="combat",
        primary_stat="strength",
        difficulty=curves.difficulty(index) if difficulty is None else difficulty,
        is_boss=False,
        bonus_loot_chance=0.0,
        approaches=(ApproachDef(name="Direct", stat_focus="strength", power_modifier=1.0, risk_modifier=1.0),),
        success_narratives=("Cleared.",),
        failure_narratives=("Beaten back.",),
    )


def _linear_encounters(count: int):
    return [_encounter(index, difficulty=15 + 5 * index) for index in range(1, count + 1)]
