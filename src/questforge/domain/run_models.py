"""Run state and per-encounter result records."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Tuple

from questforge.core.types import RunStatus
from questforge.domain.entities import Equipment
from questforge.domain.milestones import MilestoneLedger

DEFAULT_SECONDS_PER_STEP = 30


@dataclass(frozen=True, slots=True)
class MilestoneRecord:
    index: int
    gold: int
    item: Equipment | None = None


@dataclass(frozen=True, slots=True)
class EncounterResult:
    index: int
    encounter_name: str
    success: bool
    power: int
    required_power: int
    success_chance: float
    roll: float
    exp_earned: int
    gold_earned: int
    hp_lost: int
    hp_after: int
    narrative: str
    approach_name: str
    milestone: MilestoneRecord | None = None
    loot: Tuple[Equipment, ...] = ()

    @property
    def milestone_triggered(self) -> bool:
        return self.milestone is not None


@dataclass(slots=True)
class RunState:
    """Accumulator for one simulated run; frozen once terminal."""

    run_id: str
    character_id: str
    current_hp: int
    max_hp: int
    started_at: datetime | None = None
    seconds_per_step: int = DEFAULT_SECONDS_PER_STEP
    status: RunStatus = "in_progress"
    total_exp: int = 0
    total_gold: int = 0
    highest_index_reached: int = 0
    results: List[EncounterResult] = field(default_factory=list)
    loot: List[Equipment] = field(default_factory=list)
    milestones: MilestoneLedger[MilestoneRecord] = field(default_factory=MilestoneLedger)

    @property
    def is_terminal(self) -> bool:
        return self.status != "in_progress"

    def record(self, result: EncounterResult) -> None:
        self._ensure_active()
        self.results.append(result)
        self.total_exp += result.exp_earned
        self.total_gold += result.gold_earned
        if result.milestone is not None:
            self.total_gold += result.milestone.gold
            if result.milestone.item is not None:
                self.loot.append(result.milestone.item)
        self.loot.extend(result.loot)
        self.highest_index_reached = max(self.highest_index_reached, result.index)

    def set_hp(self, value: int) -> None:
        self._ensure_active()
        self.current_hp = min(max(0, value), max(0, self.max_hp))

    def finish(self, status: RunStatus) -> None:
        self._ensure_active()
        if status == "in_progress":
            raise ValueError("A run can only finish as completed or failed.")
        self.status = status

    # -----------------------
    # Reveal throttle
    # -----------------------
    @property
    def virtual_duration_seconds(self) -> int:
        return len(self.results) * self.seconds_per_step

    @property
    def completes_at(self) -> datetime | None:
        if self.started_at is None:
            return None
        return self.started_at + timedelta(seconds=self.virtual_duration_seconds)

    def revealed_count(self, now: datetime) -> int:
        """How many results are visible at ``now`` (display-only throttle)."""
        if self.started_at is None or self.seconds_per_step <= 0:
            return len(self.results)
        elapsed = (now - self.started_at).total_seconds()
        if elapsed <= 0:
            return 0
        return min(len(self.results), int(elapsed // self.seconds_per_step))

    def revealed_results(self, now: datetime) -> List[EncounterResult]:
        return self.results[: self.revealed_count(now)]

    def _ensure_active(self) -> None:
        if self.is_terminal:
            raise ValueError(f"Run '{self.run_id}' is already {self.status}.")
