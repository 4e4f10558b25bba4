"""Milestone and streak bookkeeping with at-most-once reward issuance."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Generic, List, Set, TypeVar

R = TypeVar("R")

STREAK_BONUS_PERCENT_PER_DAY = 5
STREAK_BONUS_PERCENT_CAP = 50


@dataclass(slots=True)
class MilestoneLedger(Generic[R]):
    """Tracks which progression indices have paid out."""

    claimed: Set[int] = field(default_factory=set)

    def is_claimed(self, index: int) -> bool:
        return index in self.claimed

    def claim(self, index: int, reward: R) -> R | None:
        """Claim ``index``; returns ``reward`` the first time, ``None`` after."""
        if index in self.claimed:
            return None
        self.claimed.add(index)
        return reward


@dataclass(slots=True)
class StreakTracker:
    """Calendar-day streak for a habit or for daily activity."""

    current: int = 0
    longest: int = 0
    last_completed: date | None = None
    freeze_charges: int = 0

    def record_completion(self, day: date) -> int:
        if self.last_completed is None:
            self.current = 1
        else:
            gap = (day - self.last_completed).days
            if gap < 0:
                # Out-of-order completions never rewind the streak.
                return self.current
            if gap == 0:
                if self.current == 0:
                    self.current = 1
            elif gap == 1:
                self.current += 1
            elif gap == 2 and self.freeze_charges > 0:
                self.freeze_charges -= 1
                self.current += 1
            else:
                self.current = 1
        self.longest = max(self.longest, self.current)
        self.last_completed = day
        return self.current


def streak_bonus(amount: int, streak: int) -> int:
    """Add the streak percentage bonus (5% per day, capped at 50%)."""
    if streak <= 0:
        return amount
    percent = min(streak * STREAK_BONUS_PERCENT_PER_DAY, STREAK_BONUS_PERCENT_CAP)
    return amount + (amount * percent) // 100


class GoalMilestone(IntEnum):
    QUARTER = 25
    HALF = 50
    THREE_QUARTER = 75
    COMPLETE = 100

    @property
    def label(self) -> str:
        return f"{int(self)}%"

    @property
    def exp_reward(self) -> int:
        return {25: 50, 50: 100, 75: 200, 100: 500}[int(self)]

    @property
    def gold_reward(self) -> int:
        return {25: 25, 50: 50, 75: 100, 100: 250}[int(self)]


def reached_goal_milestones(progress: float) -> List[GoalMilestone]:
    return [milestone for milestone in GoalMilestone if progress >= int(milestone) / 100.0]


def claim_goal_milestones(progress: float, ledger: MilestoneLedger[GoalMilestone]) -> List[GoalMilestone]:
    """Claim every reached, unclaimed goal milestone."""
    claimed: List[GoalMilestone] = []
    for milestone in reached_goal_milestones(progress):
        if ledger.claim(int(milestone), milestone) is not None:
            claimed.append(milestone)
    return claimed
