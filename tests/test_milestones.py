from datetime import date, timedelta

from questforge.domain.milestones import (
    GoalMilestone,
    MilestoneLedger,
    StreakTracker,
    claim_goal_milestones,
    reached_goal_milestones,
    streak_bonus,
)

_DAY = date(2024, 6, 10)


def test_ledger_claims_each_index_once() -> None:
    ledger: MilestoneLedger[str] = MilestoneLedger()

    assert ledger.claim(5, "reward") == "reward"
    assert ledger.claim(5, "reward") is None
    assert ledger.is_claimed(5)
    assert not ledger.is_claimed(10)


def test_streak_increments_on_consecutive_day() -> None:
    tracker = StreakTracker()
    tracker.record_completion(_DAY)

    assert tracker.record_completion(_DAY + timedelta(days=1)) == 2


def test_streak_resets_after_gap() -> None:
    tracker = StreakTracker()
    tracker.record_completion(_DAY)
    tracker.record_completion(_DAY + timedelta(days=1))

    assert tracker.record_completion(_DAY + timedelta(days=4)) == 1
    assert tracker.longest == 2


def test_skipping_to_day_plus_three_resets() -> None:
    tracker = StreakTracker()
    tracker.record_completion(_DAY)

    assert tracker.record_completion(_DAY + timedelta(days=3)) == 1


def test_same_day_completion_leaves_streak_unchanged() -> None:
    tracker = StreakTracker()
    tracker.record_completion(_DAY)
    tracker.record_completion(_DAY + timedelta(days=1))

    assert tracker.record_completion(_DAY + timedelta(days=1)) == 2


def test_freeze_bridges_exactly_one_missed_day() -> None:
    tracker = StreakTracker(freeze_charges=1)
    tracker.record_completion(_DAY)

    assert tracker.record_completion(_DAY + timedelta(days=2)) == 2
    assert tracker.freeze_charges == 0
    assert tracker.record_completion(_DAY + timedelta(days=4)) == 1


def test_longest_streak_never_decreases() -> None:
    tracker = StreakTracker()
    days = [0, 1, 2, 6, 7, 20]
    longest_seen = []
    for offset in days:
        tracker.record_completion(_DAY + timedelta(days=offset))
        longest_seen.append(tracker.longest)

    assert longest_seen == sorted(longest_seen)
    assert tracker.longest == 3


def test_out_of_order_completion_is_ignored() -> None:
    tracker = StreakTracker()
    tracker.record_completion(_DAY)
    tracker.record_completion(_DAY + timedelta(days=1))

    assert tracker.record_completion(_DAY - timedelta(days=3)) == 2
    assert tracker.last_completed == _DAY + timedelta(days=1)


def test_streak_bonus_caps_at_fifty_percent() -> None:
    assert streak_bonus(100, 0) == 100
    assert streak_bonus(100, 3) == 115
    assert streak_bonus(100, 40) == 150


def test_goal_milestones_claimed_once() -> None:
    ledger: MilestoneLedger[GoalMilestone] = MilestoneLedger()

    first = claim_goal_milestones(0.6, ledger)
    second = claim_goal_milestones(1.0, ledger)

    assert first == [GoalMilestone.QUARTER, GoalMilestone.HALF]
    assert second == [GoalMilestone.THREE_QUARTER, GoalMilestone.COMPLETE]
    assert claim_goal_milestones(1.0, ledger) == []


def test_goal_milestone_rewards() -> None:
    assert reached_goal_milestones(0.1) == []
    assert GoalMilestone.COMPLETE.exp_reward == 500
    assert GoalMilestone.THREE_QUARTER.gold_reward == 100
    assert GoalMilestone.HALF.label == "50%"
