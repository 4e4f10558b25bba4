"""Runtime entity exports."""

from .character import Character, LevelUpReward, exp_required
from .equipment import Equipment, TemporaryBuff
from .stats import Stats

__all__ = [
    "Character",
    "Equipment",
    "LevelUpReward",
    "Stats",
    "TemporaryBuff",
    "exp_required",
]
