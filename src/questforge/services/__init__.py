"""Service layer exports."""

from .errors import (
    InsufficientGoldError,
    MissionAlreadyActiveError,
    MissionNotReadyError,
    RequirementsNotMetError,
    RewardAlreadyClaimedError,
    RunAlreadyResolvedError,
)
from .run_simulator import RunSimulator, new_run_state
from .arena_service import ArenaNewBestWaveEvent, ArenaRun, ArenaRunResolvedEvent, ArenaService
from .mission_service import ActiveMission, MissionService
from .raid_service import RaidService, WeeklyRaidBoss
from .shop_service import DailyShop, ShopService

__all__ = [
    "ActiveMission",
    "ArenaNewBestWaveEvent",
    "ArenaRun",
    "ArenaRunResolvedEvent",
    "ArenaService",
    "DailyShop",
    "InsufficientGoldError",
    "MissionAlreadyActiveError",
    "MissionNotReadyError",
    "MissionService",
    "RaidService",
    "RequirementsNotMetError",
    "RewardAlreadyClaimedError",
    "RunAlreadyResolvedError",
    "RunSimulator",
    "ShopService",
    "WeeklyRaidBoss",
    "new_run_state",
]
