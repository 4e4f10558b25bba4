"""Service-layer exceptions."""


class RunAlreadyResolvedError(Exception):
    """Raised when a run that already left ``in_progress`` is simulated again."""


class RewardAlreadyClaimedError(Exception):
    """Raised when a mission reward is claimed more than once."""


class MissionNotReadyError(Exception):
    """Raised when a mission is resolved before its completion time."""


class RequirementsNotMetError(Exception):
    """Raised when a character does not meet a mission's level or stat requirements."""


class MissionAlreadyActiveError(Exception):
    """Raised when a character starts a mission while another is still unclaimed."""


class InsufficientGoldError(Exception):
    """Raised when a character cannot pay for an action."""
