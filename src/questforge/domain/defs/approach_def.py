"""Approach definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from questforge.core.types import StatName


@dataclass(frozen=True, slots=True)
class ApproachDef:
    """A resolution strategy offered for an encounter.

    ``power_modifier`` scales the computed power, ``risk_modifier`` scales the
    damage taken on failure. ``stat_focus`` may be missing in catalog data.
    """

    name: str
    description: str = ""
    stat_focus: StatName | None = None
    power_modifier: float = 1.0
    risk_modifier: float = 1.0

