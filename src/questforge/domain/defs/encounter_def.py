"""Encounter category definitions (approaches and narrative pools)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from questforge.core.types import EncounterCategory

from .approach_def import ApproachDef


@dataclass(frozen=True, slots=True)
class EncounterTypeDef:
    category: EncounterCategory
    approaches: Tuple[ApproachDef, ...] = ()
    success_narratives: Tuple[str, ...] = ()
    failure_narratives: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class NamePoolDef:
    """Ordered encounter names; index ``n`` uses entry ``n - 1``."""

    id: str
    names: Tuple[str, ...] = field(default_factory=tuple)
    fallback_template: str = "Wave {index} Champion"

    def name_for(self, index: int) -> str:
        if 1 <= index <= len(self.names):
            return self.names[index - 1]
        return self.fallback_template.format(index=index)
