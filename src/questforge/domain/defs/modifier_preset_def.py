"""Named run-modifier presets."""
from __future__ import annotations

from dataclasses import dataclass

from questforge.domain.modifiers import RunModifiers


@dataclass(frozen=True, slots=True)
class ModifierPresetDef:
    id: str
    name: str
    description: str
    modifiers: RunModifiers
