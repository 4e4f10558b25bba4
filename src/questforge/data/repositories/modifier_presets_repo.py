"""Repository for named run-modifier presets."""
from __future__ import annotations

from typing import Dict

from questforge.data.errors import DataValidationError
from questforge.data.repositories.base import RepositoryBase
from questforge.domain.defs import ModifierPresetDef
from questforge.domain.modifiers import RunModifiers

_MULTIPLIER_FIELDS = (
    "damage_deal_multiplier",
    "damage_taken_multiplier",
    "gold_multiplier",
    "exp_multiplier",
    "stat_focus_multiplier",
)


class ModifierPresetsRepository(RepositoryBase[ModifierPresetDef]):
    """Loads modifier presets; unknown keys are rejected."""

    def __init__(self, base_path=None) -> None:
        super().__init__("modifier_presets.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ModifierPresetDef]:
        presets: Dict[str, ModifierPresetDef] = {}
        for preset_id, payload in raw.items():
            context = f"modifier_presets.{preset_id}"
            data = self._require_mapping(payload, context)
            options = self._require_mapping(data.get("modifiers", {}), f"{context}.modifiers")
            presets[preset_id] = ModifierPresetDef(
                id=preset_id,
                name=self._require_str(data.get("name", preset_id), f"{context}.name"),
                description=self._require_str(data.get("description", ""), f"{context}.description"),
                modifiers=self._build_modifiers(options, f"{context}.modifiers"),
            )
        return presets

    def _build_modifiers(self, options: dict[str, object], context: str) -> RunModifiers:
        known = set(_MULTIPLIER_FIELDS) | {
            "starting_hp_override",
            "hp_regen_per_step",
            "all_boss_encounters",
            "stat_focus",
        }
        unknown = sorted(set(options) - known)
        if unknown:
            raise DataValidationError(f"{context} has unknown options: {', '.join(unknown)}.")
        kwargs: dict[str, object] = {}
        for name in _MULTIPLIER_FIELDS:
            if name in options:
                value = self._require_float(options[name], f"{context}.{name}")
                if value < 0:
                    raise DataValidationError(f"{context}.{name} must not be negative.")
                kwargs[name] = value
        if options.get("starting_hp_override") is not None:
            kwargs["starting_hp_override"] = self._require_int(
                options["starting_hp_override"], f"{context}.starting_hp_override"
            )
        if "hp_regen_per_step" in options:
            kwargs["hp_regen_per_step"] = self._require_int(options["hp_regen_per_step"], f"{context}.hp_regen_per_step")
        if "all_boss_encounters" in options:
            kwargs["all_boss_encounters"] = self._require_bool(
                options["all_boss_encounters"], f"{context}.all_boss_encounters"
            )
        if "stat_focus" in options:
            kwargs["stat_focus"] = self._optional_stat(options["stat_focus"], f"{context}.stat_focus")
        return RunModifiers(**kwargs)  # type: ignore[arg-type]
