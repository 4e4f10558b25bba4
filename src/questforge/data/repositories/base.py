"""Base repository implementation for JSON catalog data."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, TypeVar

from questforge.core.types import STAT_NAMES, StatName
from questforge.data import paths
from questforge.data.errors import DataReferenceError, DataValidationError
from questforge.data.json_loader import load_json
from questforge.domain.rarity import ItemRarity

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for repositories."""

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    def _get_file_path(self) -> Path:
        definitions_dir = paths.get_definitions_path(self._base_path)
        return definitions_dir / self._filename

    def _load_raw(self) -> dict[str, object]:
        file_path = self._get_file_path()
        raw = load_json(file_path)
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {file_path}")
        return raw

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        """Convert a raw dict into typed definitions."""
        raise NotImplementedError

    def _ensure_loaded(self) -> None:
        if self._definitions is None:
            raw = self._load_raw()
            self._definitions = self._build(raw)

    def get(self, def_id: str) -> T:
        """Return a definition by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        try:
            return self._definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def find(self, def_id: str) -> T | None:
        """Return a definition by id, or None when the catalog lacks it."""
        self._ensure_loaded()
        assert self._definitions is not None
        return self._definitions.get(def_id)

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        return [self._definitions[key] for key in sorted(self._definitions.keys())]

    def as_mapping(self) -> Dict[str, T]:
        self._ensure_loaded()
        assert self._definitions is not None
        return dict(self._definitions)

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_list(value: object, context: str) -> list[object]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_float(value: object, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DataValidationError(f"{context} must be a number.")
        return float(value)

    @staticmethod
    def _require_bool(value: object, context: str) -> bool:
        if not isinstance(value, bool):
            raise DataValidationError(f"{context} must be a boolean.")
        return value

    @classmethod
    def _require_str_tuple(cls, value: object, context: str) -> tuple[str, ...]:
        if value is None:
            return ()
        entries = cls._require_list(value, context)
        return tuple(cls._require_str(entry, f"{context}[{index}]") for index, entry in enumerate(entries))

    @staticmethod
    def _require_stat(value: object, context: str) -> StatName:
        if value not in STAT_NAMES:
            raise DataReferenceError(f"{context} references unknown stat '{value}'.")
        return value  # type: ignore[return-value]

    @classmethod
    def _optional_stat(cls, value: object, context: str) -> StatName | None:
        if value is None:
            return None
        return cls._require_stat(value, context)

    @staticmethod
    def _require_rarity(value: object, context: str) -> ItemRarity:
        if not isinstance(value, str) or value.upper() not in ItemRarity.__members__:
            raise DataReferenceError(f"{context} references unknown rarity '{value}'.")
        return ItemRarity[value.upper()]
