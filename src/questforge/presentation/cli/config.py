"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

from questforge.domain.run_models import DEFAULT_SECONDS_PER_STEP

logger = logging.getLogger("questforge.cli")

_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "QuestForge"
        return Path.home() / "QuestForge"
    return Path.home() / ".config" / "questforge"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def default_config() -> Dict[str, object]:
    return {"log_level": _DEFAULT_LOG_LEVEL, "seconds_per_step": DEFAULT_SECONDS_PER_STEP}


def _normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def _normalize_seconds_per_step(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_SECONDS_PER_STEP
    return value


def normalize_config(raw: Dict[str, object]) -> Dict[str, object]:
    return {
        "log_level": _normalize_log_level(raw.get("log_level")),
        "seconds_per_step": _normalize_seconds_per_step(raw.get("seconds_per_step")),
    }


def load_config(path: Path | None = None) -> Dict[str, object]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return normalize_config(raw)


def save_config(config: Dict[str, object], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = normalize_config(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
