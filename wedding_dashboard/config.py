"""Configuration management for the wedding dashboard.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.  Values that the
rendering layer needs are bundled into a :class:`DashboardSettings`
instance and passed explicitly rather than read from module state.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigError

# Base project root - assumes this file is in wedding_dashboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("WEDDING_DATA_DIR", _PROJECT_ROOT / "data"))
SNAPSHOTS_DIR = DATA_DIR / "snapshots"

BUDGET_LINES_PATH = Path(
    os.getenv("WEDDING_BUDGET_LINES_PATH", SNAPSHOTS_DIR / "budget_items.csv")
).resolve()
FINANCE_MONTHS_PATH = Path(
    os.getenv("WEDDING_FINANCE_MONTHS_PATH", SNAPSHOTS_DIR / "finance_tracker.csv")
).resolve()
SETTINGS_PATH = Path(
    os.getenv("WEDDING_SETTINGS_PATH", DATA_DIR / "settings.json")
).resolve()

DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Marriage at Mahal",
    "Reception at Mahal",
    "Engagement",
    "Home Setup",
)
DEFAULT_WEDDING_DATE = date(2026, 1, 31)
DEFAULT_CURRENCY_SYMBOL = "₹"
DEFAULT_UTILIZATION_PRECISION = 1
# Monthly savings above this amount are flagged as hard to sustain
DEFAULT_TARGET_WARNING_THRESHOLD = 50000.0


@dataclass(frozen=True)
class DashboardSettings:
    """Settings handed to the rendering layer."""

    wedding_date: date = DEFAULT_WEDDING_DATE
    categories: Tuple[str, ...] = DEFAULT_CATEGORIES
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    utilization_precision: int = DEFAULT_UTILIZATION_PRECISION
    target_warning_threshold: float = DEFAULT_TARGET_WARNING_THRESHOLD
    budget_lines_path: Path = BUDGET_LINES_PATH
    finance_months_path: Path = FINANCE_MONTHS_PATH


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ConfigError(f"Invalid wedding_date: {value!r}") from exc


def _coerce(key: str, value: Any) -> Any:
    """Convert a raw JSON/env value to the type of the matching setting."""
    if key == "wedding_date":
        return _parse_date(value)
    if key == "categories":
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",")]
        if not isinstance(value, (list, tuple)):
            raise ConfigError(f"categories must be a list, got {type(value).__name__}")
        return tuple(str(item) for item in value if str(item).strip())
    if key == "utilization_precision":
        try:
            precision = int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid utilization_precision: {value!r}") from exc
        if precision < 0:
            raise ConfigError("utilization_precision must be non-negative")
        return precision
    if key == "target_warning_threshold":
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid target_warning_threshold: {value!r}") from exc
    if key in ("budget_lines_path", "finance_months_path"):
        return Path(value).expanduser().resolve()
    return str(value)


_ENV_OVERRIDES: Dict[str, str] = {
    "wedding_date": "WEDDING_DATE",
    "categories": "WEDDING_CATEGORIES",
    "currency_symbol": "WEDDING_CURRENCY_SYMBOL",
    "utilization_precision": "WEDDING_UTILIZATION_PRECISION",
    "target_warning_threshold": "WEDDING_TARGET_WARNING_THRESHOLD",
}


def _read_settings_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def load_settings(path: Optional[Path] = None) -> DashboardSettings:
    """Build dashboard settings from defaults, a JSON file and the environment.

    Precedence is environment variables, then the settings file, then the
    built-in defaults.  Unknown keys in the file are ignored.  A missing or
    unreadable file falls back to defaults.

    Args:
        path: Optional settings file.  Defaults to ``SETTINGS_PATH``.

    Returns:
        Frozen settings instance

    Raises:
        ConfigError: If a recognised setting has an invalid value
    """
    known = DashboardSettings.__dataclass_fields__.keys()
    raw = {k: v for k, v in _read_settings_file(path or SETTINGS_PATH).items() if k in known}
    for key, env_name in _ENV_OVERRIDES.items():
        env_value = os.getenv(env_name)
        if env_value:
            raw[key] = env_value
    overrides = {key: _coerce(key, value) for key, value in raw.items()}
    return replace(DashboardSettings(), **overrides)


def save_settings(settings: DashboardSettings, path: Optional[Path] = None) -> None:
    target = path or SETTINGS_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "wedding_date": settings.wedding_date.isoformat(),
        "categories": list(settings.categories),
        "currency_symbol": settings.currency_symbol,
        "utilization_precision": settings.utilization_precision,
        "target_warning_threshold": settings.target_warning_threshold,
    }
    with target.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True, ensure_ascii=False)
