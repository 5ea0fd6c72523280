"""Configuration loader for the Speed Rush engine."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from speed_rush.core.race import RaceEngine
from speed_rush.core.track import Track

DATA_DIR: Path = Path(__file__).resolve().parent / "data"
SETTINGS_PATH: Path = DATA_DIR / "race.yaml"

_SECTION_FIELDS: dict[str, tuple[str, ...]] = {
    "race": ("max_race_time", "enable_decay", "decay_interval"),
    "track": ("total_laps", "lap_distance"),
}


@dataclass(frozen=True)
class RaceSettings:
    """Tunable race session settings.

    Attributes:
        max_race_time: Race clock in seconds (> 0).
        enable_decay: Whether the continuous-decay ticker runs.
        decay_interval: Seconds between decay ticks (> 0).
        total_laps: Laps per race (>= 1).
        lap_distance: Distance per lap (> 0).
    """

    max_race_time: float = 300.0
    enable_decay: bool = False
    decay_interval: float = 1.0
    total_laps: int = 5
    lap_distance: float = 100.0

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.max_race_time <= 0.0:
            raise ValueError("max_race_time must be > 0.")
        if self.decay_interval <= 0.0:
            raise ValueError("decay_interval must be > 0.")
        if self.total_laps < 1:
            raise ValueError("total_laps must be >= 1.")
        if self.lap_distance <= 0.0:
            raise ValueError("lap_distance must be > 0.")


def load_race_settings(path: Path | None = None) -> RaceSettings:
    """Load race settings from a YAML file.

    The file holds a ``race`` and a ``track`` section; either may be
    omitted, and missing keys fall back to the :class:`RaceSettings`
    defaults.

    Args:
        path: Optional override for the settings file path.

    Returns:
        A validated :class:`RaceSettings`.

    Raises:
        FileNotFoundError: If the settings file does not exist.
        ValueError: If the file has unknown sections or keys, wrongly
            typed values, or out-of-range values.
    """
    settings_path = path or SETTINGS_PATH
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with open(settings_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {settings_path} must contain a mapping")

    values: dict[str, object] = {}
    for section, entry in data.items():
        if section not in _SECTION_FIELDS:
            raise ValueError(f"Unknown settings section '{section}'")
        if entry is None:
            continue
        if not isinstance(entry, dict):
            raise ValueError(f"Settings section '{section}' must be a mapping")
        for key, val in entry.items():
            if key not in _SECTION_FIELDS[section]:
                raise ValueError(f"Unknown setting '{section}.{key}'")
            values[key] = val

    # --- Validate types ---
    if "enable_decay" in values and not isinstance(values["enable_decay"], bool):
        raise ValueError(
            f"'enable_decay' must be a boolean, got "
            f"{type(values['enable_decay']).__name__}"
        )
    for key in ("max_race_time", "decay_interval", "lap_distance"):
        if key in values:
            val = values[key]
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                raise ValueError(
                    f"'{key}' must be numeric, got {type(val).__name__}"
                )
            values[key] = float(val)
    if "total_laps" in values:
        val = values["total_laps"]
        if isinstance(val, bool) or not isinstance(val, int):
            raise ValueError(f"'total_laps' must be an integer, got {type(val).__name__}")

    return RaceSettings(**values)  # type: ignore[arg-type]


def build_engine(settings: RaceSettings | None = None) -> RaceEngine:
    """Construct a :class:`RaceEngine` from *settings* (defaults if None)."""
    resolved = settings or RaceSettings()
    return RaceEngine(
        max_race_time=resolved.max_race_time,
        enable_decay=resolved.enable_decay,
        decay_interval=resolved.decay_interval,
        track=Track(total_laps=resolved.total_laps, lap_distance=resolved.lap_distance),
    )
