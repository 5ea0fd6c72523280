"""Core simulation modules for the Speed Rush engine."""

from speed_rush.core.autopilot import DEFAULT_WEIGHTS, choose_action, play_race
from speed_rush.core.errors import (
    ActionFailedError,
    AlreadyFullError,
    AlreadyInProgressError,
    LimitExceededError,
    NotInProgressError,
    NullVehicleError,
    RaceError,
)
from speed_rush.core.monte_carlo import simulate_presets_monte_carlo
from speed_rush.core.race import (
    DECAY_FUEL,
    DECAY_SECONDS,
    PIT_STOP_SLOWDOWN,
    SPEED_UP_INCREMENT,
    PlayerAction,
    RaceEngine,
    RaceState,
    RaceSummary,
    TurnResult,
)
from speed_rush.core.ticker import DecayTicker
from speed_rush.core.track import Track
from speed_rush.core.vehicle import Vehicle, VehicleCategory, create_presets

__all__ = [
    "ActionFailedError",
    "AlreadyFullError",
    "AlreadyInProgressError",
    "DECAY_FUEL",
    "DECAY_SECONDS",
    "DEFAULT_WEIGHTS",
    "DecayTicker",
    "LimitExceededError",
    "NotInProgressError",
    "NullVehicleError",
    "PIT_STOP_SLOWDOWN",
    "PlayerAction",
    "RaceEngine",
    "RaceError",
    "RaceState",
    "RaceSummary",
    "SPEED_UP_INCREMENT",
    "Track",
    "TurnResult",
    "Vehicle",
    "VehicleCategory",
    "choose_action",
    "create_presets",
    "play_race",
    "simulate_presets_monte_carlo",
]
