"""Turn-based race engine for Speed Rush.

The engine binds one :class:`Vehicle` to a :class:`Track` and resolves one
player action per turn.  Each resolved turn, in order:

    1. Applies the action to the vehicle (speed up by 5, hold speed, or
       refuel and slow down by 20).  A rejected speed change or refuel
       aborts the turn before anything else moves.
    2. Burns one turn of fuel (scaled by speed).
    3. Advances the track by the current speed.
    4. Charges ``max(0, 10 - speed / 20)`` seconds against the race clock.
    5. Checks end conditions: race complete wins; otherwise an empty
       tank or an expired clock loses.

An optional decay ticker drains 0.1 fuel and one second of race time
every interval while the race is running.  Turns and ticks are
serialised on a single re-entrant lock; every tick is bound to the race
it was started for and re-checks the state under the lock, so no tick
ever touches a finished or reset race.

Observers subscribe through ``add_state_listener`` (called with the new
:class:`RaceState` on every transition) and ``add_data_listener`` (called
with no arguments after every mutation).  Listeners run synchronously on
the mutating thread with the lock held.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from functools import partial
from typing import Callable, Protocol

from speed_rush.core.errors import (
    ActionFailedError,
    AlreadyFullError,
    AlreadyInProgressError,
    LimitExceededError,
    NotInProgressError,
    NullVehicleError,
)
from speed_rush.core.ticker import DecayTicker
from speed_rush.core.track import Track
from speed_rush.core.vehicle import Vehicle, create_presets

_logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_MAX_RACE_TIME: float = 300.0  # seconds
DEFAULT_DECAY_INTERVAL: float = 1.0  # seconds

SPEED_UP_INCREMENT: int = 5
PIT_STOP_SLOWDOWN: int = 20
BASE_TURN_SECONDS: float = 10.0
SPEED_PER_SECOND_SAVED: float = 20.0  # every 20 speed shaves 1 s off a turn

DECAY_FUEL: float = 0.1
DECAY_SECONDS: float = 1.0


class RaceState(str, Enum):
    """Lifecycle of a race session."""

    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    GAME_OVER = "GameOver"


class PlayerAction(str, Enum):
    """Actions a player may submit once per turn."""

    SPEED_UP = "SpeedUp"
    MAINTAIN_SPEED = "MaintainSpeed"
    PIT_STOP = "PitStop"


class Ticker(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...


TickerFactory = Callable[[float, Callable[[], object]], Ticker]
StateListener = Callable[[RaceState], object]
DataListener = Callable[[], object]


# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one resolved turn.

    Attributes:
        action: The action that was applied.
        fuel_consumed: Fuel burned this turn, before the zero floor.
        lap_completed: Whether the track advance finished a lap.
        elapsed_seconds: Race-clock seconds charged for the turn.
        state: Engine state after the turn.
    """

    action: PlayerAction
    fuel_consumed: float
    lap_completed: bool
    elapsed_seconds: float
    state: RaceState


@dataclass
class RaceSummary:
    """Snapshot of a race for end-of-race reporting."""

    state: RaceState
    vehicle_name: str | None
    laps_completed: int
    total_laps: int
    fuel_remaining: float
    time_remaining: float
    elapsed_seconds: float
    turns: int
    lap_times: list[float] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class RaceEngine:
    """Owns one race session: state machine, turn resolution and decay."""

    def __init__(
        self,
        max_race_time: float = DEFAULT_MAX_RACE_TIME,
        enable_decay: bool = False,
        track: Track | None = None,
        decay_interval: float = DEFAULT_DECAY_INTERVAL,
        ticker_factory: TickerFactory | None = None,
    ) -> None:
        """Initialise an idle engine.

        Args:
            max_race_time: Race clock in seconds. Must be > 0.
            enable_decay: Run the continuous-decay ticker while racing.
            track: Track to race on.  Defaults to ``Track()`` (5 x 100).
            decay_interval: Seconds between decay ticks. Must be > 0.
            ticker_factory: ``(interval, callback) -> ticker`` used when
                decay is enabled.  Defaults to :class:`DecayTicker`.

        Raises:
            ValueError: If constraints are violated.
        """
        if max_race_time <= 0.0:
            raise ValueError("max_race_time must be > 0.")
        if decay_interval <= 0.0:
            raise ValueError("decay_interval must be > 0.")

        self._lock = threading.RLock()
        self._max_race_time: float = float(max_race_time)
        self._remaining_time: float = self._max_race_time
        self._track: Track = track if track is not None else Track()
        self._presets: tuple[Vehicle, ...] = tuple(create_presets())
        self._state: RaceState = RaceState.NOT_STARTED
        self._vehicle: Vehicle | None = None
        self._started_at: float | None = None
        self._turns: int = 0
        self._lap_clock_mark: float = 0.0

        self._enable_decay: bool = enable_decay
        self._decay_interval: float = float(decay_interval)
        self._ticker_factory: TickerFactory = ticker_factory or DecayTicker
        self._ticker: Ticker | None = None
        self._race_id: int = 0

        self._state_listeners: list[StateListener] = []
        self._data_listeners: list[DataListener] = []

    # -- Read-only accessors -------------------------------------------------

    @property
    def state(self) -> RaceState:
        return self._state

    @property
    def vehicle(self) -> Vehicle | None:
        return self._vehicle

    @property
    def track(self) -> Track:
        return self._track

    @property
    def remaining_time(self) -> float:
        return self._remaining_time

    @property
    def max_race_time(self) -> float:
        return self._max_race_time

    @property
    def available_vehicles(self) -> tuple[Vehicle, ...]:
        return self._presets

    @property
    def turns(self) -> int:
        return self._turns

    @property
    def decay_enabled(self) -> bool:
        return self._enable_decay

    def time_remaining_fraction(self) -> float:
        return self._remaining_time / self._max_race_time

    def elapsed_time(self) -> timedelta:
        """Wall-clock time since the race started; zero before any start."""
        if self._state is RaceState.NOT_STARTED or self._started_at is None:
            return timedelta(0)
        return timedelta(seconds=time.monotonic() - self._started_at)

    def summary(self) -> RaceSummary:
        with self._lock:
            vehicle = self._vehicle
            return RaceSummary(
                state=self._state,
                vehicle_name=vehicle.name if vehicle is not None else None,
                laps_completed=self._track.laps_completed,
                total_laps=self._track.total_laps,
                fuel_remaining=vehicle.current_fuel if vehicle is not None else 0.0,
                time_remaining=self._remaining_time,
                elapsed_seconds=self.elapsed_time().total_seconds(),
                turns=self._turns,
                lap_times=list(self._track.lap_times),
            )

    # -- Observers -----------------------------------------------------------

    def add_state_listener(self, listener: StateListener) -> None:
        with self._lock:
            self._state_listeners.append(listener)

    def remove_state_listener(self, listener: StateListener) -> None:
        with self._lock:
            self._state_listeners.remove(listener)

    def add_data_listener(self, listener: DataListener) -> None:
        with self._lock:
            self._data_listeners.append(listener)

    def remove_data_listener(self, listener: DataListener) -> None:
        with self._lock:
            self._data_listeners.remove(listener)

    # -- Lifecycle -----------------------------------------------------------

    def start(self, vehicle: Vehicle | None) -> None:
        """Bind *vehicle* and begin a race.

        The vehicle is refilled and stopped, the track returns to the
        start line and the race clock is reset.

        Raises:
            NullVehicleError: If *vehicle* is None.
            AlreadyInProgressError: If a race is already running.
        """
        with self._lock:
            if vehicle is None:
                raise NullVehicleError("A vehicle must be selected to start a race")
            if self._state is RaceState.IN_PROGRESS:
                raise AlreadyInProgressError("Race is already in progress")

            vehicle.reset_run_state()
            self._track.reset()
            self._vehicle = vehicle
            self._state = RaceState.IN_PROGRESS
            self._remaining_time = self._max_race_time
            self._started_at = time.monotonic()
            self._turns = 0
            self._lap_clock_mark = 0.0
            self._race_id += 1

            if self._enable_decay:
                self._ticker = self._ticker_factory(
                    self._decay_interval, partial(self._on_tick, self._race_id)
                )
                self._ticker.start()

            _logger.info(
                "Race started with %s (%s), %d laps, %.0f s on the clock",
                vehicle.name,
                vehicle.category.value,
                self._track.total_laps,
                self._max_race_time,
            )
            self._emit_state()
            self._emit_data()

    def reset(self) -> None:
        """Stop any running race and return to ``NOT_STARTED``."""
        with self._lock:
            self._stop_ticker()
            self._race_id += 1
            self._state = RaceState.NOT_STARTED
            self._vehicle = None
            self._remaining_time = self._max_race_time
            self._started_at = None
            self._turns = 0
            self._lap_clock_mark = 0.0
            self._track.reset()

            _logger.info("Race reset")
            self._emit_state()
            self._emit_data()

    # -- Turn resolution -----------------------------------------------------

    def submit_action(self, action: PlayerAction | str) -> TurnResult:
        """Resolve one turn with *action*.

        Args:
            action: A :class:`PlayerAction` or its string value.

        Returns:
            A :class:`TurnResult` describing the resolved turn.

        Raises:
            NotInProgressError: If no race is running.
            ValueError: If *action* is not a known action.
            ActionFailedError: If the vehicle rejects the action; the turn
                is not processed and engine state is unchanged.
        """
        with self._lock:
            vehicle = self._vehicle
            if self._state is not RaceState.IN_PROGRESS or vehicle is None:
                raise NotInProgressError("Race is not in progress")
            action = PlayerAction(action)

            try:
                self._apply_action(vehicle, action)
            except (LimitExceededError, AlreadyFullError) as exc:
                _logger.warning("Rejected %s: %s", action.value, exc)
                raise ActionFailedError(f"Action failed: {exc}") from exc

            consumed = vehicle.consume_fuel()
            lap_completed = self._track.advance(vehicle.current_speed)
            elapsed = max(
                0.0, BASE_TURN_SECONDS - vehicle.current_speed / SPEED_PER_SECOND_SAVED
            )
            self._remaining_time = max(0.0, self._remaining_time - elapsed)
            self._turns += 1
            if lap_completed:
                self._record_lap()

            _logger.debug(
                "Turn %d: %s speed=%d fuel=%.2f lap=%d/%d remaining=%.1f",
                self._turns,
                action.value,
                vehicle.current_speed,
                vehicle.current_fuel,
                self._track.current_lap,
                self._track.total_laps,
                self._remaining_time,
            )

            self._check_end_conditions()
            self._emit_data()
            return TurnResult(
                action=action,
                fuel_consumed=consumed,
                lap_completed=lap_completed,
                elapsed_seconds=elapsed,
                state=self._state,
            )

    @staticmethod
    def _apply_action(vehicle: Vehicle, action: PlayerAction) -> None:
        if action is PlayerAction.SPEED_UP:
            vehicle.increase_speed(SPEED_UP_INCREMENT)
        elif action is PlayerAction.PIT_STOP:
            vehicle.refuel()
            vehicle.reduce_speed(PIT_STOP_SLOWDOWN)

    # -- Continuous decay ----------------------------------------------------

    def decay_tick(self) -> bool:
        """Apply one decay tick to the running race.

        Drains ``DECAY_FUEL`` and ``DECAY_SECONDS`` (both floored at zero)
        and re-checks end conditions.

        Returns:
            True if the tick was applied, False when no race is running.
        """
        with self._lock:
            vehicle = self._vehicle
            if self._state is not RaceState.IN_PROGRESS or vehicle is None:
                return False

            vehicle.drain(DECAY_FUEL)
            self._remaining_time = max(0.0, self._remaining_time - DECAY_SECONDS)
            _logger.debug(
                "Decay tick: fuel=%.2f remaining=%.1f",
                vehicle.current_fuel,
                self._remaining_time,
            )

            self._check_end_conditions()
            self._emit_data()
            return True

    def _on_tick(self, race_id: int) -> None:
        with self._lock:
            if race_id != self._race_id:
                return
            self.decay_tick()

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
            self._ticker = None

    # -- Internal ------------------------------------------------------------

    def _record_lap(self) -> None:
        race_clock = self._max_race_time - self._remaining_time
        self._track.record_lap_time(race_clock - self._lap_clock_mark)
        self._lap_clock_mark = race_clock
        _logger.debug(
            "Lap %d completed in %.1f s",
            len(self._track.lap_times),
            self._track.lap_times[-1],
        )

    def _check_end_conditions(self) -> None:
        vehicle = self._vehicle
        if vehicle is None:
            return
        if self._track.is_complete():
            self._finish(RaceState.COMPLETED)
        elif not vehicle.has_fuel() or self._remaining_time <= 0.0:
            self._finish(RaceState.GAME_OVER)

    def _finish(self, end_state: RaceState) -> None:
        self._state = end_state
        self._stop_ticker()
        vehicle = self._vehicle
        _logger.info(
            "Race ended: %s after %d turns, laps %d/%d, fuel %.2f, %.1f s left",
            end_state.value,
            self._turns,
            self._track.laps_completed,
            self._track.total_laps,
            vehicle.current_fuel if vehicle is not None else 0.0,
            self._remaining_time,
        )
        self._emit_state()

    def _emit_state(self) -> None:
        for listener in list(self._state_listeners):
            listener(self._state)

    def _emit_data(self) -> None:
        for listener in list(self._data_listeners):
            listener()
