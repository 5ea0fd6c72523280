"""Terminal front end for the Speed Rush race engine."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import numpy as np

from speed_rush import __version__
from speed_rush.config import build_engine, load_race_settings
from speed_rush.core.autopilot import play_race
from speed_rush.core.errors import RaceError
from speed_rush.core.race import PlayerAction, RaceEngine, RaceState, RaceSummary

_KEYS: dict[str, PlayerAction] = {
    "s": PlayerAction.SPEED_UP,
    "m": PlayerAction.MAINTAIN_SPEED,
    "p": PlayerAction.PIT_STOP,
}

_STATE_MESSAGES: dict[RaceState, str] = {
    RaceState.NOT_STARTED: "Select a car to start racing!",
    RaceState.IN_PROGRESS: "Race in progress! Make your moves!",
    RaceState.COMPLETED: "Congratulations! You completed the race!",
    RaceState.GAME_OVER: "Game Over! You ran out of fuel or time.",
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Speed Rush race simulation")
    parser.add_argument("--config", type=Path, default=None, help="Settings YAML file")
    parser.add_argument(
        "--decay", action="store_true", help="Enable continuous fuel/time decay"
    )
    parser.add_argument(
        "--autopilot",
        type=int,
        metavar="SEED",
        default=None,
        help="Play a random race with the given seed instead of reading input",
    )
    parser.add_argument(
        "--vehicle", type=int, default=None, help="Preset number (1-based)"
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser.parse_args(argv)


def _status_line(engine: RaceEngine) -> str:
    vehicle = engine.vehicle
    track = engine.track
    if vehicle is None:
        return _STATE_MESSAGES[engine.state]
    lap = min(track.current_lap, track.total_laps)
    remaining = int(engine.remaining_time)
    return (
        f"Lap {lap}/{track.total_laps} {track.progress_glyph()}  "
        f"Speed {vehicle.current_speed:3d} mph  "
        f"Fuel {vehicle.fuel_fraction():6.1%}  "
        f"Time {remaining // 60}:{remaining % 60:02d}"
    )


def _print_summary(summary: RaceSummary) -> None:
    elapsed = int(summary.elapsed_seconds)
    title = "Race Completed!" if summary.state is RaceState.COMPLETED else "Race Failed!"
    print(f"\n{title}")
    print(f"  Car            : {summary.vehicle_name}")
    print(f"  Time           : {elapsed // 60}:{elapsed % 60:02d}")
    print(f"  Laps           : {summary.laps_completed}/{summary.total_laps}")
    print(f"  Turns          : {summary.turns}")
    print(f"  Fuel Remaining : {summary.fuel_remaining:.1f}L")
    for i, lap_time in enumerate(summary.lap_times, start=1):
        print(f"  Lap {i:2d}         : {lap_time:6.1f} s")


def _announce_finish(state: RaceState) -> None:
    if state in (RaceState.COMPLETED, RaceState.GAME_OVER):
        print(f"\n*** {_STATE_MESSAGES[state]} ***")


def _choose_vehicle(engine: RaceEngine, preset: int | None) -> int:
    print("\nAvailable cars:")
    for i, car in enumerate(engine.available_vehicles, start=1):
        print(
            f"  {i}. {car.name:<4} {car.category.value:<6} "
            f"max {car.max_speed} mph, {car.fuel_consumption:.1f}/turn, "
            f"{car.max_fuel:.1f} L"
        )
    while preset is None or not 1 <= preset <= len(engine.available_vehicles):
        raw = input("Choose a car: ").strip()
        preset = int(raw) if raw.isdigit() else None
    return preset - 1


def _play_interactive(engine: RaceEngine) -> None:
    print("Actions: [s] speed up  [m] maintain speed  [p] pit stop  [q] quit")
    while engine.state is RaceState.IN_PROGRESS:
        print(_status_line(engine))
        try:
            key = input("> ").strip().lower()
        except EOFError:
            key = "q"
        if engine.state is not RaceState.IN_PROGRESS:
            break
        if key == "q":
            engine.reset()
            return
        action = _KEYS.get(key)
        if action is None:
            print("Unknown action.")
            continue
        try:
            engine.submit_action(action)
        except RaceError as exc:
            print(exc)


def main(argv: list[str] | None = None) -> int:
    """Run one race in the terminal."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_race_settings(args.config)
    if args.decay and not settings.enable_decay:
        settings = replace(settings, enable_decay=True)
    engine = build_engine(settings)

    print(f"Speed Rush v{__version__}")
    print("=" * 56)

    engine.add_state_listener(_announce_finish)

    idx = _choose_vehicle(engine, args.vehicle)
    vehicle = engine.available_vehicles[idx]

    if args.autopilot is not None:
        summary = play_race(engine, vehicle, np.random.default_rng(args.autopilot))
    else:
        engine.start(vehicle)
        _play_interactive(engine)
        summary = engine.summary()

    if summary.state in (RaceState.COMPLETED, RaceState.GAME_OVER):
        _print_summary(summary)
    engine.reset()
    return 0


if __name__ == "__main__":
    sys.exit(main())
