"""Seeded random driver for headless races.

The autopilot draws one action per turn from a weighted distribution
using a ``numpy.random.Generator``.  A rejected action (speeding up at the
limit, pitting on a full tank) is simply redrawn, so the same seed always
plays the same race.
"""

from __future__ import annotations

import numpy as np
from numpy.random import Generator

from speed_rush.core.errors import ActionFailedError
from speed_rush.core.race import PlayerAction, RaceEngine, RaceState, RaceSummary
from speed_rush.core.vehicle import Vehicle

_ACTIONS: tuple[PlayerAction, ...] = tuple(PlayerAction)

DEFAULT_WEIGHTS: dict[PlayerAction, float] = {
    PlayerAction.SPEED_UP: 0.5,
    PlayerAction.MAINTAIN_SPEED: 0.35,
    PlayerAction.PIT_STOP: 0.15,
}

MAX_ATTEMPTS: int = 1000  # resolved plus rejected submissions per race


def _action_probabilities(weights: dict[PlayerAction, float] | None) -> np.ndarray:
    """Normalise *weights* into a probability vector ordered like ``_ACTIONS``."""
    resolved = DEFAULT_WEIGHTS if weights is None else weights
    probs = np.array([float(resolved.get(a, 0.0)) for a in _ACTIONS])
    if np.any(probs < 0.0):
        raise ValueError("action weights must be >= 0.")
    total = probs.sum()
    if total <= 0.0:
        raise ValueError("action weights must not all be zero.")
    return probs / total


def choose_action(
    rng: Generator, weights: dict[PlayerAction, float] | None = None
) -> PlayerAction:
    """Draw one action according to *weights* (defaults to ``DEFAULT_WEIGHTS``)."""
    probs = _action_probabilities(weights)
    return _ACTIONS[int(rng.choice(len(_ACTIONS), p=probs))]


def play_race(
    engine: RaceEngine,
    vehicle: Vehicle,
    rng: Generator,
    weights: dict[PlayerAction, float] | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> RaceSummary:
    """Start a race with *vehicle* and drive it with random actions.

    Args:
        engine: Engine to race on.  Must not have a race in progress.
        vehicle: Vehicle to bind, normally one of
            ``engine.available_vehicles``.
        rng: Random generator; fully determines the action sequence.
        weights: Relative action weights.
        max_attempts: Upper bound on submissions, rejected ones included.

    Returns:
        The engine's :class:`RaceSummary` once the race ends (or the
        attempt budget runs out).

    Raises:
        ValueError: If *max_attempts* < 1 or the weights are invalid.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1.")
    probs = _action_probabilities(weights)

    engine.start(vehicle)
    attempts = 0
    while engine.state is RaceState.IN_PROGRESS and attempts < max_attempts:
        attempts += 1
        action = _ACTIONS[int(rng.choice(len(_ACTIONS), p=probs))]
        try:
            engine.submit_action(action)
        except ActionFailedError:
            continue
    return engine.summary()
