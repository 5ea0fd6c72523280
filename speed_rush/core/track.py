"""Track model for the Speed Rush race engine."""

from __future__ import annotations

import math

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DISTANCE_PER_SPEED: float = 0.5  # distance covered per unit of speed per turn
GLYPH_CELLS: int = 10
FINISH_GLYPH: str = "[FINISH!]"

_FILLED: str = "="
_CURSOR: str = ">"
_EMPTY: str = "-"


class Track:
    """Lap progression for a single race.

    Only one lap can complete per :meth:`advance` call.  On completion the
    in-lap distance resets to exactly zero; any overshoot is discarded.

    Attributes:
        total_laps: Laps required to finish (>= 1).
        lap_distance: Distance that completes one lap (> 0).
        current_lap: 1-based lap number; exceeds ``total_laps`` once the
            race is complete.
        current_lap_distance: Distance covered in the current lap, in
            ``[0, lap_distance)``.
        lap_times: Recorded lap durations in race-clock seconds.
    """

    __slots__ = (
        "_total_laps",
        "_lap_distance",
        "current_lap",
        "current_lap_distance",
        "lap_times",
    )

    def __init__(self, total_laps: int = 5, lap_distance: float = 100.0) -> None:
        """Initialise a track at the start line.

        Args:
            total_laps: Number of laps. Must be >= 1.
            lap_distance: Distance per lap. Must be > 0.

        Raises:
            ValueError: If constraints are violated.
        """
        if total_laps < 1:
            raise ValueError("total_laps must be >= 1.")
        if lap_distance <= 0.0:
            raise ValueError("lap_distance must be > 0.")
        self._total_laps: int = int(total_laps)
        self._lap_distance: float = float(lap_distance)
        self.current_lap: int = 1
        self.current_lap_distance: float = 0.0
        self.lap_times: list[float] = []

    @property
    def total_laps(self) -> int:
        return self._total_laps

    @property
    def lap_distance(self) -> float:
        return self._lap_distance

    @property
    def laps_completed(self) -> int:
        return min(self.current_lap - 1, self._total_laps)

    def reset(self) -> None:
        """Return to the start line and clear the lap-time log."""
        self.current_lap = 1
        self.current_lap_distance = 0.0
        self.lap_times = []

    def advance(self, speed: int) -> bool:
        """Move along the track for one turn at *speed*.

        Args:
            speed: Current vehicle speed (>= 0).

        Returns:
            True if this call completed a lap, False otherwise (including
            when the race is already complete).

        Raises:
            ValueError: If *speed* is negative.
        """
        if speed < 0:
            raise ValueError("speed must be >= 0.")
        if self.is_complete():
            return False

        self.current_lap_distance += speed * DISTANCE_PER_SPEED
        if self.current_lap_distance >= self._lap_distance:
            self.current_lap_distance = 0.0
            self.current_lap += 1
            return True
        return False

    def record_lap_time(self, seconds: float) -> None:
        """Append a completed lap's duration to the log."""
        if seconds < 0.0:
            raise ValueError("lap time must be >= 0.")
        self.lap_times.append(seconds)

    def is_complete(self) -> bool:
        return self.current_lap > self._total_laps

    def lap_progress(self) -> float:
        """Fraction of the current lap covered, 1.0 once the race is over."""
        if self.is_complete():
            return 1.0
        return self.current_lap_distance / self._lap_distance

    def overall_progress(self) -> float:
        """Fraction of the whole race covered, in ``[0, 1]``."""
        if self.is_complete():
            return 1.0
        return ((self.current_lap - 1) + self.lap_progress()) / self._total_laps

    def progress_glyph(self) -> str:
        """Render in-lap progress as a bracketed ten-cell bar.

        ``floor(lap_progress * 10)`` cells are filled, followed by a cursor
        and the remaining empty cells, e.g. ``[==>--------]`` at 20%.
        """
        if self.is_complete():
            return FINISH_GLYPH
        filled: int = math.floor(self.lap_progress() * GLYPH_CELLS)
        return (
            "["
            + _FILLED * filled
            + _CURSOR
            + _EMPTY * (GLYPH_CELLS - filled)
            + "]"
        )
