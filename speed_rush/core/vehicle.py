"""Vehicle model for the Speed Rush race engine.

A vehicle couples an immutable performance profile (category, name, top
speed, consumption rate, tank size) with the mutable run-state a race
drives: current speed and current fuel.  Both run-state values are held
within their bounds at all times; out-of-range requests are rejected
rather than silently clamped, except where the clamp is the documented
policy (fuel floors at zero, pit-stop slow-down floors at zero).
"""

from __future__ import annotations

from enum import Enum

from speed_rush.core.errors import AlreadyFullError, LimitExceededError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_SPEED_INCREMENT: int = 10
_IDLE_SPEED_REFERENCE: float = 100.0  # consumption doubles at this speed


class VehicleCategory(str, Enum):
    """Selectable vehicle classes."""

    SPORT = "Sport"
    ECO = "Eco"
    RACE = "Race"


# ---------------------------------------------------------------------------
# Vehicle
# ---------------------------------------------------------------------------


class Vehicle:
    """One selectable car configuration and its live run-state.

    Attributes:
        category: Vehicle class.
        name: Display name.
        max_speed: Upper bound for ``current_speed`` (> 0).
        fuel_consumption: Base fuel consumed per turn at idle (> 0).
        max_fuel: Tank capacity (> 0).
        current_fuel: Fuel in the tank, in ``[0, max_fuel]``.
        current_speed: Current speed, in ``[0, max_speed]``.
    """

    __slots__ = (
        "_category",
        "_name",
        "_max_speed",
        "_fuel_consumption",
        "_max_fuel",
        "_current_fuel",
        "_current_speed",
    )

    def __init__(
        self,
        category: VehicleCategory,
        name: str,
        max_speed: int,
        fuel_consumption: float,
        max_fuel: float,
    ) -> None:
        """Initialise a vehicle with a full tank at standstill.

        Args:
            category: Vehicle class.
            name: Display name. Must be non-empty.
            max_speed: Maximum speed. Must be a positive integer.
            fuel_consumption: Base consumption per turn. Must be > 0.
            max_fuel: Tank capacity. Must be > 0.

        Raises:
            ValueError: If any parameter is out of range.
        """
        if not isinstance(category, VehicleCategory):
            raise ValueError(f"Unknown vehicle category: {category!r}")
        if not name:
            raise ValueError("Vehicle name must not be empty.")
        if max_speed <= 0:
            raise ValueError("max_speed must be > 0.")
        if fuel_consumption <= 0.0:
            raise ValueError("fuel_consumption must be > 0.")
        if max_fuel <= 0.0:
            raise ValueError("max_fuel must be > 0.")
        self._category: VehicleCategory = category
        self._name: str = name
        self._max_speed: int = int(max_speed)
        self._fuel_consumption: float = float(fuel_consumption)
        self._max_fuel: float = float(max_fuel)
        self._current_fuel: float = self._max_fuel
        self._current_speed: int = 0

    def __repr__(self) -> str:
        return (
            f"Vehicle(category={self._category.value!r}, name={self._name!r}, "
            f"speed={self._current_speed}, fuel={self._current_fuel:.2f})"
        )

    # -- Profile (read-only) -------------------------------------------------

    @property
    def category(self) -> VehicleCategory:
        return self._category

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_speed(self) -> int:
        return self._max_speed

    @property
    def fuel_consumption(self) -> float:
        return self._fuel_consumption

    @property
    def max_fuel(self) -> float:
        return self._max_fuel

    # -- Run-state -----------------------------------------------------------

    @property
    def current_fuel(self) -> float:
        return self._current_fuel

    @current_fuel.setter
    def current_fuel(self, value: float) -> None:
        if not 0.0 <= value <= self._max_fuel:
            raise ValueError(f"current_fuel must be between 0.0 and {self._max_fuel}.")
        self._current_fuel = float(value)

    @property
    def current_speed(self) -> int:
        return self._current_speed

    @current_speed.setter
    def current_speed(self, value: int) -> None:
        if not 0 <= value <= self._max_speed:
            raise ValueError(f"current_speed must be between 0 and {self._max_speed}.")
        self._current_speed = int(value)

    def reset_run_state(self) -> None:
        """Fill the tank and bring the vehicle to a standstill."""
        self._current_fuel = self._max_fuel
        self._current_speed = 0

    # -- Operations ----------------------------------------------------------

    def increase_speed(self, delta: int = DEFAULT_SPEED_INCREMENT) -> None:
        """Raise the current speed by *delta*.

        The whole call is rejected when the result would pass ``max_speed``;
        there is no partial increase.

        Args:
            delta: Positive speed increment.

        Raises:
            ValueError: If *delta* is not positive.
            LimitExceededError: If ``current_speed + delta > max_speed``.
        """
        if delta <= 0:
            raise ValueError("delta must be > 0.")
        if self._current_speed + delta > self._max_speed:
            raise LimitExceededError(f"Cannot exceed maximum speed of {self._max_speed}")
        self._current_speed = min(self._current_speed + delta, self._max_speed)

    def reduce_speed(self, delta: int) -> None:
        """Lower the current speed by *delta*, floored at zero."""
        if delta < 0:
            raise ValueError("delta must be >= 0.")
        self._current_speed = max(0, self._current_speed - delta)

    def consume_fuel(self) -> float:
        """Burn one turn's worth of fuel.

        Consumption scales linearly with speed and doubles at speed 100::

            amount = fuel_consumption * (1 + current_speed / 100)

        The tank floors at zero.

        Returns:
            The amount consumed, before the floor is applied.
        """
        amount: float = self._fuel_consumption * (
            1.0 + self._current_speed / _IDLE_SPEED_REFERENCE
        )
        self._current_fuel = max(0.0, self._current_fuel - amount)
        return amount

    def drain(self, amount: float) -> None:
        """Remove a fixed *amount* of fuel, floored at zero."""
        if amount < 0.0:
            raise ValueError("drain amount must be >= 0.")
        self._current_fuel = max(0.0, self._current_fuel - amount)

    def refuel(self) -> None:
        """Fill the tank to capacity.

        Raises:
            AlreadyFullError: If the tank is already at capacity.
        """
        if self._current_fuel >= self._max_fuel:
            raise AlreadyFullError("Fuel tank is already full")
        self._current_fuel = self._max_fuel

    def has_fuel(self) -> bool:
        """Return True while any fuel remains."""
        return self._current_fuel > 0.0

    def fuel_fraction(self) -> float:
        """Return remaining fuel as a fraction of capacity in ``[0, 1]``."""
        return self._current_fuel / self._max_fuel


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

# (category, name, max_speed, consumption per turn, max fuel)
_PRESET_PROFILES: tuple[tuple[VehicleCategory, str, int, float, float], ...] = (
    (VehicleCategory.SPORT, "A", 100, 7.0, 60.0),
    (VehicleCategory.ECO, "B", 100, 4.5, 85.0),
    (VehicleCategory.RACE, "C", 100, 13.0, 45.0),
    (VehicleCategory.SPORT, "D", 100, 6.5, 70.0),
)


def create_presets() -> list[Vehicle]:
    """Build the four selectable vehicles, in their fixed order."""
    return [Vehicle(*profile) for profile in _PRESET_PROFILES]
