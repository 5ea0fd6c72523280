"""Tests for the vehicle model and the fixed preset list."""

import pytest

from speed_rush.core.errors import AlreadyFullError, LimitExceededError
from speed_rush.core.vehicle import Vehicle, VehicleCategory, create_presets

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _sample_vehicle(
    fuel_consumption: float = 7.0, max_fuel: float = 60.0, max_speed: int = 100
) -> Vehicle:
    return Vehicle(
        category=VehicleCategory.SPORT,
        name="Test Car",
        max_speed=max_speed,
        fuel_consumption=fuel_consumption,
        max_fuel=max_fuel,
    )


# ---------------------------------------------------------------------------
# Construction and presets
# ---------------------------------------------------------------------------


def test_new_vehicle_has_full_tank_and_is_stopped() -> None:
    """A fresh vehicle starts at max fuel and zero speed."""
    car = _sample_vehicle()
    assert car.current_fuel == 60.0
    assert car.current_speed == 0
    assert car.fuel_fraction() == 1.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"max_speed": 0},
        {"fuel_consumption": 0.0},
        {"max_fuel": -1.0},
    ],
)
def test_invalid_profile_rejected(kwargs: dict) -> None:
    """Out-of-range profile values must raise ValueError."""
    params = {
        "category": VehicleCategory.ECO,
        "name": "X",
        "max_speed": 100,
        "fuel_consumption": 4.5,
        "max_fuel": 85.0,
    }
    params.update(kwargs)
    with pytest.raises(ValueError):
        Vehicle(**params)


def test_presets_match_contract() -> None:
    """The four presets must appear in the documented order and values."""
    presets = create_presets()
    observed = [
        (v.category, v.name, v.max_speed, v.fuel_consumption, v.max_fuel)
        for v in presets
    ]
    assert observed == [
        (VehicleCategory.SPORT, "A", 100, 7.0, 60.0),
        (VehicleCategory.ECO, "B", 100, 4.5, 85.0),
        (VehicleCategory.RACE, "C", 100, 13.0, 45.0),
        (VehicleCategory.SPORT, "D", 100, 6.5, 70.0),
    ]


def test_presets_span_all_categories() -> None:
    categories = {v.category for v in create_presets()}
    assert categories == set(VehicleCategory)


def test_create_presets_returns_independent_instances() -> None:
    """Mutating one preset list must not leak into another."""
    first = create_presets()
    first[0].increase_speed()
    second = create_presets()
    assert second[0].current_speed == 0


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------


def test_increase_speed_default_delta() -> None:
    car = _sample_vehicle()
    car.increase_speed()
    assert car.current_speed == 10


def test_increase_speed_to_exact_limit() -> None:
    """Reaching max speed exactly is allowed."""
    car = _sample_vehicle()
    car.current_speed = 95
    car.increase_speed(5)
    assert car.current_speed == 100


def test_increase_speed_over_limit_rejected_without_partial_clamp() -> None:
    """Exceeding max speed raises and leaves speed unchanged."""
    car = _sample_vehicle()
    car.current_speed = 95
    with pytest.raises(LimitExceededError):
        car.increase_speed(10)
    assert car.current_speed == 95, "rejected increase must not clamp"


def test_increase_speed_requires_positive_delta() -> None:
    car = _sample_vehicle()
    with pytest.raises(ValueError):
        car.increase_speed(0)


def test_reduce_speed_floors_at_zero() -> None:
    car = _sample_vehicle()
    car.current_speed = 15
    car.reduce_speed(20)
    assert car.current_speed == 0


def test_speed_setter_enforces_bounds() -> None:
    car = _sample_vehicle()
    with pytest.raises(ValueError):
        car.current_speed = 101
    with pytest.raises(ValueError):
        car.current_speed = -1


# ---------------------------------------------------------------------------
# Fuel
# ---------------------------------------------------------------------------


def test_consume_fuel_at_idle_uses_base_rate() -> None:
    car = _sample_vehicle()
    consumed = car.consume_fuel()
    assert consumed == pytest.approx(7.0)
    assert car.current_fuel == pytest.approx(53.0)


def test_consume_fuel_doubles_at_speed_100() -> None:
    car = _sample_vehicle()
    car.current_speed = 100
    assert car.consume_fuel() == pytest.approx(14.0)


def test_consume_fuel_increases_with_speed() -> None:
    """A vehicle at speed 80 must burn more per call than one at speed 20."""
    slow = _sample_vehicle()
    fast = _sample_vehicle()
    slow.current_speed = 20
    fast.current_speed = 80
    assert fast.consume_fuel() > slow.consume_fuel()


def test_consume_fuel_floors_tank_and_reports_unclamped_amount() -> None:
    """The tank never goes negative; the return value is pre-clamp."""
    car = _sample_vehicle()
    car.current_fuel = 3.0
    consumed = car.consume_fuel()
    assert consumed == pytest.approx(7.0)
    assert car.current_fuel == 0.0
    assert not car.has_fuel()


def test_refuel_fills_to_capacity() -> None:
    car = _sample_vehicle()
    car.current_fuel = 12.5
    car.refuel()
    assert car.current_fuel == 60.0


def test_refuel_when_full_rejected() -> None:
    """Refuelling a full tank raises and leaves fuel unchanged."""
    car = _sample_vehicle()
    with pytest.raises(AlreadyFullError):
        car.refuel()
    assert car.current_fuel == 60.0


def test_drain_floors_at_zero() -> None:
    car = _sample_vehicle(max_fuel=0.05)
    car.drain(0.1)
    assert car.current_fuel == 0.0


def test_fuel_fraction() -> None:
    car = _sample_vehicle()
    car.current_fuel = 15.0
    assert car.fuel_fraction() == pytest.approx(0.25)


def test_fuel_setter_enforces_bounds() -> None:
    car = _sample_vehicle()
    with pytest.raises(ValueError):
        car.current_fuel = 60.5
    with pytest.raises(ValueError):
        car.current_fuel = -0.1


def test_reset_run_state() -> None:
    car = _sample_vehicle()
    car.current_speed = 40
    car.current_fuel = 1.0
    car.reset_run_state()
    assert car.current_speed == 0
    assert car.current_fuel == 60.0
