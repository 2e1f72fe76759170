"""
Unit tests for the elevator mechanical transforms.
"""

import math

import pytest

from elevator_io.errors import ConfigurationError
from elevator_io.logic.mechanics import (
    ElevatorMechanics,
    MeasureLimits,
    Reduction,
    Sprocket,
    clamp,
)


def test_displacement_to_rotations(mechanics):
    """Test 0.30 m with a 0.025 m sprocket and 12:1 reduction is ~22.918 rotations."""
    rotations = mechanics.displacement_to_rotations(0.30)

    assert rotations == pytest.approx(0.30 / (0.025 * 2 * math.pi) * 12, rel=1e-12)
    assert rotations == pytest.approx(22.918, abs=1e-3)


@pytest.mark.parametrize("displacement", [0.0, 0.0127, 0.5, 1.3208, -0.2])
def test_rotations_round_trip(mechanics, displacement):
    """Test the two directions of the transform invert each other."""
    rotations = mechanics.displacement_to_rotations(displacement)
    assert mechanics.rotations_to_displacement(rotations) == pytest.approx(displacement, abs=1e-12)


def test_velocity_uses_same_ratio(mechanics):
    """Test velocities convert with the same factor as positions."""
    assert mechanics.linear_to_angular_velocity(1.0) == pytest.approx(mechanics.displacement_to_rotations(1.0))
    assert mechanics.angular_to_linear_velocity(12.0) == pytest.approx(0.025 * 2 * math.pi)


@pytest.mark.parametrize("radius,ratio", [
    (0.0, 12.0),
    (-0.025, 12.0),
    (math.nan, 12.0),
    (0.025, 0.0),
    (0.025, -3.0),
    (0.025, math.inf),
])
def test_invalid_mechanics_rejected(radius, ratio):
    """Test zero, negative and non-finite constants are a configuration error."""
    with pytest.raises(ConfigurationError):
        ElevatorMechanics(sprocket_radius_m=radius, gear_reduction=ratio)


def test_invalid_voltage_bounds_rejected():
    """Test voltage bounds must be ordered and within +/-12 V."""
    with pytest.raises(ConfigurationError):
        ElevatorMechanics(0.025, 12.0, min_voltage=6.0, max_voltage=-6.0)
    with pytest.raises(ConfigurationError):
        ElevatorMechanics(0.025, 12.0, min_voltage=-24.0, max_voltage=24.0)


def test_configuration_error_lists_every_problem():
    """Test a single ConfigurationError reports all invalid constants."""
    with pytest.raises(ConfigurationError) as exc_info:
        ElevatorMechanics(sprocket_radius_m=0.0, gear_reduction=-1.0)

    assert len(exc_info.value.messages) == 2
    assert "sprocket_radius_m" in str(exc_info.value)
    assert "gear_reduction" in str(exc_info.value)


def test_mechanics_equality_ignores_derived_parts():
    """Test two mechanics with the same constants compare equal."""
    assert ElevatorMechanics(0.025, 12.0) == ElevatorMechanics(0.025, 12.0)
    assert ElevatorMechanics(0.025, 12.0) != ElevatorMechanics(0.025, 10.0)


@pytest.mark.parametrize("requested,expected", [
    (15.0, 12.0),
    (-15.0, -12.0),
    (5.5, 5.5),
    (math.inf, 12.0),
    (math.nan, 0.0),
])
def test_clamp_voltage(mechanics, requested, expected):
    assert mechanics.clamp_voltage(requested) == expected


def test_voltage_to_power(mechanics):
    """Test power is the voltage relative to 12 V, bounded to [-1, 1]."""
    assert mechanics.voltage_to_power(12.0) == 1.0
    assert mechanics.voltage_to_power(-6.0) == -0.5
    assert mechanics.voltage_to_power(0.0) == 0.0
    assert mechanics.voltage_to_power(13.0) == 1.0
    assert mechanics.voltage_to_power(math.nan) == 0.0


def test_sprocket_and_reduction():
    sprocket = Sprocket(0.025)
    assert sprocket.radius_m == 0.025
    assert sprocket.angular_to_linear(1.0) == pytest.approx(0.05 * math.pi)
    assert sprocket.linear_to_angular(sprocket.circumference_m) == pytest.approx(1.0)

    reduction = Reduction(12.0)
    assert reduction.apply(24.0) == 2.0
    assert reduction.unapply(2.0) == 24.0


def test_measure_limits():
    """Test coerce_in clamps and membership excludes the bounds."""
    limits = MeasureLimits(0.0127, 1.3208)

    assert limits.coerce_in(2.0) == 1.3208
    assert limits.coerce_in(-1.0) == 0.0127
    assert limits.coerce_in(0.5) == 0.5
    assert 0.5 in limits
    assert 1.3208 not in limits

    with pytest.raises(ConfigurationError):
        MeasureLimits(1.0, 0.5)


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-5, 0, 3) == 0
    assert clamp(2, 0, 3) == 2
