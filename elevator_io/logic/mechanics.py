"""
Mechanical transforms between the elevator carriage and its motors.

Units used throughout the package:
- linear displacement: meters
- motor position: rotations
- motor velocity: rotations per second
- voltage: volts

The transform is fixed at construction:

    motor_rotations = displacement / (sprocket_radius * 2π) * gear_reduction
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from elevator_io.errors import ConfigurationError
from elevator_io.utils.validation import ValidationResult, Validator

MAX_VOLTAGE = 12.0


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(value, maximum))


@dataclass(frozen=True)
class Sprocket:
    """Converts rotational motion of the output shaft into carriage travel."""
    radius_m: float

    def __post_init__(self):
        result = Validator.validate_positive(self.radius_m, "sprocket_radius_m")
        if not result.is_valid:
            raise ConfigurationError(result.get_error_messages())

    @property
    def circumference_m(self) -> float:
        return self.radius_m * 2.0 * math.pi

    def linear_to_angular(self, displacement_m: float) -> float:
        """Carriage travel in meters -> sprocket rotations."""
        return displacement_m / self.circumference_m

    def angular_to_linear(self, rotations: float) -> float:
        """Sprocket rotations -> carriage travel in meters."""
        return rotations * self.circumference_m


@dataclass(frozen=True)
class Reduction:
    """Gear reduction expressed as motor rotations per mechanism rotation."""
    ratio: float

    def __post_init__(self):
        result = Validator.validate_positive(self.ratio, "gear_reduction")
        if not result.is_valid:
            raise ConfigurationError(result.get_error_messages())

    def apply(self, motor_rotations: float) -> float:
        """Motor side -> mechanism side."""
        return motor_rotations / self.ratio

    def unapply(self, mechanism_rotations: float) -> float:
        """Mechanism side -> motor side."""
        return mechanism_rotations * self.ratio


@dataclass(frozen=True)
class MeasureLimits:
    """Closed bounds used to keep a setpoint inside the physical travel."""
    minimum: float
    maximum: float

    def __post_init__(self):
        result = Validator.validate_range(self.minimum, self.maximum, "limits")
        if not result.is_valid:
            raise ConfigurationError(result.get_error_messages())

    def coerce_in(self, value: float) -> float:
        return clamp(value, self.minimum, self.maximum)

    def __contains__(self, value: float) -> bool:
        # Strict: sitting exactly on a bound counts as outside.
        return self.minimum < value < self.maximum


@dataclass(frozen=True)
class ElevatorMechanics:
    """
    Immutable mechanical constants of the elevator.

    These must be identical between the hardware and the simulation backends,
    otherwise recorded telemetry cannot be replayed against the simulation.

    Raises:
        ConfigurationError: on a zero, negative or non-finite radius or
            reduction, or on inverted voltage bounds.
    """
    sprocket_radius_m: float
    gear_reduction: float
    min_voltage: float = -MAX_VOLTAGE
    max_voltage: float = MAX_VOLTAGE
    sprocket: Sprocket = field(init=False, repr=False, compare=False)
    reduction: Reduction = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        result = ValidationResult()
        result.merge(Validator.validate_positive(self.sprocket_radius_m, "sprocket_radius_m"))
        result.merge(Validator.validate_positive(self.gear_reduction, "gear_reduction"))
        result.merge(Validator.validate_range(self.min_voltage, self.max_voltage, "voltage bounds"))
        if result.is_valid and (self.min_voltage < -MAX_VOLTAGE or self.max_voltage > MAX_VOLTAGE):
            result.add_error(
                "voltage bounds",
                f"voltage bounds must lie within [-{MAX_VOLTAGE}, {MAX_VOLTAGE}]",
                "OUT_OF_RANGE"
            )
        if not result.is_valid:
            raise ConfigurationError(result.get_error_messages())

        object.__setattr__(self, "sprocket", Sprocket(self.sprocket_radius_m))
        object.__setattr__(self, "reduction", Reduction(self.gear_reduction))

    def displacement_to_rotations(self, displacement_m: float) -> float:
        return self.reduction.unapply(self.sprocket.linear_to_angular(displacement_m))

    def rotations_to_displacement(self, motor_rotations: float) -> float:
        return self.sprocket.angular_to_linear(self.reduction.apply(motor_rotations))

    def linear_to_angular_velocity(self, velocity_mps: float) -> float:
        """Carriage velocity (m/s) -> motor velocity (rotations/s)."""
        return self.displacement_to_rotations(velocity_mps)

    def angular_to_linear_velocity(self, velocity_rps: float) -> float:
        """Motor velocity (rotations/s) -> carriage velocity (m/s)."""
        return self.rotations_to_displacement(velocity_rps)

    def clamp_voltage(self, voltage: float) -> float:
        if math.isnan(voltage):
            return 0.0
        return clamp(voltage, self.min_voltage, self.max_voltage)

    def voltage_to_power(self, voltage: float) -> float:
        """Normalized power in [-1.0, 1.0]; always relative to 12 V."""
        if math.isnan(voltage):
            return 0.0
        return clamp(voltage / MAX_VOLTAGE, -1.0, 1.0)
