"""
Motor controller driver interface.

The wire protocol of the controller is not part of this package: a driver
(CAN, serial, vendor SDK...) implements MotorController and is handed to
HardwareElevatorIO. All quantities are on the motor side of the reduction:
rotations, rotations/s, volts, amps.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class IdleMode(Enum):
    """Neutral behaviour of a motor when it is commanded 0 V."""
    COAST = "coast"     # windings open, the carriage can be moved by hand
    BRAKE = "brake"     # windings shorted, resists motion (no uncommanded descent)


class RotationalDirection(Enum):
    """Which shaft rotation the controller reports as positive."""
    CLOCKWISE_POSITIVE = "clockwise_positive"
    COUNTERCLOCKWISE_POSITIVE = "counterclockwise_positive"


@dataclass
class MotorSignals:
    """One successful read of a controller's status signals."""
    position: float = 0.0           # rotations
    velocity: float = 0.0           # rotations/s
    output_voltage: float = 0.0     # V
    supply_current: float = 0.0     # A


class MotorController(ABC):
    """
    Driver for one motor controller.

    read_signals() must not block longer than the given timeout. When the
    signals do not arrive in time it raises MotorReadError (TimeoutError and
    OSError are accepted too); the caller turns that into a connectivity
    flag. Control requests may raise MotorCommandError.
    """

    @abstractmethod
    def read_signals(self, timeout_s: float) -> MotorSignals:
        """Refresh and return position, velocity, output voltage and supply current."""

    @abstractmethod
    def set_voltage(self, volts: float) -> None:
        """Open-loop voltage request."""

    @abstractmethod
    def set_position(self, rotations: float) -> None:
        """Closed-loop position request handled by the controller's own loop."""

    @abstractmethod
    def follow(self, lead: "MotorController", oppose_lead: bool) -> None:
        """Mirror every output of lead, optionally inverted."""

    @abstractmethod
    def set_neutral_mode(self, mode: IdleMode) -> None:
        """Switch between coast and brake."""

    @abstractmethod
    def apply_config(self, config) -> None:
        """Apply a MotorControllerConfig."""

    def clear_sticky_faults(self) -> None:
        """Clear latched faults. Drivers without sticky faults can keep this no-op."""
