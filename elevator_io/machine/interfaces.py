"""
I/O interface for an elevator driven by a lead motor and a follower motor.

An ElevatorIO receives orders only; deciding what to command belongs to the
Elevator subsystem and the control loop above it. The backend (hardware,
simulation, replay) is chosen once at construction, see factory.py.

Per cycle the control loop calls refresh() and then at most one of
set_voltage() / set_target_displacement() / stop(). Refresh and commands are
serialized by an internal lock, so a loop that refreshes on a timer thread
cannot observe a half-written snapshot.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from elevator_io.hardware.motor_controller import IdleMode
from elevator_io.logic.mechanics import ElevatorMechanics
from elevator_io.machine.telemetry import ElevatorTelemetry


class ElevatorIO(ABC):
    """
    Capability interface for the elevator actuators.

    Backends implement the underscore hooks. The public methods enforce what
    must hold for every backend: the voltage clamp, the Brake start-up state,
    and queries that return exactly what the last refresh() observed.
    """

    def __init__(self, mechanics: ElevatorMechanics):
        self.mechanics = mechanics
        self._lock = threading.RLock()
        self._idle_mode = IdleMode.BRAKE
        self._applied_voltage = 0.0
        self._target_displacement = 0.0

        # Lead motor state as of the last refresh
        self._motor_position = 0.0
        self._motor_velocity = 0.0
        self._output_voltage = 0.0

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------
    def refresh(self, telemetry: ElevatorTelemetry) -> None:
        """
        Populate every field of telemetry from the actuators.

        Never raises for a failed read: the motor's connectivity flag goes
        false and its other fields keep their last value.
        """
        with self._lock:
            self._update_telemetry(telemetry)
            self._motor_position = telemetry.lead_motor_position
            self._motor_velocity = telemetry.lead_motor_velocity
            self._output_voltage = telemetry.lead_motor_output_voltage

    @abstractmethod
    def _update_telemetry(self, telemetry: ElevatorTelemetry) -> None:
        """Backend hook: write this cycle's readings into telemetry."""

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def set_voltage(self, voltage: float) -> None:
        """
        Open-loop voltage to the lead motor; the follower mirrors it.
        Clamped to the mechanics voltage bounds whatever the caller passes.
        Used by system identification routines.
        """
        applied = self.mechanics.clamp_voltage(float(voltage))
        with self._lock:
            self._applied_voltage = applied
            self._command_voltage(applied)

    def set_target_displacement(self, distance: float) -> None:
        """
        Convert distance (m) to motor rotations and hand it to the position
        loop of the actuator. No range limiting here, the caller owns that.
        """
        distance = float(distance)
        rotations = self.mechanics.displacement_to_rotations(distance)
        with self._lock:
            self._target_displacement = distance
            self._command_position(rotations)

    def stop(self) -> None:
        """0 V by default. Backends may override with their own neutral output."""
        self.set_voltage(0.0)

    @abstractmethod
    def _command_voltage(self, volts: float) -> None:
        """Backend hook: apply an already clamped voltage."""

    @abstractmethod
    def _command_position(self, rotations: float) -> None:
        """Backend hook: closed-loop position request in motor rotations."""

    # ------------------------------------------------------------------
    # Idle mode
    # ------------------------------------------------------------------
    @property
    def idle_mode(self) -> IdleMode:
        return self._idle_mode

    def coast_motors(self) -> None:
        """Free-spin when unpowered, for manual repositioning outside a match."""
        self._set_idle_mode(IdleMode.COAST)

    def brake_motors(self) -> None:
        """Resist motion when unpowered, required during operation."""
        self._set_idle_mode(IdleMode.BRAKE)

    def _set_idle_mode(self, mode: IdleMode) -> None:
        with self._lock:
            self._idle_mode = mode
            self._command_idle_mode(mode)

    @abstractmethod
    def _command_idle_mode(self, mode: IdleMode) -> None:
        """Backend hook: apply mode to both motors."""

    # ------------------------------------------------------------------
    # Derived state (values from the last refresh, never a fresh sample)
    # ------------------------------------------------------------------
    def get_motor_position(self) -> float:
        """Lead motor position in rotations."""
        return self._motor_position

    def get_motor_velocity(self) -> float:
        """Lead motor velocity in rotations/s."""
        return self._motor_velocity

    def get_motor_power(self) -> float:
        """Lead motor output voltage as a fraction of 12 V, in [-1.0, 1.0]."""
        return self.mechanics.voltage_to_power(self._output_voltage)

    @property
    def applied_voltage(self) -> float:
        """Last voltage actually sent, after clamping."""
        return self._applied_voltage

    @property
    def target_displacement(self) -> float:
        return self._target_displacement

    def close(self) -> None:
        """Release backend resources. The default has none."""
