"""
Elevator subsystem: bridge between the I/O layer and the rest of the program.

All decisions about the elevator (clamping to travel limits, alerts, what
gets recorded) are taken here; the ElevatorIO passed in only carries the
orders to hardware, simulation or replay.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from elevator_io.errors import ConfigurationError
from elevator_io.hardware.motor_controller import IdleMode
from elevator_io.logic.elevator_config import ElevatorConfig
from elevator_io.machine.alerts import Alert, AlertType
from elevator_io.machine.interfaces import ElevatorIO
from elevator_io.machine.telemetry import ElevatorTelemetry
from elevator_io.machine.telemetry_logger import TelemetryLogger


class Elevator:
    """
    Lead/follower elevator as seen by the control loop.

    Call periodic() once per cycle (every 20 ms at 50 Hz) before reading
    inputs or issuing a command.
    """

    TABLE = "Elevator"

    def __init__(
        self,
        io: ElevatorIO,
        config: ElevatorConfig,
        telemetry_logger: Optional[TelemetryLogger] = None,
    ):
        if io.mechanics != config.mechanics:
            raise ConfigurationError(
                f"I/O mechanics {io.mechanics} differ from configured {config.mechanics}"
            )
        self.io = io
        self.config = config
        self.inputs = ElevatorTelemetry(config.mechanics)
        self.telemetry_logger = telemetry_logger if telemetry_logger is not None else TelemetryLogger()

        self.lead_motor_disconnected_alert = Alert("Elevator's lead motor lost connection", AlertType.ERROR)
        self.follower_motor_disconnected_alert = Alert(
            "Elevator's follower motor lost connection", AlertType.ERROR
        )

        self.logger = logging.getLogger("elevator_io.elevator")
        self.logger.info(
            f"Elevator ready ({type(io).__name__}), "
            f"limits {config.limits.minimum:.3f}-{config.limits.maximum:.3f}m"
        )

    def periodic(self):
        """Refresh the inputs, record them and update the disconnect alerts."""
        self.io.refresh(self.inputs)
        self.telemetry_logger.process_inputs(self.TABLE, self.inputs)

        self.lead_motor_disconnected_alert.set(not self.inputs.is_lead_motor_connected)
        self.follower_motor_disconnected_alert.set(not self.inputs.is_follower_motor_connected)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def set_voltage(self, voltage: float):
        """
        Clamps the desired voltage within [-12.0, 12.0] and passes it to the
        I/O layer. Intended for system identification routines. NaN is
        applied as 0 V.
        """
        self.io.set_voltage(self.config.mechanics.clamp_voltage(voltage))

    def set_target_displacement(self, target_displacement: float):
        """
        Clamps the desired carriage displacement (m, not motor rotations)
        within the configured limits and passes it to the I/O layer.

        A NaN target is dropped with a warning; the previous target stays
        in effect.
        """
        if math.isnan(target_displacement):
            self.logger.warning(
                f"Ignoring NaN target displacement, keeping {self.io.target_displacement:.4f}m"
            )
            return
        clamped = self.config.limits.coerce_in(target_displacement)
        if clamped != target_displacement:
            self.logger.debug(f"Target {target_displacement:.4f}m clamped to {clamped:.4f}m")
        self.io.set_target_displacement(clamped)

    def stop(self):
        self.io.stop()

    def coast(self):
        self.io.coast_motors()

    def brake(self):
        self.io.brake_motors()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def displacement(self) -> float:
        return self.inputs.elevator_displacement

    @property
    def motor_position(self) -> float:
        return self.io.get_motor_position()

    @property
    def motor_velocity(self) -> float:
        return self.io.get_motor_velocity()

    @property
    def velocity(self) -> float:
        """Carriage velocity in m/s, from the lead motor velocity."""
        return self.config.mechanics.angular_to_linear_velocity(self.inputs.lead_motor_velocity)

    @property
    def power(self) -> float:
        return self.io.get_motor_power()

    @property
    def idle_mode(self) -> IdleMode:
        return self.io.idle_mode

    @property
    def sysid_forward_allowed(self) -> bool:
        """True while the carriage is below the maximum limit."""
        return self.inputs.elevator_displacement < self.config.limits.maximum

    @property
    def sysid_backward_allowed(self) -> bool:
        """True while the carriage is above the minimum limit."""
        return self.inputs.elevator_displacement > self.config.limits.minimum

    def close(self):
        self.io.close()
