"""
ElevatorIO backed by two physical motor controllers.

The follower is slaved to the lead at the controller level (follow request),
so every command goes to the lead only. No decision logic lives here: the
methods pass orders to the controllers and read their signals back.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from elevator_io.errors import MotorCommandError, MotorReadError
from elevator_io.hardware.motor_config import build_motor_config
from elevator_io.hardware.motor_controller import IdleMode, MotorController, MotorSignals
from elevator_io.logic.elevator_config import ElevatorConfig
from elevator_io.machine.interfaces import ElevatorIO
from elevator_io.machine.telemetry import ElevatorTelemetry

READ_ERRORS = (MotorReadError, TimeoutError, OSError)
COMMAND_ERRORS = (MotorCommandError, OSError)


class HardwareElevatorIO(ElevatorIO):
    """
    Lead/follower elevator on real motor controllers.

    Features:
    - Both controllers configured and cleared of sticky faults at start-up
    - Follower slaved to the lead (optionally opposed)
    - Brake idle mode forced at construction
    - Failed reads reported through the connectivity flags only
    """

    def __init__(self, lead: MotorController, follower: MotorController, config: ElevatorConfig):
        """
        Args:
            lead: controller whose signals are the elevator reference
            follower: controller mechanically coupled to the lead
            config: elevator configuration (mechanics, gains, limits...)
        """
        super().__init__(config.mechanics)
        self.lead = lead
        self.follower = follower
        self.config = config
        self.signal_timeout_s = config.signal_timeout_s

        self.logger = logging.getLogger("elevator_io.hardware_elevator")

        self._lead_connected: Optional[bool] = None
        self._follower_connected: Optional[bool] = None

        motor_config = build_motor_config(config)
        if motor_config.neutral_mode is not IdleMode.BRAKE:
            self.logger.warning("Configured neutral mode is coast; starting in brake anyway")
            motor_config.neutral_mode = IdleMode.BRAKE

        for name, motor in (("lead", lead), ("follower", follower)):
            self._send(f"{name} clear faults", motor.clear_sticky_faults)
            self._send(f"{name} configuration", motor.apply_config, motor_config)
        self._send("follower follow", follower.follow, lead, config.follower_opposes_lead)
        self._command_idle_mode(IdleMode.BRAKE)

        self.logger.info(
            f"Hardware elevator initialized on bus {config.can_bus}: "
            f"lead={config.lead_motor_id}, follower={config.follower_motor_id}, "
            f"follower_opposes_lead={config.follower_opposes_lead}"
        )

    def _update_telemetry(self, telemetry: ElevatorTelemetry) -> None:
        lead_signals = self._read("lead", self.lead)
        telemetry.is_lead_motor_connected = lead_signals is not None
        if lead_signals is not None:
            telemetry.elevator_displacement = self.mechanics.rotations_to_displacement(lead_signals.position)
            telemetry.lead_motor_velocity = lead_signals.velocity
            telemetry.lead_motor_output_voltage = lead_signals.output_voltage
            telemetry.lead_motor_supply_current = lead_signals.supply_current
        telemetry.elevator_target_displacement = self._target_displacement

        follower_signals = self._read("follower", self.follower)
        telemetry.is_follower_motor_connected = follower_signals is not None
        if follower_signals is not None:
            telemetry.follower_motor_output_voltage = follower_signals.output_voltage
            telemetry.follower_motor_supply_current = follower_signals.supply_current

        self._lead_connected = self._log_connectivity("lead", self._lead_connected, lead_signals is not None)
        self._follower_connected = self._log_connectivity(
            "follower", self._follower_connected, follower_signals is not None
        )

    def _read(self, name: str, motor: MotorController) -> Optional[MotorSignals]:
        try:
            return motor.read_signals(self.signal_timeout_s)
        except READ_ERRORS as e:
            self.logger.debug(f"{name} motor read failed: {e}")
            return None

    def _log_connectivity(self, name: str, previous: Optional[bool], connected: bool) -> bool:
        if previous is not None and previous != connected:
            if connected:
                self.logger.info(f"Elevator {name} motor reconnected")
            else:
                self.logger.error(f"Elevator {name} motor lost connection")
        return connected

    def _send(self, what: str, command: Callable, *args) -> bool:
        try:
            command(*args)
            return True
        except COMMAND_ERRORS as e:
            self.logger.error(f"Elevator {what} failed: {e}")
            return False

    def _command_voltage(self, volts: float) -> None:
        self._send("voltage request", self.lead.set_voltage, volts)

    def _command_position(self, rotations: float) -> None:
        self._send("position request", self.lead.set_position, rotations)

    def _command_idle_mode(self, mode: IdleMode) -> None:
        lead_ok = self._send(f"lead {mode.value}", self.lead.set_neutral_mode, mode)
        follower_ok = self._send(f"follower {mode.value}", self.follower.set_neutral_mode, mode)
        if lead_ok or follower_ok:
            self.logger.info(f"Elevator motors set to {mode.value}")

    def close(self) -> None:
        self.logger.info("Closing hardware elevator")
        self.stop()
