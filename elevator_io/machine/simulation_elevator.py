"""
Simulated elevator for running the control loop without hardware.

The position loop that a real motor controller runs internally is emulated
with a PID (simple_pid) on motor rotations plus the gravity feedforward gain,
limited to the voltage clamp. Read failures can be injected to exercise the
disconnect handling of the layers above.
"""

from __future__ import annotations

import logging

from simple_pid import PID

from elevator_io.hardware.motor_controller import IdleMode
from elevator_io.logic.elevator_config import ElevatorConfig
from elevator_io.machine.elevator_physics import ElevatorPhysics
from elevator_io.machine.interfaces import ElevatorIO
from elevator_io.machine.telemetry import ElevatorTelemetry


class SimulationElevatorIO(ElevatorIO):
    """
    Physics-backed ElevatorIO.

    Every refresh() advances the simulation by one loop period, so simulated
    time is tied to control cycles rather than to the wall clock.
    """

    def __init__(self, config: ElevatorConfig):
        super().__init__(config.mechanics)
        self.config = config
        self.dt = config.loop_period_s
        self.physics = ElevatorPhysics(config.mechanics, config.simulation)

        self.logger = logging.getLogger("elevator_io.simulation_elevator")

        gains = config.gains
        self._pid = PID(
            Kp=gains.p,
            Ki=gains.i,
            Kd=gains.d,
            setpoint=0.0,
            sample_time=None,
            output_limits=(config.mechanics.min_voltage, config.mechanics.max_voltage),
        )
        self._gravity_ff = gains.g
        self._closed_loop = False
        self._open_loop_voltage = 0.0

        self._lead_read_fails = False
        self._follower_read_fails = False

        self.logger.info(
            f"Simulation elevator initialized: mass={config.simulation.carriage_mass_kg}kg, "
            f"travel {config.simulation.min_height_m}-{config.simulation.max_height_m}m, "
            f"PID(Kp={gains.p}, Ki={gains.i}, Kd={gains.d})"
        )

    # ------------------------------------------------------------------
    # Fault injection
    # ------------------------------------------------------------------
    def inject_read_failure(self, lead: bool = True, follower: bool = False):
        """Make the next refreshes fail to read the selected motors."""
        with self._lock:
            self._lead_read_fails = bool(lead)
            self._follower_read_fails = bool(follower)
        self.logger.warning(f"Injected read failure: lead={lead}, follower={follower}")

    def clear_read_failures(self):
        with self._lock:
            self._lead_read_fails = False
            self._follower_read_fails = False

    # ------------------------------------------------------------------
    # ElevatorIO hooks
    # ------------------------------------------------------------------
    def _update_telemetry(self, telemetry: ElevatorTelemetry) -> None:
        if self._closed_loop:
            measured = self.mechanics.displacement_to_rotations(self.physics.position_m)
            voltage = self.mechanics.clamp_voltage(self._pid(measured, dt=self.dt) + self._gravity_ff)
            self._applied_voltage = voltage
        else:
            voltage = self._open_loop_voltage

        self.physics.step(voltage, self._idle_mode, self.dt)

        telemetry.is_lead_motor_connected = not self._lead_read_fails
        if not self._lead_read_fails:
            telemetry.elevator_displacement = self.physics.position_m
            telemetry.lead_motor_velocity = self.mechanics.linear_to_angular_velocity(self.physics.velocity_mps)
            telemetry.lead_motor_output_voltage = voltage
            telemetry.lead_motor_supply_current = self.physics.supply_current_a
        telemetry.elevator_target_displacement = self._target_displacement

        telemetry.is_follower_motor_connected = not self._follower_read_fails
        if not self._follower_read_fails:
            direction = -1.0 if self.config.follower_opposes_lead else 1.0
            telemetry.follower_motor_output_voltage = direction * voltage
            telemetry.follower_motor_supply_current = self.physics.supply_current_a

    def _command_voltage(self, volts: float) -> None:
        self._closed_loop = False
        self._open_loop_voltage = volts

    def _command_position(self, rotations: float) -> None:
        if not self._closed_loop:
            self._pid.reset()
            self._closed_loop = True
        self._pid.setpoint = rotations

    def _command_idle_mode(self, mode: IdleMode) -> None:
        self.logger.info(f"Simulated elevator motors set to {mode.value}")
