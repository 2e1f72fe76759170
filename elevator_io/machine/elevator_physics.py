"""
Carriage physics for the simulated elevator.

Two identical DC motors drive the carriage through the gear reduction and the
sprocket. Over one step the voltage is constant, which makes the carriage a
first-order system in velocity:

    m dv/dt = F_v - b v - m g

F_v is the force produced by the voltage and b the damping from the motors'
back-EMF. The step uses the exact solution of that equation, because the
electrical time constant of a stiff geared elevator is far below the 20 ms
loop period and an explicit Euler step would diverge.

With the windings open (coast at 0 V) the motors produce no force and the
carriage falls freely; in brake the shorted windings still damp the motion.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from elevator_io.hardware.motor_controller import IdleMode
from elevator_io.logic.elevator_config import SimulationParameters
from elevator_io.logic.mechanics import ElevatorMechanics

GRAVITY = 9.80665


@dataclass(frozen=True)
class DCMotorModel:
    nominal_voltage: float
    stall_torque_nm: float
    stall_current_a: float
    free_current_a: float
    free_speed_rps: float

    @property
    def resistance_ohm(self) -> float:
        return self.nominal_voltage / self.stall_current_a

    @property
    def kv_rad_per_s_per_volt(self) -> float:
        free_speed_rad = self.free_speed_rps * 2.0 * math.pi
        return free_speed_rad / (self.nominal_voltage - self.resistance_ohm * self.free_current_a)

    @property
    def kt_nm_per_amp(self) -> float:
        return self.stall_torque_nm / self.stall_current_a


KRAKEN_X60 = DCMotorModel(
    nominal_voltage=12.0,
    stall_torque_nm=7.09,
    stall_current_a=366.0,
    free_current_a=2.0,
    free_speed_rps=100.0,
)


class ElevatorPhysics:
    """Carriage position/velocity integrated one control period at a time."""

    def __init__(
        self,
        mechanics: ElevatorMechanics,
        params: SimulationParameters,
        motor: DCMotorModel = KRAKEN_X60,
        motor_count: int = 2,
    ):
        self.mechanics = mechanics
        self.params = params
        self.motor = motor
        self.motor_count = motor_count

        self.position_m = params.starting_height_m
        self.velocity_mps = 0.0
        self.stator_current_a = 0.0     # per motor
        self.supply_current_a = 0.0     # per motor

    @property
    def _motor_rad_per_meter(self) -> float:
        return self.mechanics.gear_reduction / self.mechanics.sprocket_radius_m

    def step(self, voltage: float, idle_mode: IdleMode, dt: float):
        """Advance the carriage by dt seconds with voltage applied to both motors."""
        mass = self.params.carriage_mass_kg
        gravity = GRAVITY if self.params.simulate_gravity else 0.0
        k = self._motor_rad_per_meter
        r_ohm = self.motor.resistance_ohm
        kt = self.motor.kt_nm_per_amp
        kv = self.motor.kv_rad_per_s_per_volt

        windings_open = idle_mode is IdleMode.COAST and voltage == 0.0
        if windings_open:
            force = 0.0
            damping = 0.0
        else:
            force = self.motor_count * k * kt * voltage / r_ohm
            damping = self.motor_count * k * k * kt / (kv * r_ohm)

        accel = force / mass - gravity
        v0 = self.velocity_mps
        if damping > 0.0:
            tau = mass / damping
            v_inf = accel * tau
            decay = math.exp(-dt / tau)
            velocity = v_inf + (v0 - v_inf) * decay
            position = self.position_m + v_inf * dt + (v0 - v_inf) * tau * (1.0 - decay)
        else:
            velocity = v0 + accel * dt
            position = self.position_m + v0 * dt + 0.5 * accel * dt * dt

        # Hard stops
        if position <= self.params.min_height_m:
            position = self.params.min_height_m
            velocity = max(velocity, 0.0)
        elif position >= self.params.max_height_m:
            position = self.params.max_height_m
            velocity = min(velocity, 0.0)

        self.position_m = position
        self.velocity_mps = velocity

        if windings_open:
            self.stator_current_a = 0.0
        else:
            omega = velocity * k
            self.stator_current_a = (voltage - omega / kv) / r_ohm
        self.supply_current_a = abs(self.stator_current_a * voltage) / self.motor.nominal_voltage
