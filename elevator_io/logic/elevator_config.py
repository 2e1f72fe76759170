"""
Elevator configuration built from the JSON settings.

Every value the subsystem needs is read from settings (see
elevator_io.utils.settings.DEFAULT_SETTINGS). Invalid values are fatal: the
subsystem refuses to start rather than run with wrong unit conversions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from elevator_io.errors import ConfigurationError
from elevator_io.hardware.motor_controller import IdleMode, RotationalDirection
from elevator_io.logic.mechanics import ElevatorMechanics, MeasureLimits
from elevator_io.utils.settings import DEFAULT_SETTINGS, merge_settings
from elevator_io.utils.validation import ValidationResult, Validator

logger = logging.getLogger(__name__)


class RobotMode(Enum):
    REAL = "real"       # physical motor controllers
    SIM = "sim"         # physics simulation
    REPLAY = "replay"   # recorded telemetry frames


@dataclass
class ControlGains:
    """Closed-loop (PID) and feedforward (SVAG) gains, motor-rotation units."""
    p: float = 0.0
    i: float = 0.0
    d: float = 0.0
    s: float = 0.0
    v: float = 0.0
    a: float = 0.0
    g: float = 0.0


@dataclass
class LinearMotionTargets:
    """Carriage cruise velocity and the times to reach it (acceleration) and to ramp the acceleration (jerk)."""
    cruise_velocity_mps: float = 0.0
    acceleration_time_s: float = 0.0
    jerk_time_s: float = 0.0


@dataclass
class SimulationParameters:
    carriage_mass_kg: float = 5.0
    min_height_m: float = 0.0
    max_height_m: float = 1.35
    starting_height_m: float = 0.0
    simulate_gravity: bool = True


@dataclass
class ElevatorConfig:
    """
    Complete elevator configuration.

    Identification:
    - can_bus, lead_motor_id, follower_motor_id

    Mechanical:
    - mechanics: sprocket radius, gear reduction, voltage clamp

    Control:
    - limits: allowed displacement setpoints
    - gains, motion_targets

    Motors:
    - neutral_mode (brake by default), inverted, follower_opposes_lead,
      current limits, signal_timeout_s

    Runtime:
    - robot_mode, loop_period_s, simulation
    """
    mechanics: ElevatorMechanics
    limits: MeasureLimits
    can_bus: str = "canBus"
    lead_motor_id: int = 1
    follower_motor_id: int = 2
    gains: ControlGains = field(default_factory=ControlGains)
    motion_targets: LinearMotionTargets = field(default_factory=LinearMotionTargets)
    neutral_mode: IdleMode = IdleMode.BRAKE
    inverted: RotationalDirection = RotationalDirection.COUNTERCLOCKWISE_POSITIVE
    follower_opposes_lead: bool = False
    supply_current_limit_a: float = 40.0
    stator_current_limit_enabled: bool = False
    stator_current_limit_a: float = 120.0
    signal_timeout_s: float = 0.02
    loop_period_s: float = 0.02
    robot_mode: RobotMode = RobotMode.SIM
    simulation: SimulationParameters = field(default_factory=SimulationParameters)

    def __post_init__(self):
        result = ValidationResult()

        if self.lead_motor_id < 0 or self.follower_motor_id < 0:
            result.add_error("motor ids", "motor ids must be >= 0", "INVALID_ID")
        if self.lead_motor_id == self.follower_motor_id:
            result.add_error(
                "motor ids",
                f"lead and follower motors share id {self.lead_motor_id}",
                "DUPLICATE_ID"
            )
        result.merge(Validator.validate_positive(self.loop_period_s, "loop_period_s"))
        result.merge(Validator.validate_positive(self.signal_timeout_s, "signal_timeout_s"))
        result.merge(Validator.validate_positive(self.supply_current_limit_a, "supply_current_limit_a"))
        result.merge(Validator.validate_positive(self.stator_current_limit_a, "stator_current_limit_a"))
        result.merge(Validator.validate_non_negative(self.motion_targets.cruise_velocity_mps, "cruise_velocity_mps"))
        result.merge(Validator.validate_non_negative(self.motion_targets.acceleration_time_s, "acceleration_time_s"))
        result.merge(Validator.validate_non_negative(self.motion_targets.jerk_time_s, "jerk_time_s"))

        sim = self.simulation
        result.merge(Validator.validate_positive(sim.carriage_mass_kg, "carriage_mass_kg"))
        result.merge(Validator.validate_range(sim.min_height_m, sim.max_height_m, "simulation height"))
        if not sim.min_height_m <= sim.starting_height_m <= sim.max_height_m:
            result.add_error(
                "starting_height_m",
                f"starting_height_m ({sim.starting_height_m}) outside "
                f"[{sim.min_height_m}, {sim.max_height_m}]",
                "OUT_OF_RANGE"
            )

        if self.signal_timeout_s > self.loop_period_s:
            result.add_warning(
                "signal_timeout_s",
                f"signal timeout ({self.signal_timeout_s}s) exceeds the loop period ({self.loop_period_s}s)",
                "SLOW_READS"
            )

        for warning in result.warnings:
            logger.warning(warning.message)
        if not result.is_valid:
            for message in result.get_error_messages():
                logger.error(f"Invalid elevator configuration: {message}")
            raise ConfigurationError(result.get_error_messages())

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "ElevatorConfig":
        """
        Load configuration from a settings dict.

        Args:
            settings: Settings dictionary from load_settings(); missing keys
                take the defaults.

        Returns:
            ElevatorConfig instance

        Raises:
            ConfigurationError: if any value is invalid
        """
        settings = merge_settings(DEFAULT_SETTINGS, settings)
        robot = settings["robot"]
        elevator = settings["elevator"]
        ident = elevator["identification"]
        mech = elevator["mechanical"]
        control = elevator["control"]
        motors = elevator["motors"]
        sim = elevator["simulation"]

        result = ValidationResult()
        result.merge(Validator.validate_choice(robot["mode"], [m.value for m in RobotMode], "robot.mode"))
        result.merge(Validator.validate_choice(motors["neutral_mode"], [m.value for m in IdleMode], "neutral_mode"))
        result.merge(Validator.validate_choice(
            motors["inverted"], [d.value for d in RotationalDirection], "inverted"
        ))
        result.merge(Validator.validate_positive(mech["sprocket_radius_m"], "sprocket_radius_m"))
        result.merge(Validator.validate_positive(mech["gear_reduction"], "gear_reduction"))
        result.merge(Validator.validate_range(
            control["min_displacement_m"], control["max_displacement_m"], "displacement limits"
        ))
        if not result.is_valid:
            for message in result.get_error_messages():
                logger.error(f"Invalid elevator settings: {message}")
            raise ConfigurationError(result.get_error_messages())

        gains = control["gains"]
        targets = control["motion_targets"]
        return cls(
            mechanics=ElevatorMechanics(
                sprocket_radius_m=float(mech["sprocket_radius_m"]),
                gear_reduction=float(mech["gear_reduction"]),
            ),
            limits=MeasureLimits(
                float(control["min_displacement_m"]),
                float(control["max_displacement_m"]),
            ),
            can_bus=str(ident["can_bus"]),
            lead_motor_id=int(ident["lead_motor_id"]),
            follower_motor_id=int(ident["follower_motor_id"]),
            gains=ControlGains(**{k: float(gains.get(k, 0.0)) for k in "pidsvag"}),
            motion_targets=LinearMotionTargets(
                cruise_velocity_mps=float(targets["cruise_velocity_mps"]),
                acceleration_time_s=float(targets["acceleration_time_s"]),
                jerk_time_s=float(targets["jerk_time_s"]),
            ),
            neutral_mode=IdleMode(motors["neutral_mode"]),
            inverted=RotationalDirection(motors["inverted"]),
            follower_opposes_lead=bool(motors["follower_opposes_lead"]),
            supply_current_limit_a=float(motors["supply_current_limit_a"]),
            stator_current_limit_enabled=bool(motors["stator_current_limit_enabled"]),
            stator_current_limit_a=float(motors["stator_current_limit_a"]),
            signal_timeout_s=float(motors["signal_timeout_s"]),
            loop_period_s=float(robot["loop_period_s"]),
            robot_mode=RobotMode(robot["mode"]),
            simulation=SimulationParameters(
                carriage_mass_kg=float(sim["carriage_mass_kg"]),
                min_height_m=float(sim["min_height_m"]),
                max_height_m=float(sim["max_height_m"]),
                starting_height_m=float(sim["starting_height_m"]),
                simulate_gravity=bool(sim["simulate_gravity"]),
            ),
        )

    def to_settings_dict(self) -> Dict[str, Any]:
        """Inverse of from_settings (the 'logging' section is not part of the config)."""
        return {
            "robot": {
                "mode": self.robot_mode.value,
                "loop_period_s": self.loop_period_s,
            },
            "elevator": {
                "identification": {
                    "can_bus": self.can_bus,
                    "lead_motor_id": self.lead_motor_id,
                    "follower_motor_id": self.follower_motor_id,
                },
                "mechanical": {
                    "sprocket_radius_m": self.mechanics.sprocket_radius_m,
                    "gear_reduction": self.mechanics.gear_reduction,
                },
                "control": {
                    "min_displacement_m": self.limits.minimum,
                    "max_displacement_m": self.limits.maximum,
                    "gains": {k: getattr(self.gains, k) for k in "pidsvag"},
                    "motion_targets": {
                        "cruise_velocity_mps": self.motion_targets.cruise_velocity_mps,
                        "acceleration_time_s": self.motion_targets.acceleration_time_s,
                        "jerk_time_s": self.motion_targets.jerk_time_s,
                    },
                },
                "motors": {
                    "neutral_mode": self.neutral_mode.value,
                    "inverted": self.inverted.value,
                    "follower_opposes_lead": self.follower_opposes_lead,
                    "supply_current_limit_a": self.supply_current_limit_a,
                    "stator_current_limit_enabled": self.stator_current_limit_enabled,
                    "stator_current_limit_a": self.stator_current_limit_a,
                    "signal_timeout_s": self.signal_timeout_s,
                },
                "simulation": {
                    "carriage_mass_kg": self.simulation.carriage_mass_kg,
                    "min_height_m": self.simulation.min_height_m,
                    "max_height_m": self.simulation.max_height_m,
                    "starting_height_m": self.simulation.starting_height_m,
                    "simulate_gravity": self.simulation.simulate_gravity,
                },
            },
        }
