"""
Motor controller configuration.

Builds the configuration applied to both elevator motors. Missing pieces fall
back to the project defaults below, not the controller factory defaults:
- neutral mode: brake
- inverted: counterclockwise positive
- supply current limit: 40 A enabled, stator current limit: 120 A disabled
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from elevator_io.hardware.motor_controller import IdleMode, RotationalDirection

if TYPE_CHECKING:
    from elevator_io.logic.elevator_config import ControlGains, ElevatorConfig, LinearMotionTargets
    from elevator_io.logic.mechanics import ElevatorMechanics


@dataclass
class MotionProfileConfig:
    """Motion profile in motor units. A value of 0 leaves that term unlimited."""
    cruise_velocity: float = 0.0    # rotations/s
    acceleration: float = 0.0       # rotations/s^2
    jerk: float = 0.0               # rotations/s^3


@dataclass
class SlotGains:
    kP: float = 0.0
    kI: float = 0.0
    kD: float = 0.0
    kS: float = 0.0
    kV: float = 0.0
    kA: float = 0.0
    kG: float = 0.0


@dataclass
class MotorControllerConfig:
    neutral_mode: IdleMode = IdleMode.BRAKE
    inverted: RotationalDirection = RotationalDirection.COUNTERCLOCKWISE_POSITIVE
    supply_current_limit_enable: bool = True
    supply_current_limit_a: float = 40.0
    stator_current_limit_enable: bool = False
    stator_current_limit_a: float = 120.0
    slot0: SlotGains = field(default_factory=SlotGains)
    motion_profile: MotionProfileConfig = field(default_factory=MotionProfileConfig)


def configure_slot0(gains: "ControlGains") -> SlotGains:
    """
    Takes the desired control gains and returns the slot-0 gains.

    Args:
        gains: PIDF and feedforward (SVAG) values

    Returns:
        SlotGains with the same values
    """
    return SlotGains(
        kP=gains.p,
        kI=gains.i,
        kD=gains.d,
        kS=gains.s,
        kV=gains.v,
        kA=gains.a,
        kG=gains.g,
    )


def configure_linear_motion_profile(
    targets: "LinearMotionTargets",
    mechanics: "ElevatorMechanics"
) -> MotionProfileConfig:
    """
    Takes the desired cruise velocity of the carriage, converts it to motor
    rotations through the sprocket and the reduction, then derives the
    acceleration and jerk from the ramp times.

    Args:
        targets: carriage cruise velocity and ramp times
        mechanics: sprocket and reduction of the elevator

    Returns:
        MotionProfileConfig in motor units
    """
    cruise = mechanics.linear_to_angular_velocity(targets.cruise_velocity_mps)
    acceleration = cruise / targets.acceleration_time_s if targets.acceleration_time_s > 0 else 0.0
    jerk = acceleration / targets.jerk_time_s if targets.jerk_time_s > 0 else 0.0
    return MotionProfileConfig(cruise_velocity=cruise, acceleration=acceleration, jerk=jerk)


def build_motor_config(config: "ElevatorConfig") -> MotorControllerConfig:
    """Configuration applied to both the lead and the follower controller."""
    return MotorControllerConfig(
        neutral_mode=config.neutral_mode,
        inverted=config.inverted,
        supply_current_limit_enable=True,
        supply_current_limit_a=config.supply_current_limit_a,
        stator_current_limit_enable=config.stator_current_limit_enabled,
        stator_current_limit_a=config.stator_current_limit_a,
        slot0=configure_slot0(config.gains),
        motion_profile=configure_linear_motion_profile(config.motion_targets, config.mechanics),
    )
