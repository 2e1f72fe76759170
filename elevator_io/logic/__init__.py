"""Unit conversion, configuration and loop timing for the elevator."""

from .mechanics import Sprocket, Reduction, MeasureLimits, ElevatorMechanics, clamp
from .elevator_config import (
    RobotMode,
    ControlGains,
    LinearMotionTargets,
    SimulationParameters,
    ElevatorConfig,
)
from .periodic_runner import PeriodicRunner

__all__ = [
    "Sprocket",
    "Reduction",
    "MeasureLimits",
    "ElevatorMechanics",
    "clamp",
    "RobotMode",
    "ControlGains",
    "LinearMotionTargets",
    "SimulationParameters",
    "ElevatorConfig",
    "PeriodicRunner",
]
