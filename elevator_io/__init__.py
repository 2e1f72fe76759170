"""
elevator_io - hardware abstraction layer for a lead/follower dual-motor elevator.

Typical use:

    from elevator_io import ElevatorConfig, Elevator, build_elevator_io, load_settings

    config = ElevatorConfig.from_settings(load_settings())
    elevator = Elevator(build_elevator_io(config), config)
    elevator.periodic()
    elevator.set_target_displacement(0.30)
"""

__version__ = "1.0.0"

from elevator_io.errors import ConfigurationError, ElevatorIOError, MotorCommandError, MotorReadError
from elevator_io.hardware import IdleMode, MotorController, MotorSignals
from elevator_io.logic import ElevatorConfig, ElevatorMechanics, RobotMode
from elevator_io.machine import (
    Elevator,
    ElevatorIO,
    ElevatorTelemetry,
    HardwareElevatorIO,
    ReplayElevatorIO,
    SimulationElevatorIO,
    build_elevator_io,
    load_frames,
)
from elevator_io.utils.settings import load_settings, save_settings

__all__ = [
    "ConfigurationError",
    "ElevatorIOError",
    "MotorCommandError",
    "MotorReadError",
    "IdleMode",
    "MotorController",
    "MotorSignals",
    "ElevatorConfig",
    "ElevatorMechanics",
    "RobotMode",
    "Elevator",
    "ElevatorIO",
    "ElevatorTelemetry",
    "HardwareElevatorIO",
    "ReplayElevatorIO",
    "SimulationElevatorIO",
    "build_elevator_io",
    "load_frames",
    "load_settings",
    "save_settings",
]
