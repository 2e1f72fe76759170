"""
Boundary between the elevator I/O layer and concrete motor-controller drivers.

This package provides:
- MotorController: what a driver must offer to be used by HardwareElevatorIO
- MotorControllerConfig: output, current-limit, gain and motion-profile settings
- build_motor_config: derives the motor-side configuration from ElevatorConfig
"""

from .motor_controller import IdleMode, RotationalDirection, MotorSignals, MotorController
from .motor_config import MotorControllerConfig, build_motor_config

__all__ = [
    "IdleMode",
    "RotationalDirection",
    "MotorSignals",
    "MotorController",
    "MotorControllerConfig",
    "build_motor_config",
]
