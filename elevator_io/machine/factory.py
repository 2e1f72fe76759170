from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from elevator_io.hardware.motor_controller import MotorController
from elevator_io.logic.elevator_config import ElevatorConfig, RobotMode
from elevator_io.machine.interfaces import ElevatorIO

logger = logging.getLogger(__name__)


def build_elevator_io(
    config: ElevatorConfig,
    lead: Optional[MotorController] = None,
    follower: Optional[MotorController] = None,
    frames: Optional[Iterable[Mapping[str, Any]]] = None,
) -> ElevatorIO:
    """
    Pick the backend for config.robot_mode.

    REAL needs both controllers; without them the simulation is used instead
    so the rest of the program can still run on a desk.
    """
    if config.robot_mode is RobotMode.REPLAY:
        from elevator_io.machine.replay_elevator import ReplayElevatorIO
        return ReplayElevatorIO(config.mechanics, frames if frames is not None else ())

    if config.robot_mode is RobotMode.REAL:
        if lead is not None and follower is not None:
            from elevator_io.machine.hardware_elevator import HardwareElevatorIO
            return HardwareElevatorIO(lead, follower, config)
        # Fallback to simulation
        logger.warning("REAL mode requested without motor controllers - using simulation")

    from elevator_io.machine.simulation_elevator import SimulationElevatorIO
    return SimulationElevatorIO(config)
