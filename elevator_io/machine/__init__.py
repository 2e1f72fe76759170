"""
Elevator I/O backends and the subsystem that drives them.

- ElevatorIO: capability interface shared by every backend
- HardwareElevatorIO / SimulationElevatorIO / ReplayElevatorIO
- build_elevator_io: backend selection from the robot mode
- Elevator: control-loop facing subsystem (alerts, limits, telemetry)
"""

from .telemetry import ElevatorTelemetry
from .interfaces import ElevatorIO
from .hardware_elevator import HardwareElevatorIO
from .simulation_elevator import SimulationElevatorIO
from .replay_elevator import ReplayElevatorIO
from .factory import build_elevator_io
from .alerts import Alert, AlertType
from .telemetry_logger import TelemetryLogger, load_frames
from .elevator import Elevator

__all__ = [
    "ElevatorTelemetry",
    "ElevatorIO",
    "HardwareElevatorIO",
    "SimulationElevatorIO",
    "ReplayElevatorIO",
    "build_elevator_io",
    "Alert",
    "AlertType",
    "TelemetryLogger",
    "load_frames",
    "Elevator",
]
