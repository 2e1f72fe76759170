"""
Example: run the elevator in simulation at 50 Hz and move it to 0.30 m.

Shows how the pieces fit together: settings -> ElevatorConfig -> backend
factory -> Elevator subsystem -> periodic loop. Telemetry frames end up in
elevator.log under the log directory and can be replayed with load_frames().
"""

import time

from elevator_io import Elevator, ElevatorConfig, build_elevator_io, load_settings
from elevator_io.logic.periodic_runner import PeriodicRunner
from elevator_io.utils.logger import get_logger, setup_logging_from_settings

logger = get_logger(__name__)


def main():
    settings = load_settings()
    log_dir = setup_logging_from_settings(settings)

    settings["robot"]["mode"] = "sim"
    settings["elevator"]["mechanical"].update({"sprocket_radius_m": 0.025, "gear_reduction": 12.0})
    config = ElevatorConfig.from_settings(settings)

    elevator = Elevator(build_elevator_io(config), config)
    runner = PeriodicRunner(elevator.periodic, period_s=config.loop_period_s)

    runner.start()
    try:
        elevator.set_target_displacement(0.30)
        time.sleep(2.0)
        logger.info(
            f"Carriage at {elevator.displacement:.4f}m "
            f"({elevator.motor_position:.3f} rot, power {elevator.power:+.2f})"
        )
    finally:
        runner.stop()
        elevator.close()

    logger.info(f"Telemetry recorded in {log_dir / 'elevator.log'}")


if __name__ == "__main__":
    main()
