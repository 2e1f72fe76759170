"""
ElevatorIO that plays back recorded telemetry frames.

Used to re-run the control logic against a logged session: each refresh()
loads the next frame, commands are kept for inspection but drive nothing.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, Iterable, Mapping, Tuple

from elevator_io.hardware.motor_controller import IdleMode
from elevator_io.logic.mechanics import ElevatorMechanics
from elevator_io.machine.interfaces import ElevatorIO
from elevator_io.machine.telemetry import ElevatorTelemetry

# Most recent commands kept for inspection (10 s at 50 Hz)
COMMAND_HISTORY = 500


class ReplayElevatorIO(ElevatorIO):

    def __init__(
        self,
        mechanics: ElevatorMechanics,
        frames: Iterable[Mapping[str, Any]] = (),
        command_history: int = COMMAND_HISTORY,
    ):
        super().__init__(mechanics)
        self._frames = iter(frames)
        self._exhausted = False
        self.frames_played = 0
        self.commands: Deque[Tuple[str, Any]] = deque(maxlen=command_history)

        self.logger = logging.getLogger("elevator_io.replay_elevator")

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def _update_telemetry(self, telemetry: ElevatorTelemetry) -> None:
        if self._exhausted:
            return
        try:
            frame = next(self._frames)
        except StopIteration:
            self._exhausted = True
            self.logger.info(f"Replay finished after {self.frames_played} frames")
            return
        telemetry.update_from_dict(frame)
        self.frames_played += 1

    def _command_voltage(self, volts: float) -> None:
        self.commands.append(("voltage", volts))

    def _command_position(self, rotations: float) -> None:
        self.commands.append(("position", rotations))

    def _command_idle_mode(self, mode: IdleMode) -> None:
        self.commands.append(("idle_mode", mode))
