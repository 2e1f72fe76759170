"""
Exception taxonomy for the elevator I/O layer.

Only ConfigurationError is meant to stop the program: it is raised while
building the subsystem. Read and command failures coming from a motor
controller are caught by the backends and turned into telemetry data.
"""


class ElevatorIOError(Exception):
    """Base class for every error raised by elevator_io."""


class ConfigurationError(ElevatorIOError, ValueError):
    """Invalid mechanical or control configuration detected at construction."""

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class MotorReadError(ElevatorIOError):
    """A motor controller did not deliver its signals within the read timeout."""


class MotorCommandError(ElevatorIOError):
    """A motor controller rejected a control request."""
