"""Persistent alerts raised from telemetry (e.g. a motor losing connection)."""

from __future__ import annotations

import logging
from enum import Enum


class AlertType(Enum):
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    INFO = logging.INFO


class Alert:
    """
    An alert that is either active or not.

    set() may be called every cycle; only the transitions are logged, so a
    disconnected motor produces one error line instead of fifty per second.
    """

    def __init__(self, text: str, alert_type: AlertType = AlertType.ERROR, logger_name: str = "elevator_io.alerts"):
        self.text = text
        self.alert_type = alert_type
        self._active = False
        self.logger = logging.getLogger(logger_name)

    @property
    def active(self) -> bool:
        return self._active

    def set(self, active: bool):
        active = bool(active)
        if active == self._active:
            return
        self._active = active
        if active:
            self.logger.log(self.alert_type.value, f"ALERT: {self.text}")
        else:
            self.logger.info(f"Alert cleared: {self.text}")

    def __repr__(self) -> str:
        return f"Alert({self.text!r}, {self.alert_type.name}, active={self._active})"
