"""
Telemetry sink writing one structured log record per control cycle.

Frames travel as the 'extra_data' of a DEBUG record, so with the handlers of
elevator_io.utils.logger they end up as JSON lines in elevator.log. The same
file can be read back with load_frames() and fed to ReplayElevatorIO.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from elevator_io.machine.telemetry import ElevatorTelemetry

logger = logging.getLogger(__name__)


class TelemetryLogger:

    def __init__(self, logger_name: str = "elevator_io.telemetry"):
        self.logger = logging.getLogger(logger_name)
        self.cycle = 0

    def process_inputs(self, table: str, telemetry: ElevatorTelemetry):
        """Record this cycle's snapshot under table (e.g. "Elevator")."""
        self.cycle += 1
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        self.logger.debug(
            f"{table} inputs",
            extra={"extra_data": {"table": table, "cycle": self.cycle, "telemetry": telemetry.to_dict()}},
        )


def load_frames(path: Path, table: str = "Elevator") -> List[Dict[str, Any]]:
    """
    Read the telemetry frames of one table back from a structured log file.

    Lines that are not JSON, or records without telemetry, are skipped.

    Args:
        path: JSON-lines log written by StructuredFormatter
        table: table name used when the frames were recorded

    Returns:
        Frames in file order, each in the to_dict() format
    """
    frames: List[Dict[str, Any]] = []
    skipped = 0
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                skipped += 1
                continue
            extra = record.get("extra") if isinstance(record, dict) else None
            if isinstance(extra, dict) and extra.get("table") == table and "telemetry" in extra:
                frames.append(extra["telemetry"])
    if skipped:
        logger.warning(f"Skipped {skipped} malformed lines in {path}")
    logger.info(f"Loaded {len(frames)} '{table}' frames from {path}")
    return frames
