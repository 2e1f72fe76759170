"""
Logging setup for the elevator I/O layer.

The console gets short human-readable lines. The files get one JSON object
per record, which is what the telemetry sink relies on: every control cycle
is a DEBUG record whose 'extra_data' holds the snapshot, so elevator.log
doubles as the replay log (see machine.telemetry_logger.load_frames).
"""

import json
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from elevator_io.errors import ConfigurationError
from elevator_io.utils.settings import get_setting
from elevator_io.utils.validation import Validator

DEFAULT_LOG_DIR = Path.home() / '.elevator_io' / 'logs'
LEVEL_NAMES = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# file name -> (max bytes, backups)
TELEMETRY_LOG = ('elevator.log', 10 * 1024 * 1024, 5)
ERROR_LOG = ('errors.log', 5 * 1024 * 1024, 3)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; payloads passed as extra={'extra_data': ...} go under 'extra'."""

    def format(self, record):
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'thread': record.threadName,
        }
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            entry['exception'] = {
                'type': exc_type.__name__,
                'message': str(exc_value),
                'traceback': self.formatException(record.exc_info),
            }
        extra = getattr(record, 'extra_data', None)
        if extra is not None:
            entry['extra'] = extra
        return json.dumps(entry, ensure_ascii=False)


def _rotating_handler(log_dir: Path, spec, level: int) -> logging.Handler:
    name, max_bytes, backups = spec
    handler = logging.handlers.RotatingFileHandler(
        log_dir / name, maxBytes=max_bytes, backupCount=backups, encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(StructuredFormatter())
    return handler


def _level(value: Union[int, str], field_name: str) -> int:
    if isinstance(value, int):
        return value
    name = str(value).upper()
    result = Validator.validate_choice(name, LEVEL_NAMES, field_name)
    if not result.is_valid:
        raise ConfigurationError(result.get_error_messages())
    return getattr(logging, name)


def setup_logging(
    log_dir: Optional[Path] = None,
    console_level: Union[int, str] = logging.INFO,
    file_level: Union[int, str] = logging.DEBUG
) -> Path:
    """
    Replace the root handlers with console + rotating JSON files.

    Args:
        log_dir: Directory for log files (default: ~/.elevator_io/logs)
        console_level: Level (or level name) for console output
        file_level: Level for elevator.log. Telemetry frames are DEBUG
            records, so anything above DEBUG stops recording them.

    Files:
        - elevator.log: everything at file_level and above (10MB x5)
        - errors.log: ERROR and above (5MB x3)

    Returns:
        The directory the log files are written to.

    Raises:
        ConfigurationError: on an unknown level name
    """
    console_level = _level(console_level, 'console_level')
    file_level = _level(file_level, 'file_level')
    log_dir = Path(log_dir) if log_dir else DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt='%H:%M:%S'
    ))
    root.addHandler(console)
    root.addHandler(_rotating_handler(log_dir, TELEMETRY_LOG, file_level))
    root.addHandler(_rotating_handler(log_dir, ERROR_LOG, logging.ERROR))

    logging.getLogger("elevator_io.logging").info(f"Logging system initialized - log_dir={log_dir}")
    return log_dir


def setup_logging_from_settings(settings: Dict[str, Any]) -> Path:
    """setup_logging() driven by the 'logging' section of the settings file."""
    return setup_logging(
        log_dir=get_setting(settings, 'logging.log_dir') or None,
        console_level=get_setting(settings, 'logging.console_level', 'INFO'),
        file_level=get_setting(settings, 'logging.file_level', 'DEBUG'),
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for name (usually __name__)."""
    return logging.getLogger(name)
