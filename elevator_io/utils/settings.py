"""
Settings persistence for the elevator I/O layer.

Settings live in a single JSON file (default ~/.elevator_io/settings.json).
Whatever is stored there is merged over DEFAULT_SETTINGS, so a file only has
to carry the keys that differ from the defaults. The mechanical section must
be identical between the robot and any simulation run that replays its logs.

Values marked as placeholders come from the mechanism template and must be
measured on the real robot.
"""

import copy
import contextlib
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_DIR = Path.home() / '.elevator_io'
SETTINGS_FILE = SETTINGS_DIR / 'settings.json'
TMP_SUFFIX = '.tmp'

DEFAULT_SETTINGS: Dict[str, Any] = {
    'robot': {
        'mode': 'sim',              # real | sim | replay
        'loop_period_s': 0.02,      # 50 Hz control loop
    },
    'elevator': {
        'identification': {
            'can_bus': 'canBus',
            'lead_motor_id': 1,
            'follower_motor_id': 2,
        },
        'mechanical': {
            'sprocket_radius_m': 0.0508,    # placeholder (2 in)
            'gear_reduction': 1.0,          # placeholder, motor rotations per sprocket rotation
        },
        'control': {
            'min_displacement_m': 0.0127,   # placeholder (0.5 in)
            'max_displacement_m': 1.3208,   # placeholder (52 in)
            'gains': {
                'p': 2.0,
                'i': 0.0,
                'd': 0.0,
                's': 0.0,
                'v': 0.0,
                'a': 0.0,
                'g': 0.0,
            },
            'motion_targets': {
                'cruise_velocity_mps': 0.0,
                'acceleration_time_s': 0.0,
                'jerk_time_s': 0.0,
            },
        },
        'motors': {
            'neutral_mode': 'brake',
            'inverted': 'counterclockwise_positive',
            'follower_opposes_lead': False,
            'supply_current_limit_a': 40.0,
            'stator_current_limit_enabled': False,
            'stator_current_limit_a': 120.0,
            'signal_timeout_s': 0.02,
        },
        'simulation': {
            'carriage_mass_kg': 5.0,
            'min_height_m': 0.0,
            'max_height_m': 1.35,
            'starting_height_m': 0.0,
            'simulate_gravity': True,
        },
    },
    'logging': {
        'log_dir': '',
        'console_level': 'INFO',
        'file_level': 'DEBUG',
    },
}

_lock = threading.Lock()


def _resolve(path: Optional[Path]) -> Path:
    return Path(path) if path is not None else SETTINGS_FILE


def merge_settings(defaults: Dict[str, Any], current: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge of current over defaults. Neither argument is modified."""
    merged = copy.deepcopy(defaults)
    for key, value in current.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings merged over the defaults.

    A missing file yields the defaults. An unreadable or malformed file is
    logged and also yields the defaults; validation of the values themselves
    happens later, when ElevatorConfig is built.
    """
    settings_file = _resolve(path)
    if settings_file.exists():
        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings file does not contain a JSON object")
            return merge_settings(DEFAULT_SETTINGS, data)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading settings from {settings_file}: {e}")
            return copy.deepcopy(DEFAULT_SETTINGS)
    return copy.deepcopy(DEFAULT_SETTINGS)


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> bool:
    """
    Write settings (merged over the defaults) atomically.

    Returns:
        True if the file was replaced
    """
    settings_file = _resolve(path)
    settings = merge_settings(DEFAULT_SETTINGS, settings)
    tmp_path = settings_file.with_suffix(settings_file.suffix + TMP_SUFFIX)
    try:
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        with _lock:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2, ensure_ascii=False)
            os.replace(str(tmp_path), str(settings_file))
        return True
    except OSError as e:
        logger.error(f"Error saving settings to {settings_file}: {e}")
        with contextlib.suppress(OSError):
            if tmp_path.exists():
                tmp_path.unlink()
        return False


def get_setting(settings: Dict[str, Any], path: str, default: Any = None) -> Any:
    """Dotted lookup, e.g. get_setting(s, 'elevator.mechanical.gear_reduction')."""
    value: Any = settings
    try:
        for key in path.split('.'):
            value = value[key]
        return value
    except (KeyError, TypeError):
        return default
