"""
Tests for ElevatorConfig and the settings file.
"""

import copy
import dataclasses
import json
import logging

import pytest

from elevator_io.errors import ConfigurationError
from elevator_io.hardware.motor_controller import IdleMode, RotationalDirection
from elevator_io.logic.elevator_config import ElevatorConfig, LinearMotionTargets, RobotMode
from elevator_io.logic.mechanics import ElevatorMechanics
from elevator_io.utils.settings import (
    DEFAULT_SETTINGS,
    get_setting,
    load_settings,
    merge_settings,
    save_settings,
)


def test_defaults():
    """Test the default settings give the documented configuration."""
    config = ElevatorConfig.from_settings({})

    assert config.robot_mode is RobotMode.SIM
    assert config.mechanics == ElevatorMechanics(0.0508, 1.0)
    assert config.limits.minimum == 0.0127
    assert config.limits.maximum == 1.3208
    assert config.neutral_mode is IdleMode.BRAKE
    assert config.inverted is RotationalDirection.COUNTERCLOCKWISE_POSITIVE
    assert config.supply_current_limit_a == 40.0
    assert not config.stator_current_limit_enabled
    assert config.stator_current_limit_a == 120.0
    assert config.loop_period_s == 0.02
    assert config.gains.p == 2.0


def test_partial_settings_override_defaults():
    config = ElevatorConfig.from_settings({
        "robot": {"mode": "real"},
        "elevator": {"mechanical": {"gear_reduction": 12.0}},
    })

    assert config.robot_mode is RobotMode.REAL
    assert config.mechanics.gear_reduction == 12.0
    assert config.mechanics.sprocket_radius_m == 0.0508


def test_settings_round_trip(sim_config):
    """Test to_settings_dict feeds back into an identical configuration."""
    rebuilt = ElevatorConfig.from_settings(sim_config.to_settings_dict())

    assert rebuilt == sim_config


@pytest.mark.parametrize("override", [
    {"robot": {"mode": "warp"}},
    {"elevator": {"motors": {"neutral_mode": "hold"}}},
    {"elevator": {"motors": {"inverted": "sideways"}}},
    {"elevator": {"mechanical": {"sprocket_radius_m": 0}}},
    {"elevator": {"mechanical": {"gear_reduction": -2}}},
    {"elevator": {"control": {"min_displacement_m": 1.5}}},
])
def test_invalid_settings_rejected(override):
    with pytest.raises(ConfigurationError):
        ElevatorConfig.from_settings(override)


def test_invalid_settings_are_logged(caplog):
    with caplog.at_level(logging.ERROR, logger="elevator_io.logic.elevator_config"):
        with pytest.raises(ConfigurationError):
            ElevatorConfig.from_settings({"robot": {"mode": "warp"}})

    assert any("robot.mode" in r.message for r in caplog.records)


def test_duplicate_motor_ids_rejected(sim_config):
    with pytest.raises(ConfigurationError) as exc_info:
        dataclasses.replace(sim_config, follower_motor_id=sim_config.lead_motor_id)

    assert "share id" in str(exc_info.value)


def test_negative_motion_targets_rejected(sim_config):
    with pytest.raises(ConfigurationError):
        dataclasses.replace(sim_config, motion_targets=LinearMotionTargets(cruise_velocity_mps=-1.0))


def test_starting_height_outside_travel_rejected(sim_config):
    simulation = dataclasses.replace(sim_config.simulation, starting_height_m=2.0)
    with pytest.raises(ConfigurationError):
        dataclasses.replace(sim_config, simulation=simulation)


def test_slow_signal_timeout_only_warns(sim_config, caplog):
    with caplog.at_level(logging.WARNING, logger="elevator_io.logic.elevator_config"):
        config = dataclasses.replace(sim_config, signal_timeout_s=0.05)

    assert config.signal_timeout_s == 0.05
    assert any("exceeds the loop period" in r.message for r in caplog.records)


def test_merge_settings_does_not_modify_inputs():
    defaults = copy.deepcopy(DEFAULT_SETTINGS)
    current = {"elevator": {"motors": {"neutral_mode": "coast"}}, "extra": {"a": 1}}

    merged = merge_settings(defaults, current)

    assert merged["elevator"]["motors"]["neutral_mode"] == "coast"
    assert merged["elevator"]["motors"]["inverted"] == "counterclockwise_positive"
    assert merged["extra"] == {"a": 1}
    assert defaults == DEFAULT_SETTINGS


def test_save_and_load_settings(tmp_path, sim_config):
    """Test settings survive a save/load cycle and no temp file is left."""
    path = tmp_path / "settings.json"

    assert save_settings(sim_config.to_settings_dict(), path)
    assert not path.with_suffix(".json.tmp").exists()

    loaded = load_settings(path)
    assert ElevatorConfig.from_settings(loaded) == sim_config
    assert loaded["logging"] == DEFAULT_SETTINGS["logging"]


def test_load_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "missing.json") == DEFAULT_SETTINGS


def test_load_malformed_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{ not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="elevator_io.utils.settings"):
        settings = load_settings(path)

    assert settings == DEFAULT_SETTINGS
    assert any("Error loading settings" in r.message for r in caplog.records)


def test_load_non_object_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

    assert load_settings(path) == DEFAULT_SETTINGS


def test_get_setting():
    assert get_setting(DEFAULT_SETTINGS, "elevator.identification.lead_motor_id") == 1
    assert get_setting(DEFAULT_SETTINGS, "elevator.nothing.here", "fallback") == "fallback"
