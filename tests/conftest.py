"""
Pytest configuration and shared fixtures.

Provides:
- SIM and REAL elevator configurations on the 0.025 m / 12:1 test mechanism
- Fake lead/follower motor controllers
- Logging cleanup for tests that install file handlers
"""

import logging

import pytest

from elevator_io.logic.elevator_config import ControlGains, ElevatorConfig, RobotMode, SimulationParameters
from elevator_io.logic.mechanics import ElevatorMechanics, MeasureLimits
from tests.mocks.fake_motor_controller import FakeMotorController


@pytest.fixture
def mechanics():
    """Sprocket radius 0.025 m, 12:1 reduction."""
    return ElevatorMechanics(sprocket_radius_m=0.025, gear_reduction=12.0)


@pytest.fixture
def sim_config(mechanics):
    return ElevatorConfig(
        mechanics=mechanics,
        limits=MeasureLimits(0.0127, 1.3208),
        gains=ControlGains(p=2.0),
        robot_mode=RobotMode.SIM,
        simulation=SimulationParameters(
            carriage_mass_kg=5.0,
            min_height_m=0.0,
            max_height_m=1.35,
            starting_height_m=0.0,
            simulate_gravity=True,
        ),
    )


@pytest.fixture
def real_config(mechanics):
    return ElevatorConfig(
        mechanics=mechanics,
        limits=MeasureLimits(0.0127, 1.3208),
        gains=ControlGains(p=2.0, g=0.1),
        robot_mode=RobotMode.REAL,
        lead_motor_id=11,
        follower_motor_id=12,
    )


@pytest.fixture
def lead_motor():
    return FakeMotorController("lead")


@pytest.fixture
def follower_motor():
    return FakeMotorController("follower")


@pytest.fixture
def clean_logging():
    """Remove and close whatever setup_logging() installed on the root logger."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
