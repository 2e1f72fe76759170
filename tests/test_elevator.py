"""
Tests for the Elevator subsystem.
"""

import logging
import math

import pytest

from elevator_io.errors import ConfigurationError
from elevator_io.hardware.motor_controller import IdleMode
from elevator_io.logic.mechanics import ElevatorMechanics
from elevator_io.machine.elevator import Elevator
from elevator_io.machine.replay_elevator import ReplayElevatorIO
from elevator_io.machine.simulation_elevator import SimulationElevatorIO
from elevator_io.machine.telemetry_logger import TelemetryLogger


@pytest.fixture
def elevator(sim_config):
    return Elevator(SimulationElevatorIO(sim_config), sim_config)


def test_mechanics_mismatch_rejected(sim_config):
    """Test an I/O built with other mechanics is refused."""
    io = ReplayElevatorIO(ElevatorMechanics(0.05, 12.0))

    with pytest.raises(ConfigurationError):
        Elevator(io, sim_config)


def test_target_clamped_to_limits(elevator, sim_config):
    elevator.set_target_displacement(5.0)
    assert elevator.io.target_displacement == sim_config.limits.maximum

    elevator.set_target_displacement(-1.0)
    assert elevator.io.target_displacement == sim_config.limits.minimum

    elevator.set_target_displacement(0.5)
    assert elevator.io.target_displacement == 0.5


def test_voltage_clamped(elevator):
    elevator.set_voltage(30.0)
    assert elevator.io.applied_voltage == 12.0

    elevator.periodic()
    assert elevator.power == 1.0


def test_reaches_target(elevator):
    elevator.set_target_displacement(0.30)
    for _ in range(100):
        elevator.periodic()

    assert elevator.displacement == pytest.approx(0.30, abs=0.005)
    assert elevator.motor_position == pytest.approx(22.918, abs=0.4)


def test_periodic_records_inputs(sim_config):
    sink = TelemetryLogger()
    elevator = Elevator(SimulationElevatorIO(sim_config), sim_config, telemetry_logger=sink)

    for _ in range(3):
        elevator.periodic()

    assert sink.cycle == 3


def test_disconnect_alerts(elevator, caplog):
    """Test alerts follow the connectivity flags and log once per change."""
    elevator.periodic()
    assert not elevator.lead_motor_disconnected_alert.active
    assert not elevator.follower_motor_disconnected_alert.active

    with caplog.at_level(logging.INFO, logger="elevator_io.alerts"):
        elevator.io.inject_read_failure(lead=True, follower=False)
        elevator.periodic()
        elevator.periodic()
        assert elevator.lead_motor_disconnected_alert.active
        assert not elevator.follower_motor_disconnected_alert.active

        elevator.io.clear_read_failures()
        elevator.periodic()
        assert not elevator.lead_motor_disconnected_alert.active

    raised = [r for r in caplog.records if r.message == "ALERT: Elevator's lead motor lost connection"]
    cleared = [r for r in caplog.records if r.message == "Alert cleared: Elevator's lead motor lost connection"]
    assert len(raised) == 1
    assert raised[0].levelno == logging.ERROR
    assert len(cleared) == 1


def test_sysid_running_conditions(elevator, sim_config):
    """Test routines may only run away from the limit the carriage sits on."""
    elevator.periodic()
    assert elevator.sysid_forward_allowed
    assert not elevator.sysid_backward_allowed

    elevator.set_target_displacement(0.6)
    for _ in range(100):
        elevator.periodic()
    assert elevator.sysid_forward_allowed
    assert elevator.sysid_backward_allowed

    elevator.set_voltage(12.0)
    for _ in range(200):
        elevator.periodic()
    assert not elevator.sysid_forward_allowed
    assert elevator.sysid_backward_allowed


def test_coast_and_brake(elevator):
    assert elevator.idle_mode is IdleMode.BRAKE
    elevator.coast()
    assert elevator.idle_mode is IdleMode.COAST
    elevator.brake()
    assert elevator.idle_mode is IdleMode.BRAKE


def test_stop(elevator):
    elevator.set_voltage(5.0)
    elevator.stop()
    elevator.periodic()

    assert elevator.power == 0.0


def test_nan_voltage_applies_zero(elevator):
    """Test NaN from an upstream calculation reaches the motors as 0 V, like the I/O layer."""
    elevator.io.set_voltage(math.nan)
    direct = elevator.io.applied_voltage

    elevator.set_voltage(8.0)
    elevator.set_voltage(math.nan)

    assert direct == 0.0
    assert elevator.io.applied_voltage == 0.0
    elevator.periodic()
    assert elevator.power == 0.0


def test_nan_target_keeps_previous(elevator, caplog):
    """Test a NaN target is dropped instead of becoming the minimum limit."""
    elevator.set_target_displacement(0.5)

    with caplog.at_level(logging.WARNING, logger="elevator_io.elevator"):
        elevator.set_target_displacement(math.nan)

    assert elevator.io.target_displacement == 0.5
    assert any("NaN target" in r.message for r in caplog.records)


def test_infinite_target_clamped(elevator, sim_config):
    elevator.set_target_displacement(math.inf)
    assert elevator.io.target_displacement == sim_config.limits.maximum


def test_velocity_in_meters_per_second(elevator, sim_config):
    elevator.set_voltage(4.0)
    for _ in range(5):
        elevator.periodic()

    expected = elevator.inputs.lead_motor_velocity / sim_config.mechanics.displacement_to_rotations(1.0)
    assert elevator.velocity == pytest.approx(expected)
    assert elevator.velocity > 0.0
