"""
Per-cycle telemetry snapshot of the elevator.

One ElevatorTelemetry is created when the subsystem starts and overwritten in
place by ElevatorIO.refresh() every control cycle. History is the business of
the telemetry sink, not of this record.

The rotational fields (lead_motor_position, lead_motor_target_position) are
views computed from the linear fields and the mechanical constants, so they
can never disagree with them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from elevator_io.logic.mechanics import ElevatorMechanics


@dataclass
class ElevatorTelemetry:
    mechanics: ElevatorMechanics = field(repr=False, compare=False)

    # Elevator
    elevator_displacement: float = 0.0              # m, measured
    elevator_target_displacement: float = 0.0       # m, last commanded setpoint (echo)

    # Lead motor
    is_lead_motor_connected: bool = False
    lead_motor_velocity: float = 0.0                # rot/s
    lead_motor_output_voltage: float = 0.0          # V
    lead_motor_supply_current: float = 0.0          # A

    # Follower motor. Rigidly coupled to the lead, so no motion fields.
    is_follower_motor_connected: bool = False
    follower_motor_output_voltage: float = 0.0      # V
    follower_motor_supply_current: float = 0.0      # A

    @property
    def lead_motor_position(self) -> float:
        """Rotations, derived from elevator_displacement."""
        return self.mechanics.displacement_to_rotations(self.elevator_displacement)

    @property
    def lead_motor_target_position(self) -> float:
        """Rotations, derived from elevator_target_displacement."""
        return self.mechanics.displacement_to_rotations(self.elevator_target_displacement)

    def reset(self):
        """Back to the start-up state: everything zero, both motors disconnected."""
        self.elevator_displacement = 0.0
        self.elevator_target_displacement = 0.0
        self.is_lead_motor_connected = False
        self.lead_motor_velocity = 0.0
        self.lead_motor_output_voltage = 0.0
        self.lead_motor_supply_current = 0.0
        self.is_follower_motor_connected = False
        self.follower_motor_output_voltage = 0.0
        self.follower_motor_supply_current = 0.0

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """
        Serialize every field with its unit.

        Keys are the stable log names shared by all backends; changing one
        breaks replay of previously recorded logs.
        """
        return {
            "elevatorDisplacement": {"value": self.elevator_displacement, "unit": "m"},
            "elevatorTargetDisplacement": {"value": self.elevator_target_displacement, "unit": "m"},
            "isLeadMotorConnected": {"value": self.is_lead_motor_connected, "unit": "bool"},
            "leadMotorPosition": {"value": self.lead_motor_position, "unit": "rot"},
            "leadMotorTargetPosition": {"value": self.lead_motor_target_position, "unit": "rot"},
            "leadMotorVelocity": {"value": self.lead_motor_velocity, "unit": "rot/s"},
            "leadMotorOutputVoltage": {"value": self.lead_motor_output_voltage, "unit": "V"},
            "leadMotorSupplyCurrent": {"value": self.lead_motor_supply_current, "unit": "A"},
            "isFollowerMotorConnected": {"value": self.is_follower_motor_connected, "unit": "bool"},
            "followerMotorOutputVoltage": {"value": self.follower_motor_output_voltage, "unit": "V"},
            "followerMotorSupplyCurrent": {"value": self.follower_motor_supply_current, "unit": "A"},
        }

    def update_from_dict(self, frame: Mapping[str, Any]):
        """
        Load a frame produced by to_dict() into this snapshot.

        Accepts either {"name": {"value": v, "unit": u}} or flat {"name": v}.
        Rotational entries are ignored: they are recomputed from the
        displacement with this snapshot's mechanics. Missing keys leave the
        current value untouched.
        """
        def value(key, current):
            if key not in frame:
                return current
            entry = frame[key]
            if isinstance(entry, Mapping):
                return entry.get("value", current)
            return entry

        self.elevator_displacement = float(value("elevatorDisplacement", self.elevator_displacement))
        self.elevator_target_displacement = float(
            value("elevatorTargetDisplacement", self.elevator_target_displacement)
        )
        self.is_lead_motor_connected = bool(value("isLeadMotorConnected", self.is_lead_motor_connected))
        self.lead_motor_velocity = float(value("leadMotorVelocity", self.lead_motor_velocity))
        self.lead_motor_output_voltage = float(value("leadMotorOutputVoltage", self.lead_motor_output_voltage))
        self.lead_motor_supply_current = float(value("leadMotorSupplyCurrent", self.lead_motor_supply_current))
        self.is_follower_motor_connected = bool(
            value("isFollowerMotorConnected", self.is_follower_motor_connected)
        )
        self.follower_motor_output_voltage = float(
            value("followerMotorOutputVoltage", self.follower_motor_output_voltage)
        )
        self.follower_motor_supply_current = float(
            value("followerMotorSupplyCurrent", self.follower_motor_supply_current)
        )

    @classmethod
    def from_dict(cls, mechanics: ElevatorMechanics, frame: Mapping[str, Any]) -> "ElevatorTelemetry":
        telemetry = cls(mechanics)
        telemetry.update_from_dict(frame)
        return telemetry
