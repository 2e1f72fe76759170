"""
Validation helpers used when building the elevator configuration.

Each check appends to a ValidationResult instead of raising, so a single
ConfigurationError can report every problem found in the settings at once.
"""

from typing import List, Sequence
from dataclasses import dataclass
import logging
import math

logger = logging.getLogger(__name__)


@dataclass
class ValidationError:
    """Validation error details"""
    field: str
    message: str
    code: str
    severity: str = "error"  # error, warning


class ValidationResult:
    """Result of validation operation"""

    def __init__(self):
        self.errors: List[ValidationError] = []
        self.warnings: List[ValidationError] = []

    @property
    def is_valid(self) -> bool:
        """Check if validation passed (no errors)"""
        return len(self.errors) == 0

    def add_error(self, field: str, message: str, code: str):
        """Add error to result"""
        self.errors.append(ValidationError(field, message, code, "error"))

    def add_warning(self, field: str, message: str, code: str):
        """Add warning to result"""
        self.warnings.append(ValidationError(field, message, code, "warning"))

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self

    def get_error_messages(self) -> List[str]:
        """Get list of error messages"""
        return [e.message for e in self.errors]


class Validator:
    """Configuration validation helpers"""

    @staticmethod
    def validate_positive(value: float, field_name: str) -> ValidationResult:
        """
        Validate a strictly positive, finite number.

        Args:
            value: Value to check
            field_name: Field name for error messages

        Returns:
            ValidationResult with errors if any
        """
        result = ValidationResult()

        if not isinstance(value, (int, float)) or isinstance(value, bool):
            result.add_error(field_name, f"{field_name} must be a number (got {value!r})", "NOT_A_NUMBER")
        elif not math.isfinite(value):
            result.add_error(field_name, f"{field_name} must be finite (got {value})", "NOT_FINITE")
        elif value <= 0:
            result.add_error(field_name, f"{field_name} must be > 0 (got {value})", "NOT_POSITIVE")

        return result

    @staticmethod
    def validate_non_negative(value: float, field_name: str) -> ValidationResult:
        """Validate a finite number >= 0"""
        result = ValidationResult()

        if not isinstance(value, (int, float)) or isinstance(value, bool):
            result.add_error(field_name, f"{field_name} must be a number (got {value!r})", "NOT_A_NUMBER")
        elif not math.isfinite(value):
            result.add_error(field_name, f"{field_name} must be finite (got {value})", "NOT_FINITE")
        elif value < 0:
            result.add_error(field_name, f"{field_name} must be >= 0 (got {value})", "NEGATIVE")

        return result

    @staticmethod
    def validate_range(
        minimum: float,
        maximum: float,
        field_name: str
    ) -> ValidationResult:
        """Validate that minimum < maximum"""
        result = ValidationResult()

        numbers = all(
            isinstance(v, (int, float)) and not isinstance(v, bool) for v in (minimum, maximum)
        )
        if not numbers:
            result.add_error(field_name, f"{field_name} bounds must be numbers", "NOT_A_NUMBER")
        elif not (math.isfinite(minimum) and math.isfinite(maximum)):
            result.add_error(field_name, f"{field_name} bounds must be finite", "NOT_FINITE")
        elif maximum <= minimum:
            result.add_error(
                field_name,
                f"{field_name}: maximum ({maximum}) must be greater than minimum ({minimum})",
                "INVALID_RANGE"
            )

        return result

    @staticmethod
    def validate_choice(value: str, choices: Sequence[str], field_name: str) -> ValidationResult:
        """Validate value is one of the allowed choices"""
        result = ValidationResult()

        if value not in choices:
            result.add_error(
                field_name,
                f"{field_name} must be one of {', '.join(choices)} (got {value!r})",
                "INVALID_CHOICE"
            )

        return result
