"""
Custom exceptions for the operations data generator.

Generation-time errors are fatal and identify the offending entity and field.
Rollup-time errors are recovered locally by the engine.
"""

from typing import Any


class OpsDataGenException(Exception):
    """Base exception for all operations data generator errors."""

    pass


class ConfigurationError(OpsDataGenException):
    """Exception raised when generation parameters are invalid or missing."""

    def __init__(
        self,
        message: str,
        entity: str | None = None,
        field: str | None = None,
        value: Any | None = None,
        validation_errors: list[str] | None = None,
    ):
        self.entity = entity
        self.field = field
        self.value = value
        self.validation_errors = validation_errors or []

        error_parts = [message]

        if entity:
            error_parts.append(f"Entity: {entity}")

        if field:
            error_parts.append(f"Field: {field}")

        if value is not None:
            error_parts.append(f"Value: {value}")

        if validation_errors:
            error_parts.extend(
                [f"Validation error: {error}" for error in validation_errors]
            )

        super().__init__(" | ".join(error_parts))


class ReferentialIntegrityError(ConfigurationError):
    """Exception raised when a child generator runs without its parent collection."""

    def __init__(self, entity: str, parent: str):
        self.parent = parent
        super().__init__(
            f"Parent collection '{parent}' must be generated before '{entity}'",
            entity=entity,
            field=f"{parent}_id",
        )


class DivisionByZeroError(OpsDataGenException):
    """Exception raised when a ratio measure has a zero denominator."""

    def __init__(self, measure: str, key: tuple | None = None):
        self.measure = measure
        self.key = key

        message = f"Zero denominator while computing '{measure}'"
        if key is not None:
            message = f"{message} for group {key}"

        super().__init__(message)


class UnknownRollupError(OpsDataGenException):
    """Exception raised when a rollup name or entity table is not recognised."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = available or []

        message = f"Unknown rollup or table: '{name}'"
        if available:
            message = f"{message}. Available: {', '.join(sorted(available))}"

        super().__init__(message)
