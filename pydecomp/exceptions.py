"""
PyDecomp Exception Hierarchy.

This module defines all custom exceptions used in the pydecomp package.
Every error carries a human-readable message and a ``details`` dictionary
so callers can log or inspect the offending values:
- Configuration errors (loading and validating settings)
- Geometry errors (shape matrix, dimensions, degenerate results)
- Data errors (obstacle point sets)
"""

from typing import Any, Optional, Sequence


class PyDecompError(Exception):
    """Base exception for all pydecomp errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PyDecompError):
    """Error in configuration loading or validation."""

    pass


class ConfigNotFoundError(ConfigurationError):
    """Configuration file not found."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found: {config_path}",
            details={"path": config_path},
        )


class ConfigValidationError(ConfigurationError):
    """Configuration validation failed."""

    def __init__(self, key: str, reason: str, value: Any = None):
        details = {"key": key, "reason": reason}
        if value is not None:
            details["value"] = str(value)
        super().__init__(
            f"Invalid configuration for '{key}': {reason}",
            details=details,
        )


# =============================================================================
# Geometry Errors
# =============================================================================


class GeometryError(PyDecompError):
    """Base class for geometric precondition violations."""

    pass


class DimensionMismatchError(GeometryError):
    """A vector or matrix does not match the ellipsoid dimension."""

    def __init__(self, name: str, expected: Sequence[int], actual: Sequence[int]):
        super().__init__(
            f"Shape mismatch for '{name}': expected {tuple(expected)}, got {tuple(actual)}",
            details={"name": name, "expected": tuple(expected), "actual": tuple(actual)},
        )


class UnsupportedDimensionError(GeometryError):
    """No ellipsoid type is registered for the requested dimension."""

    def __init__(self, dim: int, supported: Optional[list] = None):
        details = {"dim": dim}
        if supported:
            details["supported"] = supported
        super().__init__(
            f"Unsupported ellipsoid dimension: {dim}",
            details=details,
        )


class SingularShapeMatrixError(GeometryError):
    """Shape matrix C is singular or too ill-conditioned to invert."""

    def __init__(self, condition_number: float):
        super().__init__(
            "Ellipsoid shape matrix is not invertible",
            details={"condition_number": condition_number},
        )


class DegenerateHyperplaneError(GeometryError):
    """Tangent direction vanished, so no unit normal exists."""

    def __init__(self, point: Any):
        super().__init__(
            "Cannot derive a hyperplane at the ellipsoid center",
            details={"point": point},
        )


class InvalidSampleCountError(GeometryError):
    """Contour sample count must be a positive integer."""

    def __init__(self, num: Any):
        super().__init__(
            f"Invalid number of contour samples: {num}",
            details={"num": num},
        )


# =============================================================================
# Data Errors
# =============================================================================


class DataError(PyDecompError):
    """Base class for data-related errors."""

    pass


class EmptyObstacleSetError(DataError):
    """An operation that needs at least one obstacle point got none."""

    def __init__(self, operation: str):
        super().__init__(
            f"Obstacle set is empty in '{operation}'",
            details={"operation": operation},
        )
