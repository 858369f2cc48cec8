"""
Exception types raised by the swarm optimizer.
"""

import time
from typing import Dict, Any, Optional


class SwarmError(Exception):
    """Base exception for optimizer errors."""

    def __init__(
        self,
        message: str,
        error_type: str = "swarm_error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}
        self.timestamp = time.time()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "message": self.message,
            "error_type": self.error_type,
            "details": self.details,
            "timestamp": self.timestamp
        }


class InvalidConfiguration(SwarmError, ValueError):
    """Raised before any evaluation when the optimizer is misconfigured."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_type="invalid_configuration", details=details)


class DimensionMismatch(SwarmError, ValueError):
    """Raised when random_solution() changes length within one run."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"random_solution() returned {actual} dimensions, expected {expected}",
            error_type="dimension_mismatch",
            details={"expected": expected, "actual": actual}
        )
        self.expected = expected
        self.actual = actual
