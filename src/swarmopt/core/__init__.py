"""Core types, configuration and errors for swarmopt."""

from .exceptions import SwarmError, InvalidConfiguration, DimensionMismatch
from .types import (
    GlobalBest,
    ObjectiveFunction,
    OptimizationDirection,
    OptimizationResult,
)
from .config import SwarmConfig, load_config

__all__ = [
    "SwarmError",
    "InvalidConfiguration",
    "DimensionMismatch",
    "GlobalBest",
    "ObjectiveFunction",
    "OptimizationDirection",
    "OptimizationResult",
    "SwarmConfig",
    "load_config",
]
