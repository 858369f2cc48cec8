"""
swarmopt - Particle Swarm Optimization
======================================

Gradient-free search for the input vector that minimizes or maximizes a
black-box scalar objective, using the canonical fixed-iteration,
fully-connected particle swarm.

Example Usage:
    from swarmopt import FunctionObjective, ParticleSwarmOptimizer, OptimizationDirection

    objective = FunctionObjective(lambda x: 3 + x[0] ** 2 + x[1] ** 2, 2, (-10, 10), seed=1)
    optimizer = ParticleSwarmOptimizer(objective, 30, 100, OptimizationDirection.MINIMIZE, seed=1)
    result = optimizer.optimize()

    print(result.fitness, result.position)
"""

import logging

from .core import (
    DimensionMismatch,
    GlobalBest,
    InvalidConfiguration,
    ObjectiveFunction,
    OptimizationDirection,
    OptimizationResult,
    SwarmConfig,
    SwarmError,
    load_config,
)
from .objectives import BENCHMARKS, FunctionObjective, create_benchmark
from .optimization import Particle, ParticleSwarmOptimizer, optimize

__version__ = "1.0.0"

__all__ = [
    # Optimizer
    "ParticleSwarmOptimizer",
    "Particle",
    "optimize",

    # Types
    "GlobalBest",
    "ObjectiveFunction",
    "OptimizationDirection",
    "OptimizationResult",

    # Objectives
    "FunctionObjective",
    "BENCHMARKS",
    "create_benchmark",

    # Configuration
    "SwarmConfig",
    "load_config",
    "configure_logging",

    # Errors
    "SwarmError",
    "InvalidConfiguration",
    "DimensionMismatch",

    "__version__",
]


def configure_logging(level="INFO", format_string=None):
    """Configure logging for swarmopt components."""
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    logging.getLogger("swarmopt").setLevel(getattr(logging, level.upper()))
