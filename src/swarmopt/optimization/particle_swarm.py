"""Particle Swarm Optimization controller.

Canonical fully-connected swarm with a fixed iteration count. Each iteration
runs three passes in strict order: every particle evaluates its position and
updates its personal best, the controller selects the global best, then every
particle updates its velocity and position against that same snapshot.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence, Union

import numpy as np

from swarmopt.core.config import SwarmConfig
from swarmopt.core.exceptions import DimensionMismatch, InvalidConfiguration
from swarmopt.core.types import (
    GlobalBest,
    Number,
    ObjectiveFunction,
    OptimizationDirection,
    OptimizationResult,
)
from .particle import Particle

logger = logging.getLogger(__name__)

IterationCallback = Callable[[int, GlobalBest], None]


def _validate_count(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise InvalidConfiguration(f"{name} must be > 0", details={name: value})
    return int(value)


def _validate_weight(name: str, value: Any) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(f"{name} must be a number", details={name: value}) from e
    if not np.isfinite(value) or value < 0:
        raise InvalidConfiguration(f"{name} must be a non-negative finite number", details={name: value})
    return value


class ParticleSwarmOptimizer:
    """Particle Swarm Optimizer."""

    def __init__(
        self,
        objective: ObjectiveFunction,
        particle_count: int,
        iteration_count: int,
        direction: Union[OptimizationDirection, str] = OptimizationDirection.MINIMIZE,
        local_weight: float = 2.0,
        global_weight: float = 2.0,
        seed: Optional[int] = None
    ):
        if objective is None:
            raise InvalidConfiguration("objective must be provided")
        for method in ("evaluate", "random_solution"):
            if not callable(getattr(objective, method, None)):
                raise InvalidConfiguration(f"objective must provide a callable {method}()")

        self.objective = objective
        self.particle_count = _validate_count("particle_count", particle_count)
        self.iteration_count = _validate_count("iteration_count", iteration_count)
        self.direction = OptimizationDirection.from_value(direction)
        self.local_weight = _validate_weight("local_weight", local_weight)
        self.global_weight = _validate_weight("global_weight", global_weight)
        self.seed = seed

        self.particles: List[Particle] = []
        self.global_best: Optional[GlobalBest] = None
        self.dimensions: Optional[int] = None
        self.evaluations = 0

        logger.info(
            f"Particle Swarm Optimizer initialized: {self.particle_count} particles, "
            f"{self.iteration_count} iterations, {self.direction.value}"
        )

    @classmethod
    def from_config(cls, objective: ObjectiveFunction, config: SwarmConfig) -> "ParticleSwarmOptimizer":
        """Create an optimizer from a SwarmConfig."""
        return cls(
            objective,
            particle_count=config.particle_count,
            iteration_count=config.iteration_count,
            direction=config.direction,
            local_weight=config.local_weight,
            global_weight=config.global_weight,
            seed=config.seed
        )

    def optimize(self, callback: Optional[IterationCallback] = None) -> OptimizationResult:
        """Run particle swarm optimization.

        Args:
            callback: Called as ``callback(iteration, global_best)`` after the
                global best has been selected in each iteration

        Returns:
            The best fitness and position found across all iterations
        """
        self._initialize_swarm()
        history = []

        for iteration in range(self.iteration_count):
            for particle in self.particles:
                particle.evaluate_and_update_personal_best(self.objective, self.direction)
                self.evaluations += 1

            self._select_global_best(iteration)
            history.append(self.global_best.fitness)

            if callback is not None:
                callback(iteration, self.global_best)

            snapshot = self.global_best
            for particle in self.particles:
                particle.update_velocity(snapshot, self.local_weight, self.global_weight)
                particle.update_position()

        result = OptimizationResult(
            fitness=self.global_best.fitness,
            position=self.global_best.position.copy(),
            direction=self.direction,
            iterations=self.iteration_count,
            evaluations=self.evaluations,
            history=history
        )

        logger.info(f"PSO optimization completed: best fitness {result.fitness}")
        return result

    def _sample(self) -> Sequence[Number]:
        solution = self.objective.random_solution()
        length = len(solution)
        if self.dimensions is None:
            self.dimensions = length
        elif length != self.dimensions:
            raise DimensionMismatch(self.dimensions, length)
        return solution

    def _evaluate(self, position: np.ndarray) -> float:
        self.evaluations += 1
        return float(self.objective.evaluate(position.copy()))

    def _initialize_swarm(self) -> None:
        self.particles = []
        self.global_best = None
        self.dimensions = None
        self.evaluations = 0

        # One independent stream per particle
        seeds = np.random.SeedSequence(self.seed).spawn(self.particle_count)

        for child_seed in seeds:
            position = np.array(self._sample(), dtype=float)
            fitness = self._evaluate(position)
            self.particles.append(Particle(position, fitness, rng=np.random.default_rng(child_seed)))

        # The initial global best is an extra sample, not one of the particles
        position = np.array(self._sample(), dtype=float)
        self.global_best = GlobalBest(fitness=self._evaluate(position), position=position)

        logger.debug(
            f"Swarm initialized in {self.dimensions} dimensions, "
            f"initial global best {self.global_best.fitness}"
        )

    def _select_global_best(self, iteration: int) -> None:
        fitnesses = [particle.personal_best_fitness for particle in self.particles]
        index = self.direction.best_index(fitnesses)
        if index is None:
            return
        best = self.particles[index]

        if self.direction.is_better(best.personal_best_fitness, self.global_best.fitness):
            self.global_best = GlobalBest(
                fitness=best.personal_best_fitness,
                position=best.personal_best_position
            )
            logger.debug(f"Iteration {iteration}: global best improved to {self.global_best.fitness}")


def optimize(
    objective: ObjectiveFunction,
    particle_count: int,
    iteration_count: int,
    direction: Union[OptimizationDirection, str] = OptimizationDirection.MINIMIZE,
    **kwargs
) -> OptimizationResult:
    """Run a particle swarm optimization and return its best solution."""
    optimizer = ParticleSwarmOptimizer(
        objective, particle_count, iteration_count, direction, **kwargs
    )
    return optimizer.optimize()
