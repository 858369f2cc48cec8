"""
Particle state and update rules for the swarm optimizer.

Each particle tracks a candidate position, its velocity and the best
position it has evaluated so far. Position and velocity arithmetic is done
in float64 regardless of the numeric type the objective produces.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from swarmopt.core.types import GlobalBest, Number, ObjectiveFunction, OptimizationDirection

logger = logging.getLogger(__name__)


class Particle:
    """One candidate solution and its exploration state."""

    def __init__(
        self,
        position: Sequence[Number],
        fitness: float,
        rng: Optional[np.random.Generator] = None
    ):
        self.position = np.array(position, dtype=float)
        # Velocity starts out equal to the sampled position
        self.velocity = self.position.copy()
        self.personal_best_position = self.position.copy()
        self.personal_best_fitness = float(fitness)
        self.rng = rng if rng is not None else np.random.default_rng()

    @property
    def dimensions(self) -> int:
        return self.position.shape[0]

    def evaluate_and_update_personal_best(
        self,
        objective: ObjectiveFunction,
        direction: OptimizationDirection
    ) -> float:
        """
        Evaluate the objective at the current position.

        The personal best is replaced only when the new fitness is strictly
        better. Velocity is left untouched.

        Returns:
            Fitness of the current position
        """
        fitness = float(objective.evaluate(self.position.copy()))
        if direction.is_better(fitness, self.personal_best_fitness):
            self.personal_best_fitness = fitness
            self.personal_best_position = self.position.copy()
        return fitness

    def update_velocity(
        self,
        global_best: GlobalBest,
        local_weight: float,
        global_weight: float,
        rng: Optional[np.random.Generator] = None
    ) -> None:
        """v = v + c1 * r1 * (pbest - x) + c2 * r2 * (gbest - x)"""
        rng = rng if rng is not None else self.rng
        rand1 = rng.random(self.dimensions)
        rand2 = rng.random(self.dimensions)

        cognitive = local_weight * rand1 * (self.personal_best_position - self.position)
        social = global_weight * rand2 * (global_best.position - self.position)
        self.velocity = self.velocity + cognitive + social

    def update_position(self) -> None:
        self.position = self.position + self.velocity

    def __repr__(self) -> str:
        return (
            f"Particle(personal_best_fitness={self.personal_best_fitness}, "
            f"personal_best_position={self.personal_best_position.tolist()})"
        )
