"""Core data types for swarmopt."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from .exceptions import InvalidConfiguration

Number = Union[int, float]


class OptimizationDirection(Enum):
    """Whether better fitness is numerically lesser or greater."""
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"

    def is_better(self, candidate: float, incumbent: float) -> bool:
        """Strict comparison; ties are never an improvement.

        NaN never improves on anything, and any number improves on NaN.
        """
        if np.isnan(candidate):
            return False
        if np.isnan(incumbent):
            return True
        if self is OptimizationDirection.MAXIMIZE:
            return candidate > incumbent
        return candidate < incumbent

    def best_index(self, values: Sequence[float]) -> Optional[int]:
        """Index of the extremal value ignoring NaN, lowest index on ties.

        Returns None when every value is NaN.
        """
        values = np.asarray(values, dtype=float)
        if np.all(np.isnan(values)):
            return None
        if self is OptimizationDirection.MAXIMIZE:
            return int(np.nanargmax(values))
        return int(np.nanargmin(values))

    @classmethod
    def from_value(cls, value: Union["OptimizationDirection", str]) -> "OptimizationDirection":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidConfiguration(
            f"Unknown optimization direction: {value!r}",
            details={"allowed": [member.value for member in cls]}
        )


class ObjectiveFunction(ABC):
    """
    Black-box function to optimize.

    The length of the vectors returned by random_solution() defines the
    problem dimensionality and must stay constant for one optimization run.
    """

    @abstractmethod
    def evaluate(self, position: Sequence[Number]) -> float:
        """Fitness of a single point in the problem space."""
        pass

    @abstractmethod
    def random_solution(self) -> Sequence[Number]:
        """A freshly randomized point in the problem domain."""
        pass


@dataclass(frozen=True, eq=False)
class GlobalBest:
    """Immutable snapshot of the best solution found by the swarm."""
    fitness: float
    position: np.ndarray

    def __post_init__(self):
        position = np.array(self.position, dtype=float)
        position.setflags(write=False)
        object.__setattr__(self, "fitness", float(self.fitness))
        object.__setattr__(self, "position", position)


@dataclass
class OptimizationResult:
    """Outcome of one optimization run."""
    fitness: float
    position: np.ndarray
    direction: OptimizationDirection
    iterations: int
    evaluations: int
    history: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "fitness": self.fitness,
            "position": [float(x) for x in self.position],
            "direction": self.direction.value,
            "iterations": self.iterations,
            "evaluations": self.evaluations,
            "history": list(self.history)
        }
