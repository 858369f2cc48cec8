"""
Objective function adapters and standard benchmark functions.

Benchmarks follow their usual textbook definitions and default search
bounds. FunctionObjective turns any plain callable into an
ObjectiveFunction by pairing it with a bounded uniform sampler.
"""

import logging
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

import numpy as np

from swarmopt.core.exceptions import InvalidConfiguration
from swarmopt.core.types import Number, ObjectiveFunction

logger = logging.getLogger(__name__)

Bounds = Union[Tuple[float, float], Sequence[Tuple[float, float]]]


def sphere(x) -> float:
    x = np.asarray(x, dtype=np.float64)
    return float(np.dot(x, x))


def bowl(x) -> float:
    """Sphere shifted up by 3; minimum 3 at the origin."""
    return 3.0 + sphere(x)


def rosenbrock(x) -> float:
    x = np.asarray(x, dtype=np.float64)
    return float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2))


def rastrigin(x) -> float:
    x = np.asarray(x, dtype=np.float64)
    n = x.size
    return float(10 * n + np.sum(x ** 2 - 10 * np.cos(2 * np.pi * x)))


def ackley(x) -> float:
    x = np.asarray(x, dtype=np.float64)
    n = x.size
    a, b, c = 20.0, 0.2, 2 * np.pi
    mean_sq = np.dot(x, x) / n
    mean_cos = np.mean(np.cos(c * x))
    return float(-a * np.exp(-b * np.sqrt(max(mean_sq, 0.0)))
                 - np.exp(mean_cos) + a + np.e)


BENCHMARKS: Dict[str, Tuple[Callable[[Sequence[Number]], float], Tuple[float, float]]] = {
    "sphere": (sphere, (-5.12, 5.12)),
    "bowl": (bowl, (-10.0, 10.0)),
    "rosenbrock": (rosenbrock, (-5.0, 10.0)),
    "rastrigin": (rastrigin, (-5.12, 5.12)),
    "ackley": (ackley, (-32.768, 32.768)),
}


class FunctionObjective(ObjectiveFunction):
    """Wraps a callable and a search box as an ObjectiveFunction."""

    def __init__(
        self,
        func: Callable[[Sequence[Number]], float],
        dimensions: int,
        bounds: Bounds,
        integer: bool = False,
        seed: Optional[int] = None
    ):
        if not callable(func):
            raise InvalidConfiguration("func must be callable")
        if isinstance(dimensions, bool) or not isinstance(dimensions, int) or dimensions <= 0:
            raise InvalidConfiguration("dimensions must be > 0", details={"dimensions": dimensions})

        self.func = func
        self.dimensions = dimensions
        self.integer = integer
        self.low, self.high = self._parse_bounds(bounds, dimensions)
        if integer and np.any(np.ceil(self.low) > np.floor(self.high)):
            raise InvalidConfiguration("integer bounds must contain at least one integer per dimension")
        self.rng = np.random.default_rng(seed)

    @staticmethod
    def _parse_bounds(bounds: Bounds, dimensions: int) -> Tuple[np.ndarray, np.ndarray]:
        try:
            box = np.asarray(bounds, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration(f"Invalid bounds: {bounds!r}") from e

        if box.shape == (2,):
            box = np.tile(box, (dimensions, 1))
        if box.shape != (dimensions, 2):
            raise InvalidConfiguration(
                f"bounds must be one (low, high) pair or {dimensions} pairs",
                details={"shape": list(box.shape)}
            )
        if np.any(box[:, 0] >= box[:, 1]) or not np.all(np.isfinite(box)):
            raise InvalidConfiguration("each bound must satisfy low < high")
        return box[:, 0], box[:, 1]

    def evaluate(self, position: Sequence[Number]) -> float:
        return float(self.func(position))

    def random_solution(self) -> list:
        if self.integer:
            low = np.ceil(self.low).astype(np.int64)
            high = np.floor(self.high).astype(np.int64)
            return [int(v) for v in self.rng.integers(low, high, endpoint=True)]
        return [float(v) for v in self.rng.uniform(self.low, self.high)]


def create_benchmark(
    name: str,
    dimensions: int = 2,
    bounds: Optional[Bounds] = None,
    integer: bool = False,
    seed: Optional[int] = None
) -> FunctionObjective:
    """Build a FunctionObjective for one of the registered benchmarks."""
    try:
        func, default_bounds = BENCHMARKS[name.lower()]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown benchmark function: {name}",
            details={"available": sorted(BENCHMARKS)}
        ) from None

    logger.debug(f"Created benchmark objective {name} in {dimensions} dimensions")
    return FunctionObjective(
        func,
        dimensions,
        bounds if bounds is not None else default_bounds,
        integer=integer,
        seed=seed
    )
