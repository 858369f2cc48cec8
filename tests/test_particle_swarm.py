"""
Tests for the particle swarm controller.
"""

import pytest
import numpy as np
from unittest.mock import Mock

from swarmopt import (
    DimensionMismatch,
    FunctionObjective,
    GlobalBest,
    InvalidConfiguration,
    ObjectiveFunction,
    OptimizationDirection,
    OptimizationResult,
    ParticleSwarmOptimizer,
    SwarmConfig,
    optimize,
)


def truncated_bowl(x):
    """3 + a^2 + b^2 evaluated on the integer parts of the coordinates."""
    return 3 + sum(int(v) ** 2 for v in x)


def negated_bowl(x):
    return -truncated_bowl(x)


def smooth_bowl(x):
    return 3.0 + float(np.sum(np.asarray(x, dtype=float) ** 2))


class CountingObjective(ObjectiveFunction):
    """Objective double that records every call."""

    def __init__(self, dimensions=2, seed=0):
        self.dimensions = dimensions
        self.rng = np.random.default_rng(seed)
        self.evaluate_calls = 0
        self.sample_calls = 0

    def evaluate(self, position):
        self.evaluate_calls += 1
        return smooth_bowl(position)

    def random_solution(self):
        self.sample_calls += 1
        return list(self.rng.uniform(-5, 5, self.dimensions))


@pytest.fixture
def bowl_objective():
    return FunctionObjective(truncated_bowl, 2, (-10, 10), integer=True, seed=4)


class TestConfiguration:
    """Tests for optimizer construction."""

    @pytest.mark.parametrize("particle_count", [0, -1])
    def test_invalid_particle_count(self, particle_count):
        objective = Mock(spec=ObjectiveFunction)

        with pytest.raises(InvalidConfiguration):
            ParticleSwarmOptimizer(objective, particle_count, 10)

        objective.evaluate.assert_not_called()
        objective.random_solution.assert_not_called()

    @pytest.mark.parametrize("iteration_count", [0, -5])
    def test_invalid_iteration_count(self, iteration_count):
        objective = Mock(spec=ObjectiveFunction)

        with pytest.raises(InvalidConfiguration):
            ParticleSwarmOptimizer(objective, 10, iteration_count)

        objective.evaluate.assert_not_called()
        objective.random_solution.assert_not_called()

    def test_missing_objective(self):
        with pytest.raises(InvalidConfiguration):
            ParticleSwarmOptimizer(None, 10, 10)

    def test_objective_without_required_methods(self):
        with pytest.raises(InvalidConfiguration):
            ParticleSwarmOptimizer(object(), 10, 10)

    def test_invalid_direction(self):
        with pytest.raises(InvalidConfiguration):
            ParticleSwarmOptimizer(CountingObjective(), 10, 10, direction="sideways")

    def test_negative_learning_factor(self):
        with pytest.raises(InvalidConfiguration):
            ParticleSwarmOptimizer(CountingObjective(), 10, 10, local_weight=-1.0)

    def test_invalid_configuration_is_a_value_error(self):
        with pytest.raises(ValueError):
            ParticleSwarmOptimizer(CountingObjective(), 0, 10)

    def test_default_learning_factors(self):
        optimizer = ParticleSwarmOptimizer(CountingObjective(), 10, 10)

        assert optimizer.local_weight == 2.0
        assert optimizer.global_weight == 2.0
        assert optimizer.direction == OptimizationDirection.MINIMIZE

    def test_direction_accepts_strings(self):
        optimizer = ParticleSwarmOptimizer(CountingObjective(), 10, 10, direction="MAXIMIZE")

        assert optimizer.direction == OptimizationDirection.MAXIMIZE

    def test_from_config(self):
        config = SwarmConfig(
            particle_count=7,
            iteration_count=3,
            direction="maximize",
            local_weight=1.5,
            global_weight=0.5,
            seed=9
        )

        optimizer = ParticleSwarmOptimizer.from_config(CountingObjective(), config)

        assert optimizer.particle_count == 7
        assert optimizer.iteration_count == 3
        assert optimizer.direction == OptimizationDirection.MAXIMIZE
        assert optimizer.local_weight == 1.5
        assert optimizer.global_weight == 0.5
        assert optimizer.seed == 9


class TestOptimize:
    """Tests for the optimization loop."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_converges_on_bowl(self, seed):
        """3 + a^2 + b^2 is minimized at (0, 0)."""
        objective = FunctionObjective(truncated_bowl, 2, (-10, 10), integer=True, seed=seed)
        optimizer = ParticleSwarmOptimizer(
            objective, 50, 100, OptimizationDirection.MINIMIZE, seed=seed
        )

        result = optimizer.optimize()

        assert int(result.position[0]) == 0
        assert int(result.position[1]) == 0
        assert result.fitness == 3

    def test_converges_when_maximizing_negated_bowl(self):
        objective = FunctionObjective(negated_bowl, 2, (-10, 10), integer=True, seed=5)

        result = optimize(objective, 50, 100, OptimizationDirection.MAXIMIZE, seed=5)

        assert int(result.position[0]) == 0
        assert int(result.position[1]) == 0
        assert result.fitness == -3

    def test_result_shape(self, bowl_objective):
        result = ParticleSwarmOptimizer(bowl_objective, 10, 20, seed=0).optimize()

        assert isinstance(result, OptimizationResult)
        assert result.direction == OptimizationDirection.MINIMIZE
        assert result.iterations == 20
        assert len(result.history) == 20
        assert result.position.shape == (2,)
        assert result.history[-1] == result.fitness

    def test_evaluation_count(self):
        objective = CountingObjective()
        optimizer = ParticleSwarmOptimizer(objective, 6, 4, seed=0)

        result = optimizer.optimize()

        # initial swarm + extra global best sample + one pass per iteration
        assert objective.sample_calls == 7
        assert objective.evaluate_calls == 7 + 6 * 4
        assert result.evaluations == objective.evaluate_calls

    @pytest.mark.parametrize("direction", list(OptimizationDirection))
    def test_global_best_never_regresses(self, direction):
        objective = FunctionObjective(smooth_bowl, 3, (-5, 5), seed=11)
        optimizer = ParticleSwarmOptimizer(objective, 15, 60, direction, seed=11)

        history = optimizer.optimize().history

        for previous, current in zip(history, history[1:]):
            if direction == OptimizationDirection.MINIMIZE:
                assert current <= previous
            else:
                assert current >= previous

    def test_personal_best_consistency(self):
        objective = FunctionObjective(smooth_bowl, 3, (-5, 5), seed=21)
        optimizer = ParticleSwarmOptimizer(objective, 12, 40, seed=21)

        def check(iteration, global_best):
            for particle in optimizer.particles:
                assert particle.personal_best_fitness == objective.evaluate(particle.personal_best_position)
            assert global_best.fitness == objective.evaluate(global_best.position)

        optimizer.optimize(callback=check)

        for particle in optimizer.particles:
            assert particle.personal_best_fitness == objective.evaluate(particle.personal_best_position)

    def test_dimensions_preserved(self):
        objective = FunctionObjective(smooth_bowl, 4, (-5, 5), seed=8)
        optimizer = ParticleSwarmOptimizer(objective, 10, 25, seed=8)
        seen = []

        def check(iteration, global_best):
            seen.append(iteration)
            assert global_best.position.shape == (4,)
            for particle in optimizer.particles:
                assert particle.position.shape == (4,)
                assert particle.velocity.shape == (4,)

        optimizer.optimize(callback=check)

        assert optimizer.dimensions == 4
        assert seen == list(range(25))

    def test_direction_symmetry(self):
        """Minimizing f and maximizing -f with the same seeds mirror each other."""
        minimized = optimize(
            FunctionObjective(smooth_bowl, 3, (-5, 5), seed=13), 10, 50,
            OptimizationDirection.MINIMIZE, seed=17
        )
        maximized = optimize(
            FunctionObjective(lambda x: -smooth_bowl(x), 3, (-5, 5), seed=13), 10, 50,
            OptimizationDirection.MAXIMIZE, seed=17
        )

        assert maximized.fitness == -minimized.fitness
        np.testing.assert_array_equal(maximized.position, minimized.position)

    def test_deterministic_with_fixed_seeds(self):
        def run():
            objective = FunctionObjective(smooth_bowl, 3, (-5, 5), seed=99)
            return ParticleSwarmOptimizer(objective, 10, 30, seed=42).optimize()

        first, second = run(), run()

        assert first.fitness == second.fitness
        np.testing.assert_array_equal(first.position, second.position)
        assert first.history == second.history

    def test_particles_use_independent_random_streams(self):
        objective = CountingObjective(seed=1)
        optimizer = ParticleSwarmOptimizer(objective, 5, 1, seed=3)
        optimizer.optimize()

        draws = [particle.rng.random() for particle in optimizer.particles]

        assert len(set(draws)) == len(draws)

    def test_global_best_is_a_snapshot(self, bowl_objective):
        optimizer = ParticleSwarmOptimizer(bowl_objective, 10, 10, seed=0)
        result = optimizer.optimize()
        best = optimizer.global_best.position.copy()

        for particle in optimizer.particles:
            particle.position[:] = 1000.0
            particle.personal_best_position[:] = 1000.0

        np.testing.assert_array_equal(optimizer.global_best.position, best)
        with pytest.raises(ValueError):
            optimizer.global_best.position[0] = 1.0

        result.position[0] = 123.0
        np.testing.assert_array_equal(optimizer.global_best.position, best)

    def test_initial_global_best_is_extra_sample(self):
        """A swarm that never improves returns the extra initial sample."""
        objective = Mock()
        objective.random_solution.side_effect = [[1.0], [2.0], [0.0]]
        objective.evaluate.side_effect = lambda x: 0.0 if x[0] == 0.0 else 10.0

        optimizer = ParticleSwarmOptimizer(objective, 2, 1, local_weight=0.0, global_weight=0.0)
        result = optimizer.optimize()

        assert result.fitness == 0.0
        np.testing.assert_array_equal(result.position, [0.0])

    def test_callback_receives_global_best(self, bowl_objective):
        callback = Mock()

        ParticleSwarmOptimizer(bowl_objective, 5, 3, seed=0).optimize(callback=callback)

        assert callback.call_count == 3
        iteration, global_best = callback.call_args[0]
        assert iteration == 2
        assert isinstance(global_best, GlobalBest)


class TestGlobalBestSelection:
    """Tests for tie-breaking and selection."""

    def test_best_index_breaks_ties_by_lowest_index(self):
        assert OptimizationDirection.MINIMIZE.best_index([3.0, 1.0, 1.0]) == 1
        assert OptimizationDirection.MAXIMIZE.best_index([1.0, 5.0, 5.0, 2.0]) == 1

    def test_first_particle_wins_tie(self):
        objective = Mock()
        objective.random_solution.side_effect = [[5.0], [-5.0], [9.0]]
        objective.evaluate.side_effect = lambda x: abs(float(x[0]))

        optimizer = ParticleSwarmOptimizer(objective, 2, 1, local_weight=0.0, global_weight=0.0)
        result = optimizer.optimize()

        assert result.fitness == 5.0
        np.testing.assert_array_equal(result.position, [5.0])

    def test_best_index_ignores_nan(self):
        assert OptimizationDirection.MINIMIZE.best_index([float("nan"), 4.0, 2.0]) == 2
        assert OptimizationDirection.MAXIMIZE.best_index([float("nan"), 4.0, 2.0]) == 1
        assert OptimizationDirection.MINIMIZE.best_index([float("nan"), float("nan")]) is None

    @pytest.mark.parametrize("direction", list(OptimizationDirection))
    def test_nan_comparisons(self, direction):
        nan = float("nan")

        assert direction.is_better(1.0, nan)
        assert not direction.is_better(nan, 1.0)
        assert not direction.is_better(nan, nan)

    def test_nan_particle_does_not_block_selection(self):
        objective = Mock()
        objective.random_solution.side_effect = [[-1.0], [1.0], [5.0]]
        objective.evaluate.side_effect = lambda x: float("nan") if x[0] < 0 else float(x[0]) ** 2

        optimizer = ParticleSwarmOptimizer(objective, 2, 1, local_weight=0.0, global_weight=0.0)
        result = optimizer.optimize()

        assert result.fitness == 1.0
        np.testing.assert_array_equal(result.position, [1.0])

    def test_nan_initial_global_best_is_replaced(self):
        objective = Mock()
        objective.random_solution.side_effect = [[3.0], [2.0], [-1.0]]
        objective.evaluate.side_effect = lambda x: float("nan") if x[0] < 0 else float(x[0]) ** 2

        optimizer = ParticleSwarmOptimizer(objective, 2, 1, local_weight=0.0, global_weight=0.0)
        result = optimizer.optimize()

        assert result.fitness == 4.0
        np.testing.assert_array_equal(result.position, [2.0])

    def test_all_nan_swarm_keeps_global_best(self):
        objective = Mock()
        objective.random_solution.side_effect = [[-1.0], [-2.0], [3.0]]
        objective.evaluate.side_effect = lambda x: float("nan") if x[0] < 0 else float(x[0]) ** 2

        optimizer = ParticleSwarmOptimizer(objective, 2, 1, local_weight=0.0, global_weight=0.0)
        result = optimizer.optimize()

        assert result.fitness == 9.0
        np.testing.assert_array_equal(result.position, [3.0])


class TestErrors:
    """Tests for error propagation."""

    def test_evaluate_error_propagates(self):
        objective = Mock()
        objective.random_solution.return_value = [1.0, 2.0]
        objective.evaluate.side_effect = RuntimeError("objective failed")

        with pytest.raises(RuntimeError, match="objective failed"):
            ParticleSwarmOptimizer(objective, 3, 3).optimize()

    def test_random_solution_error_propagates(self):
        objective = Mock()
        objective.random_solution.side_effect = KeyError("no sample")

        with pytest.raises(KeyError):
            ParticleSwarmOptimizer(objective, 3, 3).optimize()

    def test_dimension_mismatch(self):
        objective = Mock()
        objective.random_solution.side_effect = [[1.0, 2.0], [1.0, 2.0, 3.0]]
        objective.evaluate.return_value = 0.0

        with pytest.raises(DimensionMismatch) as exc_info:
            ParticleSwarmOptimizer(objective, 3, 3).optimize()

        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 3
        assert exc_info.value.to_dict()["error_type"] == "dimension_mismatch"

    def test_dimension_mismatch_on_global_best_sample(self):
        objective = Mock()
        objective.random_solution.side_effect = [[1.0], [2.0], [1.0, 2.0]]
        objective.evaluate.return_value = 0.0

        with pytest.raises(DimensionMismatch):
            ParticleSwarmOptimizer(objective, 2, 3).optimize()
