"""
Unit tests for minimizer module.
"""
import numpy as np
import pytest

from pysimplex.core import MinimizationResult, SimplexConfig, ValuedVertex, Vertex
from pysimplex.fitting import rosenbrock, shifted_quadratic
from pysimplex.minimizer import Minimizer, SimplexMinimizer, SimplexState
from pysimplex.observer import HistoryObserver


def piecewise_plane(far_value, farther_value=None):
    """
    Plane f = x + 2y for y > -1, constant beyond.

    Started from (0, 0) with size 1 the initial simplex is
    (-1/3, -1/3) -> -1, (2/3, -1/3) -> 0, (-1/3, 2/3) -> 1, so vertex 2 is
    reflected to y = -4/3 (far_value) and expanded to y = -23/15
    (farther_value when given).
    """

    def f(x):
        if x[1] > -1.0:
            return x[0] + 2.0 * x[1]
        if farther_value is not None and x[1] < -1.4:
            return farther_value
        return far_value

    return f


def single_step(f, **kwargs) -> SimplexState:
    """Build the initial simplex around the origin and take one step."""
    minimizer = SimplexMinimizer(**kwargs)
    evaluate = lambda v: f(v.coords)
    state = minimizer._initialize(evaluate, Vertex([0.0, 0.0]), 1.0)
    minimizer._step(evaluate, state)
    return state


# =============================================================================
# Initial Simplex
# =============================================================================


class TestInitialSimplex:
    """Tests for initial simplex construction."""

    def test_layout(self) -> None:
        """Vertex 0 is shifted by -size/(D+1); others step +size on one axis."""
        minimizer = SimplexMinimizer()
        evaluate = lambda v: float(np.sum(v.coords))
        state = minimizer._initialize(evaluate, Vertex([1.0, 2.0, 3.0]), 0.8)

        base = np.array([0.8, 1.8, 2.8])
        assert state.size == 4
        np.testing.assert_array_almost_equal(state.vertices[0].coords, base)
        for i in range(1, 4):
            expected = base.copy()
            expected[i - 1] += 0.8
            np.testing.assert_array_almost_equal(state.vertices[i].coords, expected)

    def test_values_match_vertices(self) -> None:
        minimizer = SimplexMinimizer()
        f = shifted_quadratic([1.0, -1.0])
        state = minimizer._initialize(lambda v: f(v.coords), Vertex([0.0, 0.0]), 1.0)
        for vertex, value in zip(state.vertices, state.values):
            assert value == f(vertex.coords)

    def test_zero_dimension_rejected(self) -> None:
        minimizer = SimplexMinimizer()
        with pytest.raises(ValueError, match="at least one coordinate"):
            minimizer.minimize(lambda x: 0.0, [], 1.0)


# =============================================================================
# Worst Vertex Selection
# =============================================================================


class TestWorstSelection:
    """Tests for the cycle-avoiding worst vertex selection."""

    def test_picks_maximum(self) -> None:
        state = SimplexState(vertices=[Vertex([0.0])] * 3, values=[1.0, 5.0, 3.0])
        assert state.worst_index() == 1

    def test_skips_previous_worst(self) -> None:
        state = SimplexState(
            vertices=[Vertex([0.0])] * 3, values=[1.0, 5.0, 3.0], last_worst=1
        )
        assert state.worst_index() == 2

    def test_tie_keeps_earliest(self) -> None:
        state = SimplexState(vertices=[Vertex([0.0])] * 3, values=[2.0, 2.0, 2.0])
        assert state.worst_index() == 0
        state.last_worst = 0
        assert state.worst_index() == 1

    def test_best_index_tie_keeps_earliest(self) -> None:
        state = SimplexState(vertices=[Vertex([0.0])] * 3, values=[3.0, 1.0, 1.0])
        assert state.best_index() == 1

    def test_rank_counts_ties(self) -> None:
        state = SimplexState(vertices=[Vertex([0.0])] * 3, values=[1.0, 2.0, 3.0])
        assert state.rank(2.0) == 2
        assert state.rank(0.0) == 3
        assert state.rank(4.0) == 0

    def test_constant_objective_alternates(self) -> None:
        """A flat objective would pick index 0 forever without the exclusion."""
        minimizer = SimplexMinimizer(max_steps=20)
        result = minimizer.run(lambda x: 1.0, [0.0, 0.0], 1.0)
        assert result.info["worst_history"] == [0, 1] * 10

    def test_never_repeats_consecutively(self) -> None:
        minimizer = SimplexMinimizer(max_steps=300)
        result = minimizer.run(rosenbrock(), [-1.2, 1.0], 0.5)
        history = result.info["worst_history"]
        assert len(history) == result.n_steps
        for previous, current in zip(history, history[1:]):
            assert previous != current


# =============================================================================
# Shape Decision
# =============================================================================


class TestShapeDecision:
    """One step on a crafted 2-D objective exercises each branch."""

    def test_expansion_accepted(self) -> None:
        state = single_step(piecewise_plane(-5.0))
        assert state.moves == {"expansion": 1}
        # face center (1/6, -1/3); expansion by 1.2 from vertex 2
        np.testing.assert_array_almost_equal(
            state.vertices[2].coords, [1.0 / 6.0 + 0.6, -1.0 / 3.0 - 1.2]
        )
        assert state.values[2] == -5.0

    def test_expansion_rejected_keeps_reflection(self) -> None:
        state = single_step(piecewise_plane(-5.0, farther_value=10.0))
        assert state.moves == {"reflection": 1}
        np.testing.assert_array_almost_equal(
            state.vertices[2].coords, [2.0 / 3.0, -4.0 / 3.0]
        )
        assert state.values[2] == -5.0

    def test_reflection(self) -> None:
        """Reflected point beats half the simplex (rank 2 of 3)."""
        state = single_step(piecewise_plane(-0.5))
        assert state.moves == {"reflection": 1}
        assert state.values[2] == -0.5

    def test_contraction_toward_face(self) -> None:
        """Rank 1 of 3 pulls the worst vertex toward the face center."""
        state = single_step(piecewise_plane(0.5))
        assert state.moves == {"contraction": 1}
        expected = [1.0 / 6.0 - 0.4, -1.0 / 3.0 + 0.8]
        np.testing.assert_array_almost_equal(state.vertices[2].coords, expected)
        assert state.values[2] == pytest.approx(expected[0] + 2.0 * expected[1])

    def test_outside_contraction(self) -> None:
        """Rank 0 contracts on the far side of the face."""
        state = single_step(piecewise_plane(5.0))
        assert state.moves == {"outside_contraction": 1}
        np.testing.assert_array_almost_equal(
            state.vertices[2].coords, [1.0 / 6.0 + 0.4, -1.0 / 3.0 - 0.8]
        )
        assert state.values[2] == 5.0

    def test_one_dimension_never_contracts_outside(self) -> None:
        """For D=1 the quarter threshold is (1+2)//4 == 0."""
        minimizer = SimplexMinimizer(max_steps=200)
        result = minimizer.run(lambda x: abs(x[0] - 0.3), [0.0], 1.0)
        assert "outside_contraction" not in result.info["moves"]

    def test_replaces_only_worst(self) -> None:
        state = single_step(piecewise_plane(-0.5))
        np.testing.assert_array_almost_equal(state.vertices[0].coords, [-1 / 3, -1 / 3])
        np.testing.assert_array_almost_equal(state.vertices[1].coords, [2 / 3, -1 / 3])
        assert state.last_worst == 2


# =============================================================================
# Simplex Minimizer
# =============================================================================


class TestSimplexMinimizer:
    """Tests for the complete minimization loop."""

    def test_one_dimensional_quadratic(self) -> None:
        """f(x) = (x-3)^2 from 0 converges before the default step budget."""
        minimizer = SimplexMinimizer()
        result = minimizer.run(lambda x: (x[0] - 3.0) ** 2, [0.0], 1.0)

        assert result.converged
        assert result.n_steps < 1000
        assert result.x[0] == pytest.approx(3.0, abs=1e-4)
        assert result.fun == pytest.approx(0.0, abs=1e-8)

    def test_two_dimensional_quadratic(self) -> None:
        """f(x, y) = (x-1)^2 + (y+2)^2 from the origin with size 0.5."""
        minimizer = SimplexMinimizer()
        best = minimizer.minimize(
            lambda x: (x[0] - 1.0) ** 2 + (x[1] + 2.0) ** 2, [0.0, 0.0], 0.5
        )

        assert isinstance(best, ValuedVertex)
        np.testing.assert_allclose(best.vertex.coords, [1.0, -2.0], atol=1e-3)
        assert best.value == pytest.approx(0.0, abs=1e-6)

    def test_three_dimensional_weighted_quadratic(self) -> None:
        center = [0.5, -1.0, 2.0]
        minimizer = SimplexMinimizer(max_steps=5000)
        result = minimizer.run(shifted_quadratic(center, [1.0, 4.0, 0.5]), [0.0, 0.0, 0.0], 1.0)
        np.testing.assert_allclose(result.x, center, atol=1e-2)

    def test_result_fields(self) -> None:
        minimizer = SimplexMinimizer(max_steps=50)
        result = minimizer.run(shifted_quadratic([1.0, 1.0]), [0.0, 0.0], 1.0)

        assert isinstance(result, MinimizationResult)
        assert isinstance(result.converged, bool)
        assert isinstance(result.message, str)
        assert len(result.value_history) == result.n_steps
        assert len(result.info["simplex"]) == 3
        # D+1 initial evaluations, then one to two per step
        assert 3 + result.n_steps <= result.n_evaluations <= 3 + 2 * result.n_steps

    def test_simplex_values_stay_paired(self) -> None:
        """values[i] == f(vertices[i]) before every worst-vertex scan."""
        f = rosenbrock()
        minimizer = SimplexMinimizer()
        evaluate = lambda v: f(v.coords)
        state = minimizer._initialize(evaluate, Vertex([-1.2, 1.0]), 0.5)
        for _ in range(200):
            for vertex, value in zip(state.vertices, state.values):
                assert value == f(vertex.coords)
            minimizer._step(evaluate, state)

    def test_deterministic(self) -> None:
        minimizer = SimplexMinimizer(max_steps=400)
        f = rosenbrock()
        first = minimizer.run(f, [-1.2, 1.0], 0.5)
        second = minimizer.run(f, [-1.2, 1.0], 0.5)

        np.testing.assert_array_equal(first.x, second.x)
        assert first.fun == second.fun
        assert first.info["worst_history"] == second.info["worst_history"]

    def test_more_steps_never_worse(self) -> None:
        f = rosenbrock()
        previous = None
        for max_steps in (0, 1, 5, 20, 50, 100, 200, 400):
            value = SimplexMinimizer(max_steps=max_steps).minimize(f, [-1.2, 1.0], 0.5).value
            if previous is not None:
                assert value <= previous
            previous = value

    def test_best_value_history_non_increasing(self) -> None:
        result = SimplexMinimizer(max_steps=300).run(
            shifted_quadratic([2.0, -1.0, 0.5]), [0.0, 0.0, 0.0], 1.0
        )
        for a, b in zip(result.value_history, result.value_history[1:]):
            assert b <= a

    def test_zero_steps_returns_initial_best(self) -> None:
        calls = []

        def f(x):
            calls.append(x.copy())
            return float(np.sum(x))

        result = SimplexMinimizer(max_steps=0).run(f, [0.0, 0.0], 1.0)

        assert len(calls) == 3
        assert result.n_steps == 0
        assert not result.converged
        np.testing.assert_array_almost_equal(result.x, [-1.0 / 3.0, -1.0 / 3.0])

    def test_max_steps_reached(self) -> None:
        result = SimplexMinimizer(max_steps=5).run(rosenbrock(), [-1.2, 1.0], 0.5)
        assert not result.converged
        assert result.n_steps == 5

    def test_objective_exception_propagates(self) -> None:
        count = 0

        def f(x):
            nonlocal count
            count += 1
            if count > 10:
                raise RuntimeError("objective failed")
            return float(x[0] ** 2)

        with pytest.raises(RuntimeError, match="objective failed"):
            SimplexMinimizer().minimize(f, [1.0], 1.0)

    def test_accepts_vertex_start(self) -> None:
        best = SimplexMinimizer().minimize(lambda x: (x[0] - 3.0) ** 2, Vertex([0.0]), 1.0)
        assert best.vertex[0] == pytest.approx(3.0, abs=1e-4)

    def test_non_float_values(self) -> None:
        """Only <= is needed on values; tuples order lexicographically."""
        best = SimplexMinimizer().minimize(
            lambda x: ((x[0] - 3.0) ** 2, "tag"), [0.0], 1.0
        )
        assert best.vertex[0] == pytest.approx(3.0, abs=1e-4)
        assert best.value[1] == "tag"

    def test_config_persists_across_calls(self) -> None:
        minimizer = SimplexMinimizer(max_steps=7)
        minimizer.run(rosenbrock(), [0.0, 0.0], 1.0)
        assert minimizer.run(rosenbrock(), [0.0, 0.0], 1.0).n_steps == 7

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_steps": -1},
            {"expansion_factor": 0.9},
            {"contraction_factor": 1.5},
            {"contraction_factor": -0.5},
            {"size_tol": -1e-3},
        ],
    )
    def test_invalid_parameters(self, kwargs) -> None:
        with pytest.raises(ValueError):
            SimplexMinimizer(**kwargs)

    def test_from_config(self) -> None:
        config = SimplexConfig(
            max_steps=42, expansion_factor=1.5, contraction_factor=0.5, size_tol=1e-6
        )
        minimizer = SimplexMinimizer.from_config(config)
        assert minimizer.max_steps == 42
        assert minimizer.expansion_factor == 1.5
        assert minimizer.contraction_factor == 0.5
        assert minimizer.to_config() == config

    def test_get_name(self) -> None:
        assert "SimplexMinimizer" in SimplexMinimizer().get_name()

    def test_is_minimizer(self) -> None:
        assert isinstance(SimplexMinimizer(), Minimizer)


# =============================================================================
# Progress Callback
# =============================================================================


class TestProgressCallback:
    """Tests for progress notification."""

    def test_cadence_and_monotonic(self) -> None:
        history = HistoryObserver()
        minimizer = SimplexMinimizer(max_steps=100, size_tol=0.0)
        minimizer.set_progress_callback(5, history)

        result = minimizer.run(rosenbrock(), [-1.2, 1.0], 0.5)

        assert result.n_steps == 100
        assert len(history.history) == 20
        assert history.values == [result.value_history[i] for i in range(4, 100, 5)]
        for a, b in zip(history.values, history.values[1:]):
            assert b <= a
        assert history.finalized

    def test_plain_callable(self) -> None:
        seen = []
        minimizer = SimplexMinimizer(max_steps=10, size_tol=0.0)
        minimizer.set_progress_callback(1, seen.append)
        minimizer.run(rosenbrock(), [0.0, 0.0], 1.0)
        assert len(seen) == 10
        assert all(isinstance(s, ValuedVertex) for s in seen)

    def test_frequency_zero_drops_observer(self) -> None:
        seen = []
        minimizer = SimplexMinimizer(max_steps=10)
        minimizer.set_progress_callback(2, seen.append)
        minimizer.set_progress_callback(0, seen.append)
        assert minimizer.observer is None
        minimizer.run(rosenbrock(), [0.0, 0.0], 1.0)
        assert seen == []

    def test_replaces_previous_observer(self) -> None:
        first, second = [], []
        minimizer = SimplexMinimizer(max_steps=6, size_tol=0.0)
        minimizer.set_progress_callback(3, first.append)
        minimizer.set_progress_callback(2, second.append)
        minimizer.run(rosenbrock(), [0.0, 0.0], 1.0)
        assert first == []
        assert len(second) == 3

    def test_negative_frequency(self) -> None:
        with pytest.raises(ValueError):
            SimplexMinimizer().set_progress_callback(-1, print)

    def test_observer_exception_propagates(self) -> None:
        def observer(best):
            raise KeyError("observer failed")

        minimizer = SimplexMinimizer(max_steps=10, size_tol=0.0)
        minimizer.set_progress_callback(1, observer)
        with pytest.raises(KeyError):
            minimizer.minimize(rosenbrock(), [0.0, 0.0], 1.0)
