import numpy as np
import pytest
from scipy.optimize import least_squares

import trilateration3d.solver.gauss_newton as gauss_newton
from trilateration3d import Point, Range, distance, get_sample
from trilateration3d.solver import (
    DegenerateGeometryError,
    SingularSystemError,
    SolveOptions,
    SolverConfig,
    get_solver_config,
    residuals,
    set_solver_config,
    solve,
    step,
    sum_of_squared_residuals,
    trilaterate,
)

STATIC_GUESS = Point(20000, -30000, 90000)


def _exact_observations(target: Point):
    stations = [Point(0, 0, 0), Point(10, 0, 0), Point(0, 10, 0), Point(0, 0, 10), Point(7, 7, 7)]
    return [Range(s, distance(s, target)) for s in stations]


def _counting_step(monkeypatch):
    calls = []
    original = gauss_newton.step

    def wrapper(observations, guess, **kwargs):
        calls.append(guess)
        return original(observations, guess, **kwargs)

    monkeypatch.setattr(gauss_newton, "step", wrapper)
    return calls


def test_step_is_identity_at_exact_solution():
    target = Point(1.0, 2.0, 3.0)
    observations = _exact_observations(target)

    assert sum_of_squared_residuals(observations, target) == 0.0
    assert step(observations, target) == target


def test_step_reduces_sum_of_squares_near_solution():
    target = Point(1.0, 2.0, 3.0)
    observations = _exact_observations(target)
    guess = Point(1.5, 1.5, 3.5)

    new_guess = step(observations, guess)

    assert sum_of_squared_residuals(observations, new_guess) < sum_of_squared_residuals(observations, guess)
    assert distance(new_guess, target) < distance(guess, target)


def test_step_iterations_from_static_guess():
    observations, _ = get_sample("origin")
    guess = STATIC_GUESS
    for _ in range(20):
        guess = step(observations, guess)

    assert sum_of_squared_residuals(observations, guess) <= 1.0


@pytest.mark.parametrize("sample", ["origin", "far"])
def test_solve_converges_from_static_guess(sample):
    observations, expected = get_sample(sample)

    result = solve(observations, STATIC_GUESS, 100, 1.0)

    assert sum_of_squared_residuals(observations, result) < 1.0
    assert distance(result, expected) < 1.0


def test_solve_runs_exactly_max_iterations_when_threshold_disabled(monkeypatch):
    observations, _ = get_sample("origin")
    calls = _counting_step(monkeypatch)

    solve(observations, STATIC_GUESS, 7, -1.0)

    assert len(calls) == 7


def test_solve_always_runs_at_least_one_step(monkeypatch):
    target = Point(1.0, 2.0, 3.0)
    observations = _exact_observations(target)
    calls = _counting_step(monkeypatch)

    result = solve(observations, target, 0, 1.0)

    assert len(calls) == 1
    assert result == target


def test_solve_stops_on_threshold_without_iteration_bound(monkeypatch):
    observations, _ = get_sample("origin")
    calls = _counting_step(monkeypatch)

    result = solve(observations, STATIC_GUESS, 0, 1.0)

    assert sum_of_squared_residuals(observations, result) < 1.0
    assert 0 < len(calls) < 100


def test_solve_iteration_bound_wins_over_threshold(monkeypatch):
    observations, _ = get_sample("origin")
    calls = _counting_step(monkeypatch)

    solve(observations, STATIC_GUESS, 2, 1e-30)

    assert len(calls) == 2


def test_solve_is_deterministic():
    observations, _ = get_sample("far")

    first = solve(observations, STATIC_GUESS, 100, 1.0)
    second = solve(observations, STATIC_GUESS, 100, 1.0)

    assert first == second


def test_step_rejects_guess_on_station():
    observations, _ = get_sample("origin")

    with pytest.raises(DegenerateGeometryError):
        step(observations, observations[3].station)


def test_step_requires_three_observations():
    observations = [Range(Point(0, 0, 0), 1.0), Range(Point(5, 0, 0), 4.0)]

    with pytest.raises(SingularSystemError, match="at least 3"):
        step(observations, Point(1, 1, 1))


def test_step_rejects_collinear_geometry():
    observations = [
        Range(Point(0, 0, 0), 3.0),
        Range(Point(5, 0, 0), 2.0),
        Range(Point(-4, 0, 0), 7.0),
    ]

    with pytest.raises(SingularSystemError):
        step(observations, Point(2, 0, 0))


def test_step_honours_condition_limit_from_config():
    observations, _ = get_sample("origin")

    with pytest.raises(SingularSystemError, match="ill-conditioned"):
        step(observations, STATIC_GUESS, config=SolverConfig(max_condition_number=1.0))


def test_set_solver_config_changes_default():
    observations, _ = get_sample("origin")
    original = get_solver_config()
    try:
        set_solver_config(SolverConfig(max_condition_number=1.0))
        with pytest.raises(SingularSystemError):
            step(observations, STATIC_GUESS)
    finally:
        set_solver_config(original)

    assert step(observations, STATIC_GUESS) != STATIC_GUESS


def test_get_solver_config_returns_copy():
    config = get_solver_config()
    config.max_condition_number = 1.0

    assert get_solver_config().max_condition_number != 1.0


def test_trilaterate_reports_history_and_convergence():
    observations, expected = get_sample("origin")

    solution = trilaterate(observations, STATIC_GUESS, SolveOptions(max_iterations=100))

    assert solution.converged
    assert solution.warnings == []
    assert solution.initial_guess == STATIC_GUESS
    assert solution.sum_of_squared_residuals < 1.0
    assert distance(solution.point, expected) < 1.0
    assert len(solution.history) == solution.iterations
    assert solution.history[-1] == (solution.point, solution.sum_of_squared_residuals)
    assert solution.point == solve(observations, STATIC_GUESS, 100, 1.0)


def test_trilaterate_flags_soft_non_convergence():
    observations, _ = get_sample("origin")

    solution = trilaterate(
        observations,
        STATIC_GUESS,
        SolveOptions(max_iterations=1, min_sum_of_squared_residuals=1e-12),
    )

    assert solution.iterations == 1
    assert not solution.converged
    assert solution.warnings and "stopped after 1 iteration" in solution.warnings[0]


def test_trilaterate_runs_exact_iterations_with_threshold_disabled():
    observations, _ = get_sample("far")

    solution = trilaterate(
        observations,
        STATIC_GUESS,
        SolveOptions(max_iterations=5, min_sum_of_squared_residuals=-1.0),
    )

    assert solution.iterations == 5
    assert len(solution.history) == 5
    assert solution.converged


def test_trilaterate_skips_history_when_disabled():
    observations, _ = get_sample("origin")

    solution = trilaterate(observations, STATIC_GUESS, config=SolverConfig(record_history=False))

    assert solution.history == []
    assert solution.iterations > 0


def test_converged_point_matches_scipy_least_squares():
    observations, _ = get_sample("far")
    solution = trilaterate(
        observations,
        STATIC_GUESS,
        SolveOptions(max_iterations=50, min_sum_of_squared_residuals=-1.0),
    )

    def fun(vec: np.ndarray) -> np.ndarray:
        return residuals(observations, Point.from_array(vec))

    start = solution.point.as_array() + np.array([5.0, -5.0, 5.0])
    reference = least_squares(fun, start, method="lm", xtol=1e-12, ftol=1e-12, gtol=1e-12)

    assert np.allclose(solution.point.as_array(), reference.x, atol=1e-2)
    assert solution.sum_of_squared_residuals == pytest.approx(float(np.sum(reference.fun**2)), abs=1e-6)
