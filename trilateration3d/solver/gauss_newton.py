from __future__ import annotations

import logging
import math
from typing import List, Optional

import numpy as np

from ..geometry import Point
from ..logging_utils import apply_debug_logging
from ..seeders import BaseSeeder
from .config import resolve_solver_config
from .math_utils import as_point, as_vector, normal_equations, solve_normal_equations
from .model import (
    DegenerateGeometryError,
    HistoryEntry,
    NonConvergenceError,
    Observations,
    SingularSystemError,
    Solution,
    SolveOptions,
    SolverConfig,
)
from .residuals import jacobian, residuals, sum_of_squared_residuals

logger = logging.getLogger(__name__)

_MIN_OBSERVATIONS = 3


def step(observations: Observations, guess: Point, *, config: Optional[SolverConfig] = None) -> Point:
    """Run one Gauss-Newton iteration and return the next guess.

    Solves ``(JᵀJ) delta = Jᵀr`` and returns ``guess + delta``.
    """

    cfg = resolve_solver_config(config)
    if len(observations) < _MIN_OBSERVATIONS:
        raise SingularSystemError(
            f"at least {_MIN_OBSERVATIONS} observations are required, got {len(observations)}"
        )

    jac = jacobian(observations, guess)
    res = residuals(observations, guess)
    normal, rhs = normal_equations(jac, res)
    delta = solve_normal_equations(normal, rhs, cfg.max_condition_number)
    return as_point(as_vector(guess) + delta)


def _should_stop(
    observations: Observations,
    guess: Point,
    iteration: int,
    max_iterations: int,
    min_sum_of_squared_residuals: float,
) -> bool:
    if max_iterations > 0 and iteration == max_iterations:
        return True
    if min_sum_of_squared_residuals >= 0:
        return sum_of_squared_residuals(observations, guess) < min_sum_of_squared_residuals
    return False


def _warn_if_unbounded(max_iterations: int, min_sum_of_squared_residuals: float) -> None:
    if max_iterations <= 0 and min_sum_of_squared_residuals < 0:
        logger.warning(
            "Both stopping rules are disabled (max_iterations=%d, min_sum_of_squared_residuals=%s); "
            "the solver will not terminate on its own",
            max_iterations,
            min_sum_of_squared_residuals,
        )


def solve(
    observations: Observations,
    initial_guess: Point,
    max_iterations: int,
    min_sum_of_squared_residuals: float,
) -> Point:
    """Iterate :func:`step` from ``initial_guess`` until a stopping rule fires.

    Rules are checked after each step, so at least one step always runs.
    """

    _warn_if_unbounded(max_iterations, min_sum_of_squared_residuals)
    guess = initial_guess
    iteration = 0
    while True:
        guess = step(observations, guess)
        iteration += 1
        if _should_stop(observations, guess, iteration, max_iterations, min_sum_of_squared_residuals):
            break
    logger.info("Solved after %d iteration(s)", iteration)
    return guess


def trilaterate(
    observations: Observations,
    initial_guess: Point,
    options: SolveOptions = SolveOptions(),
    *,
    config: Optional[SolverConfig] = None,
) -> Solution:
    """Run the same loop as :func:`solve` and report how it went."""

    cfg = resolve_solver_config(config)
    max_iterations = options.max_iterations
    threshold = options.min_sum_of_squared_residuals
    _warn_if_unbounded(max_iterations, threshold)

    logger.info(
        "Trilaterating %d observation(s) from %s (max_iterations=%d, threshold=%s)",
        len(observations),
        initial_guess,
        max_iterations,
        threshold,
    )

    history: List[HistoryEntry] = []
    guess = initial_guess
    iteration = 0
    while True:
        guess = step(observations, guess, config=cfg)
        iteration += 1
        ssr = sum_of_squared_residuals(observations, guess)
        if cfg.record_history:
            history.append((guess, ssr))
        logger.debug("Iteration %d: guess=%s ssr=%.6g", iteration, guess, ssr)
        if max_iterations > 0 and iteration == max_iterations:
            break
        if threshold >= 0 and ssr < threshold:
            break

    # without a threshold, reaching the iteration bound is the only stopping rule
    converged = threshold < 0 or ssr < threshold
    warnings: List[str] = []
    if not converged:
        warnings.append(
            f"stopped after {iteration} iteration(s) with sum of squared residuals {ssr:.3e} "
            f"(threshold {threshold:.3e})"
        )
    logger.info("Finished after %d iteration(s): converged=%s ssr=%.6g", iteration, converged, ssr)

    return Solution(
        point=guess,
        iterations=iteration,
        sum_of_squared_residuals=ssr,
        converged=converged,
        initial_guess=initial_guess,
        history=history,
        warnings=warnings,
    )


def _solution_score(solution: Solution) -> tuple:
    ssr = solution.sum_of_squared_residuals
    return (0 if solution.converged else 1, ssr if math.isfinite(ssr) else math.inf)


def solve_with_restarts(
    observations: Observations,
    seeder: BaseSeeder,
    options: SolveOptions = SolveOptions(),
    *,
    rng: Optional[np.random.Generator] = None,
    config: Optional[SolverConfig] = None,
) -> Solution:
    """Retry :func:`trilaterate` from seeder-provided guesses.

    Returns the first converged attempt, otherwise the attempt with the lowest
    finite sum of squared residuals. With the threshold disabled every attempt
    runs and the lowest sum of squared residuals wins. Singular or degenerate
    attempts are recorded as warnings and skipped.
    """

    if rng is None:
        rng = np.random.default_rng(options.random_seed)
    attempts = max(1, options.restart_attempts)
    threshold_enabled = options.min_sum_of_squared_residuals >= 0
    warnings: List[str] = []
    best: Optional[Solution] = None

    for attempt in range(attempts):
        try:
            guess = seeder.seed(observations, rng, attempt)
        except ValueError as exc:
            raise NonConvergenceError(f"could not seed attempt {attempt + 1}: {exc}") from exc
        logger.debug("Restart attempt %d from %s", attempt, guess)
        try:
            candidate = trilaterate(observations, guess, options, config=config)
        except (SingularSystemError, DegenerateGeometryError) as exc:
            warnings.append(f"attempt {attempt + 1} failed: {exc}")
            continue

        if not math.isfinite(candidate.sum_of_squared_residuals):
            warnings.append(f"attempt {attempt + 1} diverged to a non-finite guess")
            continue
        if best is None or _solution_score(candidate) < _solution_score(best):
            best = candidate
        if not threshold_enabled:
            continue
        if candidate.converged:
            break
        warnings.append(
            f"attempt {attempt + 1} did not converge "
            f"(sum of squared residuals {candidate.sum_of_squared_residuals:.3e})"
        )

    if best is None:
        raise NonConvergenceError(f"no usable solution after {attempts} attempt(s): {'; '.join(warnings)}")

    best.warnings = warnings + [w for w in best.warnings if w not in warnings]
    best.attempts = attempt + 1
    return best


apply_debug_logging(globals(), logger=logger)


__all__ = ["solve", "solve_with_restarts", "step", "trilaterate"]
