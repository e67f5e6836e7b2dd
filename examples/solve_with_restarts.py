"""Example: locate every built-in sample from random initial guesses."""

import numpy as np

from trilateration3d import SAMPLE_NAMES, SolveOptions, SphereSeeder, distance, get_sample, solve_with_restarts


def main() -> None:
    rng = np.random.default_rng(2020)
    options = SolveOptions(max_iterations=100, min_sum_of_squared_residuals=1.0, restart_attempts=10)
    for name in SAMPLE_NAMES:
        observations, expected = get_sample(name)
        solution = solve_with_restarts(observations, SphereSeeder(), options, rng=rng)
        print(f"{name}:")
        print(f"  solution: {solution.point}")
        print(f"  expected: {expected}")
        print(f"  error: {distance(solution.point, expected):.6f}")
        print(f"  attempts: {solution.attempts}, iterations: {solution.iterations}")
        print(f"  sum of squares: {solution.sum_of_squared_residuals:.6f}")


if __name__ == "__main__":
    main()
