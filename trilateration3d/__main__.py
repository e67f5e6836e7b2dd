import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from trilateration3d import (
    SAMPLE_NAMES,
    ObservationParseError,
    Point,
    Range,
    SolveOptions,
    TrilaterationError,
    distance,
    get_sample,
    make_seeder,
    parse_observations,
    solve_with_restarts,
    sum_of_squared_residuals,
    trilaterate,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    logging.getLogger().setLevel(log_level)


def _parse_point(value: str) -> Point:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected X,Y,Z, got {value!r}")
    try:
        return Point(*(float(part) for part in parts))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid coordinate in {value!r}") from exc


def _load_observations(path: Optional[str], sample: str) -> List[Range]:
    if path is None:
        observations, expected = get_sample(sample)
        logger.info("Using built-in sample %r (expected solution %s)", sample, expected)
        return observations

    logger.info("Reading observations from %s", path)
    return parse_observations(Path(path).read_text(encoding="utf-8"))


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Locate a point in 3D space from measured ranges")
    parser.add_argument(
        "path",
        nargs="?",
        help="Observation file with one 'x y z distance' per line (default: built-in sample)",
    )
    parser.add_argument(
        "--sample",
        choices=SAMPLE_NAMES,
        default="origin",
        help="Built-in observation set used when no path is given (default: origin)",
    )
    parser.add_argument(
        "--guess",
        type=_parse_point,
        help="Initial guess X,Y,Z; disables random restarts",
    )
    parser.add_argument(
        "--seeder",
        choices=["cube", "sphere", "sobol"],
        default="sphere",
        help="Initial-guess strategy for random restarts (default: sphere)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=123,
        help="Random seed used for initial guesses (default: 123)",
    )
    parser.add_argument(
        "--restarts",
        type=int,
        default=5,
        help="Number of random restart attempts (default: 5)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=100,
        help="Iteration bound per attempt, <= 0 disables it (default: 100)",
    )
    parser.add_argument(
        "--min-ssr",
        type=float,
        default=1.0,
        help="Stop once the sum of squared residuals drops below this; negative disables it (default: 1.0)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.max_iterations <= 0 and args.min_ssr < 0:
        parser.error("at least one of --max-iterations and --min-ssr must be enabled")

    try:
        observations = _load_observations(args.path, args.sample)
    except (OSError, ObservationParseError) as exc:
        logger.error("Could not load observations: %s", exc)
        raise SystemExit(1)
    if not observations:
        logger.error("No observations to solve")
        raise SystemExit(1)

    options = SolveOptions(
        max_iterations=args.max_iterations,
        min_sum_of_squared_residuals=args.min_ssr,
        random_seed=args.seed,
        restart_attempts=args.restarts,
    )

    try:
        if args.guess is not None:
            solution = trilaterate(observations, args.guess, options)
        else:
            solution = solve_with_restarts(observations, make_seeder(args.seeder), options)
    except TrilaterationError as exc:
        logger.error("Solver failed: %s", exc)
        raise SystemExit(1)

    print("Initial guess:", solution.initial_guess)
    print("Sum of squares:", sum_of_squared_residuals(observations, solution.initial_guess))
    for idx, (guess, ssr) in enumerate(solution.history):
        print(f"\nIteration: {idx}")
        print("   New guess:", guess)
        print("   Sum of squares:", ssr)

    print("\nSolution:", solution.point)
    print("Iterations:", solution.iterations)
    print("Attempts:", solution.attempts)
    print("Converged:", solution.converged)
    print("Sum of squares:", solution.sum_of_squared_residuals)
    if args.path is None:
        _, expected = get_sample(args.sample)
        print("Distance from expected solution:", distance(expected, solution.point))

    if solution.warnings:
        print("Solver warnings:")
        for warning in solution.warnings:
            print(f"  - {warning}")


if __name__ == "__main__":
    main(sys.argv[1:])
