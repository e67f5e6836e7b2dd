"""Core data structures and errors for the solver pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..geometry import Point, Range

Observations = Sequence[Range]
HistoryEntry = Tuple[Point, float]


class TrilaterationError(RuntimeError):
    """Base class for failures surfaced by the solver."""


class DegenerateGeometryError(TrilaterationError):
    """Raised when a guess coincides exactly with a station.

    The Jacobian row for that station would divide by a zero distance.
    """

    def __init__(self, index: int, station: Point):
        super().__init__(f"guess coincides with station {index} at {station}")
        self.index = index
        self.station = station


class SingularSystemError(TrilaterationError):
    """Raised when the normal-equations matrix cannot be solved reliably."""


class NonConvergenceError(TrilaterationError):
    """Raised by the restart driver when no attempt produced a usable point."""


@dataclass
class SolverConfig:
    """Process-wide knobs of the Gauss-Newton step."""

    max_condition_number: float = 1e13
    record_history: bool = True


@dataclass
class SolveOptions:
    """Stopping rules and restart settings for a single solve.

    ``max_iterations <= 0`` disables the iteration bound and a negative
    ``min_sum_of_squared_residuals`` disables the residual threshold.
    """

    max_iterations: int = 100
    min_sum_of_squared_residuals: float = 1.0
    random_seed: Optional[int] = None
    restart_attempts: int = 5


@dataclass
class Solution:
    point: Point
    iterations: int
    sum_of_squared_residuals: float
    converged: bool
    initial_guess: Point
    history: List[HistoryEntry] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    attempts: int = 1


__all__ = [
    "DegenerateGeometryError",
    "HistoryEntry",
    "NonConvergenceError",
    "Observations",
    "SingularSystemError",
    "Solution",
    "SolveOptions",
    "SolverConfig",
    "TrilaterationError",
]
