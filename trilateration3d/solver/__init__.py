"""Solver façade for Gauss-Newton multilateration."""

from __future__ import annotations

import logging

from .config import get_solver_config, set_solver_config
from .gauss_newton import solve, solve_with_restarts, step, trilaterate
from .math_utils import normal_equations, solve_normal_equations
from .model import (
    DegenerateGeometryError,
    NonConvergenceError,
    SingularSystemError,
    Solution,
    SolveOptions,
    SolverConfig,
    TrilaterationError,
)
from .residuals import jacobian, residuals, sum_of_squared_residuals

logger = logging.getLogger(__name__)

if not logging.getLogger().handlers:  # pragma: no cover - depends on host application
    logging.basicConfig(level=logging.INFO)


__all__ = [
    "DegenerateGeometryError",
    "NonConvergenceError",
    "SingularSystemError",
    "Solution",
    "SolveOptions",
    "SolverConfig",
    "TrilaterationError",
    "get_solver_config",
    "jacobian",
    "normal_equations",
    "residuals",
    "set_solver_config",
    "solve",
    "solve_normal_equations",
    "solve_with_restarts",
    "step",
    "sum_of_squared_residuals",
    "trilaterate",
]
