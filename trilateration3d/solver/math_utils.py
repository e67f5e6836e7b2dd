from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from ..geometry import Point
from .model import SingularSystemError

logger = logging.getLogger(__name__)


def as_vector(point: Point) -> np.ndarray:
    return point.as_array()


def as_point(vec: np.ndarray) -> Point:
    return Point.from_array(vec)


def normal_equations(jac: np.ndarray, res: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(JᵀJ, Jᵀr)`` for an ``n x 3`` Jacobian and length-``n`` residuals."""

    if jac.ndim != 2 or jac.shape[1] != 3:
        raise ValueError(f"expected an n x 3 matrix, got shape {jac.shape}")
    if res.shape != (jac.shape[0],):
        raise ValueError(
            f"residual vector of shape {res.shape} does not match {jac.shape[0]} Jacobian rows"
        )
    jac_t = jac.T
    return jac_t @ jac, jac_t @ res


def solve_normal_equations(normal: np.ndarray, rhs: np.ndarray, max_condition: float) -> np.ndarray:
    """Solve ``normal @ delta = rhs`` for the 3-element correction ``delta``."""

    if not (np.all(np.isfinite(normal)) and np.all(np.isfinite(rhs))):
        raise SingularSystemError("normal equations contain non-finite values")

    cond = float(np.linalg.cond(normal))
    if not np.isfinite(cond) or cond > max_condition:
        raise SingularSystemError(
            f"normal matrix is ill-conditioned (condition number {cond:.3e} > {max_condition:.1e})"
        )
    logger.debug("Normal matrix condition number %.3e", cond)

    try:
        return np.linalg.solve(normal, rhs)
    except np.linalg.LinAlgError as exc:
        raise SingularSystemError(f"normal matrix is singular: {exc}") from exc


__all__ = ["as_point", "as_vector", "normal_equations", "solve_normal_equations"]
